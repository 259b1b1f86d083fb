"""SQLAlchemy Unit of Work

Commits or rolls back every repository write made through one AsyncSession.
"""

import logging
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    UnitOfWork bound to an AsyncSession

    Repositories sharing the session flush into the same transaction;
    commit() makes all of it durable at once.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        if self.session.in_transaction():
            logger.debug("Rolling back open transaction")
        await self.session.rollback()
