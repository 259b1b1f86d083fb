"""SQLAlchemy implementation of UserRepository

Holds the invoice counter. The counter is advanced with an atomic UPDATE
before the invoice is written, which takes the write lock on every backend
and keeps concurrent creations for the same owner from sharing a value.
"""

from typing import Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.user_repository import UserRepository
from src.domain.base import utc_now
from src.domain.user import User


class SqlAlchemyUserRepository(UserRepository):
    """
    SQLAlchemy implementation of UserRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE (no-op on SQLite)
    - Counter advanced with an atomic UPDATE ... SET counter = counter + 1
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """
        Retrieve user by ID with optional row-level locking

        Args:
            user_id: User identifier
            for_update: If True, locks the row until the transaction ends

        Returns:
            User if found, None otherwise
        """
        stmt = select(User).where(User.id == user_id)

        if for_update:
            # populate_existing: a locked read must not be served from the identity map
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        user.updated_at = utc_now()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def increment_invoice_counter(self, user: User) -> int:
        """
        Advance the invoice counter by one

        The UPDATE runs before any invoice row is written; the refreshed
        value minus one is the number reserved for the caller.

        Args:
            user: Owner whose counter is advanced

        Returns:
            The new counter value
        """
        stmt = (
            update(User)
            .where(User.id == user.id)
            .values(invoice_counter=User.invoice_counter + 1, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.refresh(user)
        return user.invoice_counter
