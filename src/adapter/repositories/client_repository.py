"""SQLAlchemy Client Repository Implementation

Implements client persistence using SQLAlchemy async session.
"""

from src.domain.base import utc_now
from typing import Optional, List
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.client_repository import ClientRepository
from src.domain.client import Client


class SqlAlchemyClientRepository(ClientRepository):
    """
    SQLAlchemy implementation of ClientRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: str, client_id: str) -> Optional[Client]:
        statement = (
            select(Client)
            .where(Client.id == client_id)
            .where(Client.user_id == user_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_user_id(self, user_id: str) -> List[Client]:
        statement = (
            select(Client)
            .where(Client.user_id == user_id)
            .order_by(Client.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_user_id(self, user_id: str) -> int:
        statement = select(func.count()).select_from(Client).where(Client.user_id == user_id)
        result = await self.session.execute(statement)
        return result.scalar_one()

    async def create(self, client: Client) -> Client:
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def update(self, client: Client) -> Client:
        client.updated_at = utc_now()
        self.session.add(client)
        await self.session.flush()
        await self.session.refresh(client)
        return client

    async def delete(self, client: Client) -> None:
        await self.session.delete(client)
        await self.session.flush()
