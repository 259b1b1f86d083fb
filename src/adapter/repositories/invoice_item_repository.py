"""SQLAlchemy Invoice Item Repository Implementation

Implements invoice item persistence using SQLAlchemy async session.
"""

from typing import List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice_item import InvoiceItem


class SqlAlchemyInvoiceItemRepository(InvoiceItemRepository):
    """
    SQLAlchemy implementation of InvoiceItemRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceItem]:
        """
        Retrieve all items for an invoice, ordered by position

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceItem
        """
        statement = (
            select(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id)
            .order_by(InvoiceItem.order)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create_many(self, items: List[InvoiceItem]) -> List[InvoiceItem]:
        """
        Persist a batch of items in one flush

        Args:
            items: InvoiceItem entities to persist

        Returns:
            Created items
        """
        self.session.add_all(items)
        await self.session.flush()
        return items

    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        """
        Remove every item of an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            Number of removed rows
        """
        statement = delete(InvoiceItem).where(InvoiceItem.invoice_id == invoice_id)
        result = await self.session.execute(statement)
        return result.rowcount
