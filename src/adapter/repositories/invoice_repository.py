"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List, Iterable
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.invoice import Invoice, InvoiceStatus


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, user_id: str, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve an owner's invoice by ID

        Args:
            user_id: Owning user
            invoice_id: Invoice ID

        Returns:
            Invoice if found, None otherwise
        """
        statement = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .where(Invoice.user_id == user_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_user_id(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[Invoice]:
        """
        Retrieve an owner's invoices, newest first

        Args:
            user_id: Owning user
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            List of invoices
        """
        statement = select(Invoice).where(Invoice.user_id == user_id)

        if status:
            statement = statement.where(Invoice.status == status)

        statement = statement.order_by(Invoice.created_at.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        """
        Delete an invoice

        Items go with it through the ON DELETE CASCADE foreign key.

        Args:
            invoice: Invoice entity to remove
        """
        await self.session.delete(invoice)
        await self.session.flush()

    def _filtered(
        self,
        statement,
        user_id: str,
        statuses: Iterable[InvoiceStatus],
        issued_from: Optional[date],
        issued_to: Optional[date],
    ):
        statement = (
            statement
            .where(Invoice.user_id == user_id)
            .where(Invoice.status.in_(list(statuses)))
        )
        if issued_from:
            statement = statement.where(Invoice.issue_date >= issued_from)
        if issued_to:
            statement = statement.where(Invoice.issue_date <= issued_to)
        return statement

    async def sum_total(
        self,
        user_id: str,
        statuses: Iterable[InvoiceStatus],
        issued_from: Optional[date] = None,
        issued_to: Optional[date] = None,
    ) -> Decimal:
        """
        Sum invoice totals for an owner

        Totals are added as Decimals after loading, so the sum is exact on
        backends that keep the column as text.

        Returns:
            Sum of totals (Decimal 0 when nothing matches)
        """
        statement = self._filtered(
            select(Invoice.total),
            user_id,
            statuses,
            issued_from,
            issued_to,
        )
        result = await self.session.execute(statement)
        return sum(result.scalars().all(), Decimal("0"))

    async def count(
        self,
        user_id: str,
        statuses: Iterable[InvoiceStatus],
        issued_from: Optional[date] = None,
        issued_to: Optional[date] = None,
    ) -> int:
        """
        Count invoices for an owner

        Returns:
            Number of matching invoices
        """
        statement = self._filtered(
            select(func.count()).select_from(Invoice),
            user_id,
            statuses,
            issued_from,
            issued_to,
        )
        result = await self.session.execute(statement)
        return result.scalar_one()
