"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional, List, Iterable
from src.domain.invoice import Invoice, InvoiceStatus


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    All lookups are scoped to the owning user.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str, invoice_id: str) -> Optional[Invoice]:
        """
        Retrieve an owner's invoice by ID

        Args:
            user_id: Owning user
            invoice_id: Invoice ID

        Returns:
            Invoice if found and owned by user_id, None otherwise
        """
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        """
        Delete an invoice together with its items

        Args:
            invoice: Invoice entity to remove
        """
        pass

    @abstractmethod
    async def sum_total(
        self,
        user_id: str,
        statuses: Iterable[InvoiceStatus],
        issued_from: Optional[date] = None,
        issued_to: Optional[date] = None,
    ) -> Decimal:
        """
        Sum invoice totals for an owner

        Args:
            user_id: Owning user
            statuses: Statuses to include
            issued_from: Inclusive lower bound on issue_date
            issued_to: Inclusive upper bound on issue_date

        Returns:
            Sum of totals (0 when nothing matches)
        """
        pass

    @abstractmethod
    async def count(
        self,
        user_id: str,
        statuses: Iterable[InvoiceStatus],
        issued_from: Optional[date] = None,
        issued_to: Optional[date] = None,
    ) -> int:
        """
        Count invoices for an owner

        Args:
            user_id: Owning user
            statuses: Statuses to include
            issued_from: Inclusive lower bound on issue_date
            issued_to: Inclusive upper bound on issue_date

        Returns:
            Number of matching invoices
        """
        pass
