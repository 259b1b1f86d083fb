"""Invoice Item Repository Interface

Defines the contract for invoice item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_item import InvoiceItem


class InvoiceItemRepository(ABC):
    """
    Repository interface for InvoiceItem persistence

    Items are written and removed as a whole set per invoice.
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[InvoiceItem]:
        """
        Retrieve all items of an invoice ordered by position

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceItem sorted by order
        """
        pass

    @abstractmethod
    async def create_many(self, items: List[InvoiceItem]) -> List[InvoiceItem]:
        """
        Persist a batch of invoice items

        Args:
            items: InvoiceItem entities, already tagged with invoice_id and order

        Returns:
            Created items
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        """
        Remove every item of an invoice

        Args:
            invoice_id: Invoice ID

        Returns:
            Number of removed items
        """
        pass
