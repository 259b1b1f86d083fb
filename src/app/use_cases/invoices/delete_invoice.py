"""DeleteInvoice Use Case

Removes an invoice and every one of its items.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from .mappers import invoice_not_found, persistence_failed

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice

    Business Rules:
    1. Only the owner can delete
    2. Items are deleted with the invoice in the same transaction
    3. The invoice counter is not touched (numbers are never reused)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo

    async def execute(self, user_id: str, invoice_id: str) -> Result[str]:
        """
        Execute invoice deletion

        Args:
            user_id: Authenticated owner
            invoice_id: Invoice to delete

        Returns:
            Result[str]: Success with the deleted invoice's ID or error
        """
        try:
            invoice = await self.invoice_repo.get_by_id(user_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            removed = await self.item_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(f"Deleted invoice {invoice.invoice_number} ({removed} items) for user {user_id}")
            return Return.ok(invoice_id)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoice deletion failed for {invoice_id}: {e}")
            return Return.err(persistence_failed("Failed to delete invoice", e))
