"""UpdateInvoice Use Case

Replaces the fields and the whole item set of a draft invoice.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.exceptions import InvalidState, ValidationError
from src.domain.invoice import InvoiceStatus
from .builder import InvoiceAggregateBuilder
from .dtos import InvoiceCommandDTO, InvoiceResponseDTO
from .mappers import (
    client_not_found,
    error_from,
    invoice_not_found,
    persistence_failed,
    to_invoice_response,
)

logger = logging.getLogger(__name__)


class UpdateInvoice:
    """
    Use Case: Update a draft invoice

    Business Rules:
    1. Only DRAFT invoices can be updated; anything else is INVALID_STATE
    2. Items are replaced entirely (delete all, then insert), never merged
    3. Totals are recomputed from the new items
    4. The status in the command must be DRAFT or a legal move out of DRAFT
    5. The invoice counter is not touched
    6. Last writer wins: no version check
    """

    def __init__(
        self,
        uow: UnitOfWork,
        client_repo: ClientRepository,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        builder: InvoiceAggregateBuilder = None,
    ):
        self.uow = uow
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.builder = builder or InvoiceAggregateBuilder()

    async def execute(
        self, user_id: str, invoice_id: str, command: InvoiceCommandDTO
    ) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice update

        Args:
            user_id: Authenticated owner
            invoice_id: Invoice to update
            command: Full replacement of the invoice fields and items

        Returns:
            Result[InvoiceResponseDTO]: Success with the updated invoice or error
        """
        try:
            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(user_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            # Step 2: Only drafts are editable
            if not invoice.status.is_editable:
                return Return.err(
                    error_from(
                        InvalidState(
                            f"Only draft invoices can be edited. Current status: {invoice.status.value}"
                        )
                    )
                )

            if command.status != InvoiceStatus.DRAFT and not invoice.status.can_transition_to(command.status):
                return Return.err(
                    error_from(
                        InvalidState(
                            f"Cannot move invoice from {invoice.status.value} to {command.status.value}"
                        )
                    )
                )

            # Step 3: Validate the replacement aggregate
            try:
                draft = self.builder.build(command)
            except ValidationError as e:
                return Return.err(error_from(e))

            client = await self.client_repo.get_by_id(user_id, draft.client_id)
            if not client:
                return Return.err(client_not_found(draft.client_id))

            # Step 4: Replace items
            await self.item_repo.delete_by_invoice_id(invoice.id)
            draft.apply_to(invoice)
            updated_invoice = await self.invoice_repo.update(invoice)
            items = await self.item_repo.create_many(draft.build_items(updated_invoice.id))

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Updated invoice {updated_invoice.invoice_number} for user {user_id} "
                f"({len(items)} items, total={updated_invoice.total})"
            )

            return Return.ok(to_invoice_response(updated_invoice, items, client))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoice update failed for {invoice_id}: {e}")
            return Return.err(persistence_failed("Failed to update invoice", e))
