"""ChangeInvoiceStatus Use Case

Moves an invoice along its lifecycle according to the transition table.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.exceptions import InvalidState
from .dtos import ChangeStatusCommandDTO, InvoiceResponseDTO
from .mappers import error_from, invoice_not_found, persistence_failed, to_invoice_response

logger = logging.getLogger(__name__)


class ChangeInvoiceStatus:
    """
    Use Case: Change invoice status

    Allowed moves:
    - DRAFT -> SENT, CANCELLED
    - SENT -> PAID, OVERDUE, CANCELLED
    - OVERDUE -> PAID, CANCELLED
    - PAID, CANCELLED are final
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

    async def execute(
        self, user_id: str, invoice_id: str, command: ChangeStatusCommandDTO
    ) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(user_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            if not invoice.status.can_transition_to(command.status):
                return Return.err(
                    error_from(
                        InvalidState(
                            f"Cannot move invoice from {invoice.status.value} to {command.status.value}"
                        )
                    )
                )

            previous = invoice.status
            invoice.status = command.status
            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Invoice {updated.invoice_number} moved from {previous.value} to {updated.status.value}"
            )

            items = await self.item_repo.get_by_invoice_id(updated.id)
            return Return.ok(to_invoice_response(updated, items))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_failed("Failed to change invoice status", e))
