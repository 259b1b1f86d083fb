"""DuplicateInvoice Use Case

Copies an existing invoice into a new draft with a fresh invoice number.
"""

import logging
from datetime import date, timedelta
from typing import Callable
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.user import format_invoice_number
from .dtos import InvoiceResponseDTO
from .mappers import invoice_not_found, persistence_failed, to_invoice_response, user_not_found

logger = logging.getLogger(__name__)

DEFAULT_DUE_DAYS = 30


class DuplicateInvoice:
    """
    Use Case: Duplicate an invoice

    Business Rules:
    1. The copy is always DRAFT
    2. issue_date is today, due_date is today + due_days (30 by default)
    3. Invoice number comes from the owner's current prefix and counter
    4. Monetary fields are copied verbatim, never recomputed
    5. Items are copied with the same fields and order
    6. Counter advances by one before the copy is written, in the same transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        user_repo: UserRepository,
        client_repo: ClientRepository,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        due_days: int = DEFAULT_DUE_DAYS,
        today: Callable[[], date] = date.today,
    ):
        self.uow = uow
        self.user_repo = user_repo
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.due_days = due_days
        self.today = today

    async def execute(self, user_id: str, invoice_id: str) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice duplication

        Args:
            user_id: Authenticated owner
            invoice_id: Source invoice

        Returns:
            Result[InvoiceResponseDTO]: Success with the new invoice or error
        """
        try:
            # Step 1: Load source invoice and its items
            source = await self.invoice_repo.get_by_id(user_id, invoice_id)
            if not source:
                return Return.err(invoice_not_found(invoice_id))
            source_items = await self.item_repo.get_by_invoice_id(source.id)

            # Step 2: Lock owner row and advance the counter before writing the copy
            user = await self.user_repo.get_by_id(user_id, for_update=True)
            if not user:
                await self.uow.rollback()
                return Return.err(user_not_found(user_id))
            counter = await self.user_repo.increment_invoice_counter(user)

            # Step 3: Insert the copy
            issue_date = self.today()
            duplicate = Invoice(
                user_id=user.id,
                client_id=source.client_id,
                invoice_number=format_invoice_number(user.invoice_prefix, counter - 1),
                status=InvoiceStatus.DRAFT,
                issue_date=issue_date,
                due_date=issue_date + timedelta(days=self.due_days),
                currency=source.currency,
                subtotal=source.subtotal,
                tax_rate=source.tax_rate,
                tax_amount=source.tax_amount,
                discount_amount=source.discount_amount,
                total=source.total,
                notes=source.notes,
                terms=source.terms,
            )
            created = await self.invoice_repo.create(duplicate)

            # Step 4: Copy items
            items = await self.item_repo.create_many(
                [
                    InvoiceItem(
                        invoice_id=created.id,
                        description=item.description,
                        quantity=item.quantity,
                        unit_price=item.unit_price,
                        discount=item.discount,
                        subtotal=item.subtotal,
                        order=item.order,
                    )
                    for item in source_items
                ]
            )

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Duplicated invoice {source.invoice_number} as {created.invoice_number} "
                f"for user {user_id}"
            )

            client = await self.client_repo.get_by_id(user_id, created.client_id)
            return Return.ok(to_invoice_response(created, items, client))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoice duplication failed for {invoice_id}: {e}")
            return Return.err(persistence_failed("Failed to duplicate invoice", e))
