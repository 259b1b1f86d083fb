"""CreateInvoice Use Case

Creates an invoice with its line items and advances the owner's invoice
counter, all in one transaction.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.exceptions import ValidationError
from src.domain.invoice import Invoice
from src.domain.user import format_invoice_number
from .builder import InvoiceAggregateBuilder
from .dtos import InvoiceCommandDTO, InvoiceResponseDTO
from .mappers import (
    client_not_found,
    error_from,
    persistence_failed,
    to_invoice_response,
    user_not_found,
)

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create invoice for an owner

    Business Rules:
    1. Input is validated fail-fast by the aggregate builder
    2. The client must belong to the owner
    3. Invoice number defaults to PREFIX-NNN from the owner's counter
    4. Currency defaults to the owner's default currency
    5. Invoice, items and counter increment commit together or not at all
    6. The counter is advanced before the invoice is written. Its atomic
       UPDATE takes the write lock on every backend (SQLite included), so
       concurrent creations get distinct counter values

    Flow:
    1. Build and validate the aggregate
    2. Lock owner row
    3. Verify client ownership
    4. Increment owner's invoice counter
    5. Insert invoice numbered from the reserved value
    6. Insert items tagged with invoice id and order
    7. Commit transaction
    8. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        user_repo: UserRepository,
        client_repo: ClientRepository,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        builder: InvoiceAggregateBuilder = None,
    ):
        self.uow = uow
        self.user_repo = user_repo
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.builder = builder or InvoiceAggregateBuilder()

    async def execute(self, user_id: str, command: InvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            user_id: Authenticated owner
            command: InvoiceCommandDTO with client, dates, rates and items

        Returns:
            Result[InvoiceResponseDTO]: Success with the created invoice or error
        """
        # Step 1: Validate input before touching the store
        try:
            draft = self.builder.build(command)
        except ValidationError as e:
            return Return.err(error_from(e))

        try:
            # Step 2: Lock owner row
            user = await self.user_repo.get_by_id(user_id, for_update=True)
            if not user:
                await self.uow.rollback()
                return Return.err(user_not_found(user_id))

            # Step 3: Client must be one of the owner's clients
            client = await self.client_repo.get_by_id(user_id, draft.client_id)
            if not client:
                await self.uow.rollback()
                return Return.err(client_not_found(draft.client_id))

            # Step 4: Advance counter; the UPDATE holds the write lock until commit
            counter = await self.user_repo.increment_invoice_counter(user)

            # Step 5: Insert invoice numbered from the reserved counter value
            invoice = Invoice(
                user_id=user.id,
                invoice_number=draft.invoice_number
                or format_invoice_number(user.invoice_prefix, counter - 1),
                currency=draft.currency or user.default_currency,
            )
            draft.apply_to(invoice)
            created_invoice = await self.invoice_repo.create(invoice)

            # Step 6: Insert items
            items = await self.item_repo.create_many(draft.build_items(created_invoice.id))

            # Step 7: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Created invoice {created_invoice.invoice_number} for user {user_id} "
                f"({len(items)} items, total={created_invoice.total}, next counter={counter})"
            )

            return Return.ok(to_invoice_response(created_invoice, items, client))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoice creation failed for user {user_id}: {e}")
            return Return.err(persistence_failed("Failed to create invoice", e))
