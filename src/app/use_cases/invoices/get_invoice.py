"""GetInvoice and ListInvoices Use Cases

Read-only access to an owner's invoices.
"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceResponseDTO, ListInvoicesResponseDTO
from .mappers import invoice_not_found, to_invoice_response, to_invoice_summary


class GetInvoice:
    """
    Use Case: Retrieve one invoice with its items (in order) and client
    """

    def __init__(
        self,
        client_repo: ClientRepository,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
    ):
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo

    async def execute(self, user_id: str, invoice_id: str) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(user_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            items = await self.item_repo.get_by_invoice_id(invoice.id)
            client = await self.client_repo.get_by_id(user_id, invoice.client_id)

            return Return.ok(to_invoice_response(invoice, items, client))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_FAILED",
                    message="Failed to retrieve invoice",
                    reason=str(e),
                )
            )


class ListInvoices:
    """
    Use Case: List an owner's invoices, newest first

    Each row carries the client name for display.
    """

    def __init__(self, client_repo: ClientRepository, invoice_repo: InvoiceRepository):
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[ListInvoicesResponseDTO]:
        if limit < 1 or limit > 200:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="limit must be between 1 and 200",
                    field="limit",
                )
            )
        if offset < 0:
            return Return.err(
                Error(code="VALIDATION_ERROR", message="offset cannot be negative", field="offset")
            )

        try:
            invoices = await self.invoice_repo.list_by_user_id(
                user_id, status=status, limit=limit, offset=offset
            )
            clients = await self.client_repo.list_by_user_id(user_id)
            names = {client.id: client.name for client in clients}

            return Return.ok(
                ListInvoicesResponseDTO(
                    invoices=[to_invoice_summary(inv, names.get(inv.client_id)) for inv in invoices],
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_INVOICES_FAILED",
                    message="Failed to list invoices",
                    reason=str(e),
                )
            )
