"""RenderInvoicePdf Use Case

Produces the printable document for an invoice.
"""

import asyncio
import logging
from libs.result import Result, Return, Error
from src.app.repositories.user_repository import UserRepository
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.services.pdf_service import PdfService
from src.domain.exceptions import RenderError
from .dtos import RenderedInvoiceDTO
from .mappers import client_not_found, error_from, invoice_not_found, user_not_found

logger = logging.getLogger(__name__)


class RenderInvoicePdf:
    """
    Use Case: Render invoice document

    Business Rules:
    1. Invoice must exist and belong to the owner
    2. Any status can be rendered; drafts get a DRAFT watermark
    3. Stored totals are printed as-is
    4. Rendering has no durable side effects

    Flow:
    1. Retrieve invoice, items (ordered), client and owner profile
    2. Render via PDF service in a worker thread
    3. Return bytes with filename and content type
    """

    def __init__(
        self,
        user_repo: UserRepository,
        client_repo: ClientRepository,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        pdf_service: PdfService,
    ):
        self.user_repo = user_repo
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.pdf_service = pdf_service

    async def execute(self, user_id: str, invoice_id: str) -> Result[RenderedInvoiceDTO]:
        try:
            # Step 1: Gather everything the document shows
            invoice = await self.invoice_repo.get_by_id(user_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            owner = await self.user_repo.get_by_id(user_id)
            if not owner:
                return Return.err(user_not_found(user_id))

            client = await self.client_repo.get_by_id(user_id, invoice.client_id)
            if not client:
                return Return.err(client_not_found(invoice.client_id))

            items = await self.item_repo.get_by_invoice_id(invoice.id)

            # Step 2: Render in a worker thread
            content = await asyncio.to_thread(
                self.pdf_service.render_invoice,
                invoice=invoice,
                items=items,
                client=client,
                owner=owner,
            )

            # Step 3: Build response
            return Return.ok(
                RenderedInvoiceDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    filename=self.pdf_service.filename_for(invoice),
                    content_type=self.pdf_service.content_type,
                    content=content,
                )
            )

        except RenderError as e:
            logger.error(f"Rendering invoice {invoice_id} failed: {e.message}")
            return Return.err(error_from(e))

        except Exception as e:
            return Return.err(
                Error(
                    code="RENDER_ERROR",
                    message="Failed to render invoice",
                    reason=str(e),
                )
            )
