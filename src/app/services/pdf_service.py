"""PDF Generation Service Interface

Defines the contract for rendering invoices as printable documents.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem
from src.domain.user import User


class PdfService(ABC):
    """
    Service interface for invoice document rendering

    Rendering is read-only and deterministic: the stored subtotal,
    tax_amount and total are printed verbatim, never recomputed.
    """

    content_type = "application/pdf"

    @abstractmethod
    def render_invoice(
        self,
        invoice: Invoice,
        items: List[InvoiceItem],
        client: Client,
        owner: User,
    ) -> bytes:
        """
        Render an invoice as a paginated A4 document

        Args:
            invoice: Invoice with computed totals
            items: Line items in display order
            client: Bill-to client
            owner: Issuing user (sender identity and branding)

        Returns:
            Complete document as bytes

        Raises:
            RenderError: the invoice cannot be rendered (e.g. unknown currency);
                raised before any output is produced
        """
        pass

    @staticmethod
    def filename_for(invoice: Invoice) -> str:
        """Suggested download filename for a rendered invoice"""
        return f"factura-{invoice.invoice_number}.pdf"
