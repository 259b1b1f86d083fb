"""ReportLab PDF Generation Service Implementation

Renders invoices as A4 documents using ReportLab platypus.
"""

import logging
import os
from decimal import Decimal
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from babel.core import UnknownLocaleError
from babel.numbers import format_currency, list_currencies
from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    Image,
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.client import Client
from src.domain.exceptions import RenderError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.user import User

logger = logging.getLogger(__name__)

DEFAULT_ACCENT = "#2C3E50"
WATERMARK_TEXT = "DRAFT"
WATERMARK_ALPHA = 0.1
ITEM_COL_WIDTHS = [85 * mm, 22 * mm, 30 * mm, 33 * mm]


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Layout, top to bottom:
    - Header: sender identity (left), title, number and dates (right)
    - Bill-to block
    - Line item table; the header row repeats on every page, so any
      number of items flows onto as many pages as needed
    - Right-aligned totals: subtotal, tax (with rate), discount if any, total
    - Notes and terms, each only when non-empty
    - DRAFT watermark on every page of draft invoices, drawn beneath content

    Everything that can fail (currency, locale, logo) is checked and
    every figure is formatted before the document is built; the PDF is
    assembled in memory so callers never see partial output.
    """

    def __init__(
        self,
        locale: str = "en_US",
        logo_root: Optional[str] = None,
        page_compression: Optional[int] = None,
    ):
        """
        Args:
            locale: Babel locale for number grouping and decimal marks
            logo_root: Directory that relative logo URLs are resolved against
            page_compression: Passed to ReportLab; None keeps its default
        """
        self.locale = locale
        self.logo_root = logo_root
        self.page_compression = page_compression

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
            items: Line items (sorted by order here regardless of input order)
            client: Bill-to client
            owner: Issuing user

        Returns:
            PDF document as bytes

        Raises:
            RenderError: unsupported currency or locale, no items, or a
                failure while laying out the document
        """
        self._validate(invoice, items)
        money = self._money_formatter(invoice.currency)
        ordered_items = sorted(items, key=lambda item: item.order)

        styles = self._styles(owner)
        elements = []
        elements.extend(self._header(invoice, owner, styles))
        elements.append(Spacer(1, 10 * mm))
        elements.extend(self._bill_to(client, styles))
        elements.append(Spacer(1, 8 * mm))
        elements.append(self._items_table(ordered_items, money, styles))
        elements.append(Spacer(1, 5 * mm))
        elements.append(self._totals_table(invoice, money, styles))
        elements.extend(self._footer_sections(invoice, styles))

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.invoice_number}",
            author=owner.company_name or owner.email,
            pageCompression=self.page_compression,
            invariant=1,
        )

        on_page = self._page_decorator(invoice)
        try:
            doc.build(elements, onFirstPage=on_page, onLaterPages=on_page)
        except Exception as e:
            logger.error(f"Layout of invoice {invoice.invoice_number} failed: {e}")
            raise RenderError(f"Could not lay out invoice {invoice.invoice_number}: {e}")

        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    # Validation and formatting

    def _validate(self, invoice: Invoice, items: List[InvoiceItem]) -> None:
        if not items:
            raise RenderError(f"Invoice {invoice.invoice_number} has no items")
        if not invoice.currency or invoice.currency.upper() not in list_currencies():
            raise RenderError(f"Unsupported currency: {invoice.currency!r}")

    def _money_formatter(self, currency: str):
        currency = currency.upper()
        try:
            format_currency(Decimal("0"), currency, locale=self.locale)
        except (UnknownLocaleError, ValueError) as e:
            raise RenderError(f"Unsupported locale {self.locale!r}: {e}")

        def money(amount: Decimal) -> str:
            return format_currency(amount, currency, locale=self.locale)

        return money

    @staticmethod
    def _quantity(value: Decimal) -> str:
        return f"{value:,.6f}".rstrip("0").rstrip(".")

    @staticmethod
    def _rate(value: Decimal) -> str:
        text = format(Decimal(value).normalize(), "f")
        return text

    @staticmethod
    def _text(value: Optional[str]) -> str:
        return escape(value or "").replace("\n", "<br/>")

    @staticmethod
    def _accent(owner: User):
        if owner.brand_color:
            try:
                return colors.HexColor(owner.brand_color)
            except ValueError:
                logger.warning(f"Ignoring invalid brand color {owner.brand_color!r}")
        return colors.HexColor(DEFAULT_ACCENT)

    # Document sections

    def _styles(self, owner: User) -> dict:
        base = getSampleStyleSheet()
        accent = self._accent(owner)
        return {
            "accent": accent,
            "title": ParagraphStyle(
                "InvoiceTitle",
                parent=base["Heading1"],
                fontSize=22,
                alignment=TA_RIGHT,
                textColor=accent,
                spaceAfter=4,
            ),
            "company": ParagraphStyle(
                "Company",
                parent=base["Normal"],
                fontSize=13,
                fontName="Helvetica-Bold",
                spaceAfter=2,
            ),
            "meta": ParagraphStyle(
                "Meta",
                parent=base["Normal"],
                fontSize=10,
                alignment=TA_RIGHT,
                textColor=colors.HexColor("#444444"),
            ),
            "muted": ParagraphStyle(
                "Muted",
                parent=base["Normal"],
                fontSize=10,
                textColor=colors.HexColor("#7F8C8D"),
            ),
            "normal": ParagraphStyle("NormalText", parent=base["Normal"], fontSize=10),
            "cell": ParagraphStyle("Cell", parent=base["Normal"], fontSize=9, leading=11),
            "section": ParagraphStyle(
                "Section",
                parent=base["Normal"],
                fontSize=10,
                fontName="Helvetica-Bold",
                spaceBefore=6,
                spaceAfter=3,
            ),
            "small": ParagraphStyle("Small", parent=base["Normal"], fontSize=9, leading=12),
        }

    def _logo(self, owner: User):
        if not owner.logo_url or not self.logo_root:
            return None
        path = os.path.join(self.logo_root, owner.logo_url.lstrip("/"))
        if not os.path.isfile(path):
            logger.warning(f"Logo not found at {path}, rendering without it")
            return None
        logo = Image(path)
        logo._restrictSize(40 * mm, 20 * mm)
        return logo

    def _header(self, invoice: Invoice, owner: User, styles: dict) -> list:
        sender = []
        logo = self._logo(owner)
        if logo is not None:
            sender.append(logo)
        sender.append(Paragraph(self._text(owner.company_name or owner.email), styles["company"]))
        if owner.address:
            sender.append(Paragraph(self._text(owner.address), styles["muted"]))
        locality = self._locality(owner.city, owner.state, owner.zip_code)
        if locality:
            sender.append(Paragraph(self._text(locality), styles["muted"]))
        if owner.tax_id:
            sender.append(Paragraph(f"Tax ID: {self._text(owner.tax_id)}", styles["muted"]))

        details = [
            Paragraph("INVOICE", styles["title"]),
            Paragraph(f"Invoice #: {self._text(invoice.invoice_number)}", styles["meta"]),
            Paragraph(f"Issue date: {invoice.issue_date.isoformat()}", styles["meta"]),
            Paragraph(f"Due date: {invoice.due_date.isoformat()}", styles["meta"]),
        ]

        header = Table([[sender, details]], colWidths=[95 * mm, 75 * mm])
        header.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        return [header]

    def _bill_to(self, client: Client, styles: dict) -> list:
        block = [
            Paragraph("Bill To:", styles["section"]),
            Paragraph(self._text(client.name), styles["normal"]),
        ]
        if client.address:
            block.append(Paragraph(self._text(client.address), styles["normal"]))
        locality = self._locality(client.city, client.state, client.zip_code)
        if locality:
            block.append(Paragraph(self._text(locality), styles["normal"]))
        if client.email:
            block.append(Paragraph(self._text(client.email), styles["normal"]))
        if client.tax_id:
            block.append(Paragraph(f"Tax ID: {self._text(client.tax_id)}", styles["normal"]))
        return block

    def _items_table(self, items: List[InvoiceItem], money, styles: dict) -> Table:
        rows = [["Description", "Quantity", "Unit Price", "Subtotal"]]
        for item in items:
            rows.append(
                [
                    Paragraph(self._text(item.description), styles["cell"]),
                    self._quantity(item.quantity),
                    money(item.unit_price),
                    money(item.subtotal),
                ]
            )

        table = Table(rows, colWidths=ITEM_COL_WIDTHS, repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), styles["accent"]),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (1, 0), (-1, 0), "RIGHT"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("LINEBELOW", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                    ("TOPPADDING", (0, 0), (-1, -1), 5),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        return table

    def _totals_table(self, invoice: Invoice, money, styles: dict) -> Table:
        rows = [
            ["Subtotal:", money(invoice.subtotal)],
            [f"Tax ({self._rate(invoice.tax_rate)}%):", money(invoice.tax_amount)],
        ]
        if invoice.discount_amount and invoice.discount_amount > 0:
            rows.append(["Discount:", f"-{money(invoice.discount_amount)}"])
        rows.append(["Total:", money(invoice.total)])

        last = len(rows) - 1
        table = Table(rows, colWidths=[35 * mm, 35 * mm], hAlign="RIGHT")
        table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, last - 1), colors.HexColor("#7F8C8D")),
                    ("FONTNAME", (0, last), (-1, last), "Helvetica-Bold"),
                    ("FONTSIZE", (0, last), (-1, last), 12),
                    ("LINEABOVE", (0, last), (-1, last), 1.5, styles["accent"]),
                    ("TOPPADDING", (0, last), (-1, last), 8),
                ]
            )
        )
        return table

    def _footer_sections(self, invoice: Invoice, styles: dict) -> list:
        elements = []
        for title, text in (("Notes", invoice.notes), ("Terms & Conditions", invoice.terms)):
            if text and text.strip():
                elements.append(Spacer(1, 6 * mm))
                elements.append(Paragraph(escape(title), styles["section"]))
                elements.append(Paragraph(self._text(text.strip()), styles["small"]))
        return elements

    @staticmethod
    def _locality(city: Optional[str], state: Optional[str], zip_code: Optional[str]) -> str:
        place = ", ".join(part for part in (city, state) if part)
        return " ".join(part for part in (place, zip_code) if part)

    # Page decoration

    def _page_decorator(self, invoice: Invoice):
        draft = invoice.status == InvoiceStatus.DRAFT
        number = invoice.invoice_number

        def decorate(canvas, doc):
            canvas.saveState()
            if draft:
                width, height = doc.pagesize
                canvas.setFillColor(colors.red)
                canvas.setFillAlpha(WATERMARK_ALPHA)
                canvas.setFont("Helvetica-Bold", 100)
                canvas.translate(width / 2, height / 2)
                canvas.rotate(45)
                canvas.drawCentredString(0, 0, WATERMARK_TEXT)
            canvas.restoreState()

            canvas.saveState()
            canvas.setFont("Helvetica", 8)
            canvas.setFillColor(colors.HexColor("#95A5A6"))
            canvas.drawRightString(
                doc.pagesize[0] - doc.rightMargin,
                10 * mm,
                f"{number} - Page {canvas.getPageNumber()}",
            )
            canvas.restoreState()

        return decorate
