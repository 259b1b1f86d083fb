"""Unit tests for ReportLabPdfService

Page compression is disabled so text drawn on the page can be found in
the raw document bytes.
"""

import re
import pytest
from decimal import Decimal

from src.adapter.services.pdf_service import ReportLabPdfService
from src.domain.exceptions import RenderError
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_item import InvoiceItem


@pytest.fixture
def pdf_service():
    return ReportLabPdfService(locale="en_US", page_compression=0)


def page_count(pdf: bytes) -> int:
    return len(re.findall(rb"/Type /Page[^s]", pdf))


class TestRenderInvoice:
    def test_produces_pdf(self, pdf_service, stored_invoice, stored_items, client_entity, owner):
        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert pdf.startswith(b"%PDF")
        assert page_count(pdf) == 1
        assert b"Acme Corp" in pdf
        assert b"Estudio Ana" in pdf

    def test_prints_stored_totals(self, pdf_service, stored_invoice, stored_items, client_entity, owner):
        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert b"$125.00" in pdf
        assert b"$20.00" in pdf
        assert b"-$10.00" in pdf
        assert b"$135.00" in pdf

    def test_discount_row_omitted_when_zero(
        self, pdf_service, stored_invoice, stored_items, client_entity, owner
    ):
        stored_invoice.discount_amount = Decimal("0")

        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert b"Discount:" not in pdf

    def test_draft_watermark(self, pdf_service, stored_invoice, stored_items, client_entity, owner):
        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)
        assert b"DRAFT" in pdf

    @pytest.mark.parametrize("status", [InvoiceStatus.SENT, InvoiceStatus.PAID])
    def test_no_watermark_once_issued(
        self, pdf_service, stored_invoice, stored_items, client_entity, owner, status
    ):
        stored_invoice.status = status

        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert b"DRAFT" not in pdf

    def test_many_items_span_pages(self, pdf_service, stored_invoice, client_entity, owner):
        items = [
            InvoiceItem(
                id=f"item_{i}",
                invoice_id=stored_invoice.id,
                description=f"Line {i}",
                quantity=Decimal("1"),
                unit_price=Decimal("1"),
                discount=Decimal("0"),
                subtotal=Decimal("1"),
                order=i,
            )
            for i in range(200)
        ]

        pdf = pdf_service.render_invoice(stored_invoice, items, client_entity, owner)

        assert page_count(pdf) > 1
        assert b"INV-003 - Page 2" in pdf

    def test_deterministic_output(self, pdf_service, stored_invoice, stored_items, client_entity, owner):
        first = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)
        second = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert first == second

    def test_default_compression_renders(self, stored_invoice, stored_items, client_entity, owner):
        pdf = ReportLabPdfService().render_invoice(stored_invoice, stored_items, client_entity, owner)
        assert pdf.startswith(b"%PDF")

    def test_markup_in_text_is_escaped(self, pdf_service, stored_invoice, stored_items, client_entity, owner):
        client_entity.name = "Smith & <Sons>"
        stored_invoice.notes = "Line one\nLine two"

        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert pdf.startswith(b"%PDF")

    def test_invalid_brand_color_falls_back(
        self, pdf_service, stored_invoice, stored_items, client_entity, owner
    ):
        owner.brand_color = "not-a-color"

        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert pdf.startswith(b"%PDF")

    def test_missing_logo_is_skipped(self, tmp_path, stored_invoice, stored_items, client_entity, owner):
        owner.logo_url = "/logos/missing.png"
        service = ReportLabPdfService(logo_root=str(tmp_path), page_compression=0)

        pdf = service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert pdf.startswith(b"%PDF")

    def test_notes_and_terms_sections_when_present(
        self, pdf_service, stored_invoice, stored_items, client_entity, owner
    ):
        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert b"Notes" in pdf
        assert b"Thanks" in pdf
        assert b"Terms" in pdf
        assert b"Net 30" in pdf

    @pytest.mark.parametrize("empty", [None, "", "   "])
    def test_empty_notes_and_terms_omitted(
        self, pdf_service, stored_invoice, stored_items, client_entity, owner, empty
    ):
        stored_invoice.notes = empty
        stored_invoice.terms = empty

        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert b"Notes" not in pdf
        assert b"Terms" not in pdf

    def test_only_notes_present(self, pdf_service, stored_invoice, stored_items, client_entity, owner):
        stored_invoice.terms = None

        pdf = pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

        assert b"Notes" in pdf
        assert b"Terms" not in pdf


class TestRenderErrors:
    def test_unknown_currency(self, pdf_service, stored_invoice, stored_items, client_entity, owner):
        stored_invoice.currency = "ZZZ"

        with pytest.raises(RenderError):
            pdf_service.render_invoice(stored_invoice, stored_items, client_entity, owner)

    def test_unknown_locale(self, stored_invoice, stored_items, client_entity, owner):
        service = ReportLabPdfService(locale="xx_XX")

        with pytest.raises(RenderError):
            service.render_invoice(stored_invoice, stored_items, client_entity, owner)

    def test_no_items(self, pdf_service, stored_invoice, client_entity, owner):
        with pytest.raises(RenderError):
            pdf_service.render_invoice(stored_invoice, [], client_entity, owner)


def test_filename():
    from src.domain.invoice import Invoice

    assert ReportLabPdfService.filename_for(Invoice(invoice_number="INV-007")) == "factura-INV-007.pdf"
