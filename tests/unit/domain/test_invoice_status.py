"""Unit tests for invoice status lifecycle and numbering"""

import pytest

from src.domain.invoice import InvoiceStatus
from src.domain.user import User, format_invoice_number


class TestInvoiceStatusTransitions:
    """Test the status transition table"""

    @pytest.mark.parametrize(
        "source,target",
        [
            (InvoiceStatus.DRAFT, InvoiceStatus.SENT),
            (InvoiceStatus.DRAFT, InvoiceStatus.CANCELLED),
            (InvoiceStatus.SENT, InvoiceStatus.PAID),
            (InvoiceStatus.SENT, InvoiceStatus.OVERDUE),
            (InvoiceStatus.SENT, InvoiceStatus.CANCELLED),
            (InvoiceStatus.OVERDUE, InvoiceStatus.PAID),
            (InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED),
        ],
    )
    def test_allowed(self, source, target):
        assert source.can_transition_to(target)

    @pytest.mark.parametrize(
        "source,target",
        [
            (InvoiceStatus.DRAFT, InvoiceStatus.PAID),
            (InvoiceStatus.SENT, InvoiceStatus.DRAFT),
            (InvoiceStatus.PAID, InvoiceStatus.SENT),
            (InvoiceStatus.PAID, InvoiceStatus.CANCELLED),
            (InvoiceStatus.CANCELLED, InvoiceStatus.DRAFT),
        ],
    )
    def test_rejected(self, source, target):
        assert not source.can_transition_to(target)

    def test_only_draft_is_editable(self):
        assert InvoiceStatus.DRAFT.is_editable
        assert not any(s.is_editable for s in InvoiceStatus if s != InvoiceStatus.DRAFT)


class TestInvoiceNumbering:
    def test_counter_is_zero_padded(self):
        assert format_invoice_number("INV", 7) == "INV-007"

    def test_counter_above_padding_width(self):
        assert format_invoice_number("FAC", 1234) == "FAC-1234"

    def test_next_invoice_number_uses_prefix_and_counter(self):
        user = User(id="u", email="a@b.test", invoice_prefix="ACME", invoice_counter=42)
        assert user.next_invoice_number() == "ACME-042"
