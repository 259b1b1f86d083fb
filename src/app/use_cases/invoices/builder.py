"""Invoice Aggregate Builder

Validates an invoice command and assembles the invoice with its ordered
items and computed totals. Pure: no repository or session access.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from src.domain.exceptions import InvalidAmount, ValidationError
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.money import invoice_totals, line_subtotal
from .dtos import InvoiceCommandDTO


@dataclass
class LineItemDraft:
    description: str
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal
    subtotal: Decimal
    order: int

    def to_entity(self, invoice_id: str) -> InvoiceItem:
        return InvoiceItem(
            invoice_id=invoice_id,
            description=self.description,
            quantity=self.quantity,
            unit_price=self.unit_price,
            discount=self.discount,
            subtotal=self.subtotal,
            order=self.order,
        )


@dataclass
class InvoiceDraft:
    """
    Validated invoice aggregate, ready to be persisted

    invoice_number and currency stay None when the caller left them to
    the owner's defaults; the persistence step fills them in.
    """

    client_id: str
    status: InvoiceStatus
    issue_date: date
    due_date: date
    tax_rate: Decimal
    discount_amount: Decimal
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    invoice_number: Optional[str] = None
    currency: Optional[str] = None
    notes: Optional[str] = None
    terms: Optional[str] = None
    items: List[LineItemDraft] = field(default_factory=list)

    def apply_to(self, invoice: Invoice) -> Invoice:
        """Copy the draft's fields and totals onto an invoice entity"""
        invoice.client_id = self.client_id
        invoice.status = self.status
        invoice.issue_date = self.issue_date
        invoice.due_date = self.due_date
        invoice.tax_rate = self.tax_rate
        invoice.discount_amount = self.discount_amount
        invoice.subtotal = self.subtotal
        invoice.tax_amount = self.tax_amount
        invoice.total = self.total
        invoice.notes = self.notes
        invoice.terms = self.terms
        if self.invoice_number:
            invoice.invoice_number = self.invoice_number
        if self.currency:
            invoice.currency = self.currency
        return invoice

    def build_items(self, invoice_id: str) -> List[InvoiceItem]:
        return [item.to_entity(invoice_id) for item in self.items]


class InvoiceAggregateBuilder:
    """
    Builds an InvoiceDraft from an InvoiceCommandDTO

    Validation is fail-fast, in this order:
    1. Structure: client, dates, currency, at least one item, descriptions
    2. Each item's arithmetic (quantity, unit price, discount)
    3. Invoice-level arithmetic (tax rate, discount amount)

    The first violation raises ValidationError with its field path.
    Any caller-supplied item subtotal is ignored and recomputed.
    """

    def build(self, command: InvoiceCommandDTO) -> InvoiceDraft:
        self._check_structure(command)

        items = []
        for index, item in enumerate(command.items):
            try:
                subtotal = line_subtotal(item.quantity, item.unit_price, item.discount)
            except InvalidAmount as e:
                raise ValidationError(f"items[{index}].{e.field}", e.message)
            items.append(
                LineItemDraft(
                    description=item.description.strip(),
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    discount=item.discount,
                    subtotal=subtotal,
                    order=index,
                )
            )

        try:
            totals = invoice_totals(
                [item.subtotal for item in items],
                command.tax_rate,
                command.discount_amount,
            )
        except InvalidAmount as e:
            raise ValidationError(e.field, e.message)

        return InvoiceDraft(
            client_id=command.client_id,
            status=command.status,
            issue_date=command.issue_date,
            due_date=command.due_date,
            tax_rate=command.tax_rate,
            discount_amount=command.discount_amount,
            subtotal=totals.subtotal,
            tax_amount=totals.tax_amount,
            total=totals.total,
            invoice_number=(command.invoice_number or "").strip() or None,
            currency=command.currency.strip().upper() if command.currency else None,
            notes=command.notes,
            terms=command.terms,
            items=items,
        )

    def _check_structure(self, command: InvoiceCommandDTO) -> None:
        if not command.client_id or not command.client_id.strip():
            raise ValidationError("client_id", "Client is required")

        if command.due_date < command.issue_date:
            raise ValidationError("due_date", "Due date cannot be before issue date")

        if command.currency is not None:
            currency = command.currency.strip()
            if len(currency) != 3 or not currency.isalpha():
                raise ValidationError("currency", "Currency must be a 3-letter code")

        if not command.items:
            raise ValidationError("items", "Invoice must have at least one item")

        for index, item in enumerate(command.items):
            if not item.description or not item.description.strip():
                raise ValidationError(
                    f"items[{index}].description", "Description is required"
                )
