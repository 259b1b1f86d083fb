"""Invoice Domain Entity

Tracks invoices issued by an owner to one of their clients.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Date, ForeignKey, String, Text
from src.domain.base import BaseModel, ExactDecimal, generate_uuid, utc_now


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "DRAFT"
    SENT = "SENT"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"

    @property
    def is_editable(self) -> bool:
        """Only drafts accept changes to their fields and items"""
        return self is InvoiceStatus.DRAFT

    def can_transition_to(self, target: "InvoiceStatus") -> bool:
        return target in STATUS_TRANSITIONS[self]


STATUS_TRANSITIONS = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.SENT, InvoiceStatus.CANCELLED}),
    InvoiceStatus.SENT: frozenset(
        {InvoiceStatus.PAID, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED}
    ),
    InvoiceStatus.OVERDUE: frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED}),
    InvoiceStatus.PAID: frozenset(),
    InvoiceStatus.CANCELLED: frozenset(),
}


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing document sent by an owner to a client

    Domain Rules:
    - invoice_number is unique per owner, formatted PREFIX-NNN
    - subtotal = sum of invoice_items.subtotal
    - tax_amount = subtotal * tax_rate / 100
    - total = subtotal + tax_amount - discount_amount (may be negative)
    - Totals are computed at write time and never recomputed on read
    - Only DRAFT invoices can be edited
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_user_id', 'user_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_user_id_invoice_number', 'user_id', 'invoice_number', unique=True),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique invoice identifier (UUID)"
    )

    user_id: str = Field(
        sa_column=Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        description="Owning user"
    )

    client_id: str = Field(
        sa_column=Column(String, ForeignKey("clients.id"), nullable=False),
        description="Billed client"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Owner-scoped invoice number (e.g., INV-007)"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (DRAFT, SENT, PAID, OVERDUE, CANCELLED)"
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Issue date"
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Payment due date"
    )

    currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    subtotal: Decimal = Field(
        sa_column=Column(ExactDecimal(18, 6), nullable=False),
        description="Sum of line item subtotals"
    )

    tax_rate: Decimal = Field(
        sa_column=Column(ExactDecimal(9, 6), nullable=False),
        description="Tax percentage (0-100) applied to the subtotal"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(ExactDecimal(18, 6), nullable=False),
        description="subtotal * tax_rate / 100"
    )

    discount_amount: Decimal = Field(
        sa_column=Column(ExactDecimal(18, 6), nullable=False),
        description="Flat invoice-level discount"
    )

    total: Decimal = Field(
        sa_column=Column(ExactDecimal(18, 6), nullable=False),
        description="subtotal + tax_amount - discount_amount"
    )

    notes: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    terms: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "0d6f2c1a-3b4e-4f5a-8c9d-1e2f3a4b5c6d",
                "user_id": "5f0c6b1e-8d2a-4c1b-9f3e-2a7d4e6b8c01",
                "client_id": "9a8b7c6d-5e4f-4a3b-2c1d-0e9f8a7b6c5d",
                "invoice_number": "INV-007",
                "status": "DRAFT",
                "issue_date": "2024-03-01",
                "due_date": "2024-03-31",
                "currency": "USD",
                "subtotal": "125.000000",
                "tax_rate": "16.000000",
                "tax_amount": "20.000000",
                "discount_amount": "10.000000",
                "total": "135.000000",
            }
        }
