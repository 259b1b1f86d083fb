"""Invoice Item Domain Entity

Tracks individual line items within an invoice.
"""

from decimal import Decimal
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, String
from src.domain.base import BaseModel, ExactDecimal, generate_uuid


class InvoiceItem(BaseModel, table=True):
    """
    Invoice Item - One billable row of an invoice

    Domain Rules:
    - Each item belongs to exactly one invoice and dies with it
    - subtotal = quantity * unit_price - discount
    - order is the zero-based position, fixed at write time
    - Items are replaced as a whole set, never patched
    """

    __tablename__ = "invoice_items"
    __table_args__ = (
        Index('ix_invoice_items_invoice_id', 'invoice_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique item identifier (UUID)"
    )

    invoice_id: str = Field(
        sa_column=Column(String, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    description: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Line item description"
    )

    quantity: Decimal = Field(
        sa_column=Column(ExactDecimal(18, 6), nullable=False),
        description="Quantity (> 0)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(ExactDecimal(18, 6), nullable=False),
        description="Price per unit (>= 0)"
    )

    discount: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(ExactDecimal(18, 6), nullable=False),
        description="Flat discount applied to this line only"
    )

    subtotal: Decimal = Field(
        sa_column=Column(ExactDecimal(18, 6), nullable=False),
        description="quantity * unit_price - discount"
    )

    order: int = Field(
        sa_column=Column("order", Integer, nullable=False),
        description="Zero-based display position"
    )
