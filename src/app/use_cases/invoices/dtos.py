"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import InvoiceStatus


class InvoiceItemInputDTO(BaseModel):
    """
    One line item as sent by the caller

    Range checks (quantity > 0, prices >= 0) are done by the aggregate
    builder so that violations come back with a field path.
    """

    description: str = Field(
        default="",
        description="Line item description (required, non-empty)"
    )

    quantity: Decimal = Field(
        ...,
        description="Quantity (must be > 0)"
    )

    unit_price: Decimal = Field(
        ...,
        description="Price per unit (must be >= 0)"
    )

    discount: Decimal = Field(
        default=Decimal("0"),
        description="Flat discount for this line (must be >= 0)"
    )

    subtotal: Optional[Decimal] = Field(
        default=None,
        description="Ignored; the subtotal is always recomputed"
    )


class InvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating or updating an invoice

    Used as input to CreateInvoice and UpdateInvoice use cases.
    """

    client_id: Optional[str] = Field(
        default=None,
        description="Client being billed (required)"
    )

    invoice_number: Optional[str] = Field(
        default=None,
        description="Explicit invoice number; allocated from the owner's counter when omitted"
    )

    issue_date: date = Field(
        ...,
        description="Issue date"
    )

    due_date: date = Field(
        ...,
        description="Due date (must not precede issue_date)"
    )

    currency: Optional[str] = Field(
        default=None,
        description="Currency code; owner's default currency when omitted"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        description="Tax percentage (0-100)"
    )

    discount_amount: Decimal = Field(
        default=Decimal("0"),
        description="Flat invoice-level discount (>= 0)"
    )

    notes: Optional[str] = Field(default=None)
    terms: Optional[str] = Field(default=None)

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Initial status"
    )

    items: List[InvoiceItemInputDTO] = Field(
        default_factory=list,
        description="Ordered line items (at least one)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "9a8b7c6d-5e4f-4a3b-2c1d-0e9f8a7b6c5d",
                "issue_date": "2024-03-01",
                "due_date": "2024-03-31",
                "currency": "USD",
                "tax_rate": "16",
                "discount_amount": "10",
                "items": [
                    {"description": "Design work", "quantity": "2", "unit_price": "50"},
                    {"description": "Hosting", "quantity": "1", "unit_price": "30", "discount": "5"},
                ],
            }
        }


class ChangeStatusCommandDTO(BaseModel):
    """Command DTO for moving an invoice to another status"""

    status: InvoiceStatus = Field(
        ...,
        description="Target status"
    )


class InvoiceItemDTO(BaseModel):
    id: str
    description: str
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal
    subtotal: Decimal
    order: int


class ClientSummaryDTO(BaseModel):
    id: str
    name: str
    email: Optional[str] = None


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for a single invoice with its items

    Returned by create, update, duplicate, get and status change.
    """

    id: str
    user_id: str
    client_id: str
    invoice_number: str
    status: str
    issue_date: date
    due_date: date
    currency: str
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total: Decimal
    notes: Optional[str] = None
    terms: Optional[str] = None
    items: List[InvoiceItemDTO] = Field(default_factory=list)
    client: Optional[ClientSummaryDTO] = None
    created_at: datetime
    updated_at: datetime


class InvoiceSummaryDTO(BaseModel):
    """Row of an invoice listing"""

    id: str
    invoice_number: str
    client_id: str
    client_name: Optional[str] = None
    status: str
    issue_date: date
    due_date: date
    currency: str
    total: Decimal
    created_at: datetime


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceSummaryDTO]
    limit: int
    offset: int


class RenderedInvoiceDTO(BaseModel):
    """Rendered document plus download metadata"""

    invoice_id: str
    invoice_number: str
    filename: str
    content_type: str
    content: bytes
