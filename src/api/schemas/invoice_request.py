"""Request schemas for Invoice API

Pydantic models for decoding incoming HTTP requests. Only types are
checked here; range and consistency rules are applied by the invoice
aggregate builder so the error names the offending field.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.invoice import InvoiceStatus


class InvoiceItemRequestSchema(BaseModel):
    description: str = Field(default="", description="Line item description")
    quantity: Decimal = Field(..., description="Quantity (> 0)")
    unit_price: Decimal = Field(..., description="Unit price (>= 0)")
    discount: Decimal = Field(default=Decimal("0"), description="Line discount (>= 0)")
    subtotal: Optional[Decimal] = Field(
        default=None,
        description="Accepted for compatibility; recomputed server-side"
    )


class InvoiceRequestSchema(BaseModel):
    """
    Request schema for creating or updating an invoice

    Used for POST /invoices and PUT /invoices/{invoice_id}.
    """

    client_id: Optional[str] = Field(default=None, description="Client being billed")
    invoice_number: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Explicit number; allocated from the owner's counter when omitted"
    )
    issue_date: date = Field(..., description="Issue date (YYYY-MM-DD)")
    due_date: date = Field(..., description="Due date (YYYY-MM-DD)")
    currency: Optional[str] = Field(default=None, description="ISO 4217 code")
    tax_rate: Decimal = Field(default=Decimal("0"), description="Tax percentage (0-100)")
    discount_amount: Decimal = Field(default=Decimal("0"), description="Invoice discount (>= 0)")
    notes: Optional[str] = Field(default=None)
    terms: Optional[str] = Field(default=None)
    status: InvoiceStatus = Field(default=InvoiceStatus.DRAFT)
    items: List[InvoiceItemRequestSchema] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "9a8b7c6d-5e4f-4a3b-2c1d-0e9f8a7b6c5d",
                "issue_date": "2024-03-01",
                "due_date": "2024-03-31",
                "currency": "USD",
                "tax_rate": 16,
                "discount_amount": 10,
                "notes": "Thank you for your business",
                "items": [
                    {"description": "Design work", "quantity": 2, "unit_price": 50},
                    {"description": "Hosting", "quantity": 1, "unit_price": 30, "discount": 5},
                ],
            }
        }


class InvoiceStatusRequestSchema(BaseModel):
    """Request schema for PATCH /invoices/{invoice_id}/status"""

    status: InvoiceStatus = Field(..., description="Target status")
