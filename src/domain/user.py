"""User Domain Entity

Account that owns clients and invoices. Carries the invoice numbering
counter and the branding shown on rendered invoices.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Integer, String
from src.domain.base import BaseModel, generate_uuid, utc_now


def format_invoice_number(prefix: str, counter: int) -> str:
    """Format an invoice number as PREFIX-NNN (zero padded to 3 digits)"""
    return f"{prefix}-{counter:03d}"


class User(BaseModel, table=True):
    """
    User - Invoice owner

    Domain Rules:
    - invoice_counter only moves forward, one step per created/duplicated invoice
    - invoice_counter is mutated only inside the invoice persistence transaction
    - invoice_prefix is at most 10 characters
    """

    __tablename__ = "users"
    __table_args__ = (
        Index('ix_users_email', 'email', unique=True),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique user identifier (UUID)"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Account email, used as sender fallback on invoices"
    )

    company_name: Optional[str] = Field(default=None, description="Company or trade name")
    tax_id: Optional[str] = Field(default=None, description="Tax identifier")
    address: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None)
    state: Optional[str] = Field(default=None)
    zip_code: Optional[str] = Field(default=None)
    country: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    website: Optional[str] = Field(default=None)
    logo_url: Optional[str] = Field(default=None, description="Path or URL of the uploaded logo")
    brand_color: Optional[str] = Field(default=None, description="Hex color used for invoice accents")

    invoice_prefix: str = Field(
        default="INV",
        sa_column=Column(String(10), nullable=False, default="INV"),
        description="Prefix for generated invoice numbers"
    )

    invoice_counter: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False, default=1),
        description="Next sequence value for invoice numbers"
    )

    default_currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False, default="USD"),
        description="Currency applied to new invoices (ISO 4217)"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        description="Account creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last update timestamp"
    )

    def next_invoice_number(self) -> str:
        """Invoice number the next created invoice will receive"""
        return format_invoice_number(self.invoice_prefix, self.invoice_counter)

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "5f0c6b1e-8d2a-4c1b-9f3e-2a7d4e6b8c01",
                "email": "ana@example.com",
                "company_name": "Estudio Ana",
                "invoice_prefix": "INV",
                "invoice_counter": 7,
                "default_currency": "USD",
            }
        }
