"""Data Transfer Objects for User Profile Use Cases"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class UpdateProfileCommandDTO(BaseModel):
    """
    Command DTO for updating the owner profile

    Only fields that are set are applied.
    """

    company_name: Optional[str] = None
    tax_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    brand_color: Optional[str] = None
    invoice_prefix: Optional[str] = Field(default=None, min_length=1, max_length=10)
    default_currency: Optional[str] = Field(default=None, min_length=3, max_length=3)

    @field_validator('default_currency')
    @classmethod
    def validate_currency(cls, v):
        """Currency codes are three letters, stored upper-case"""
        if v is None:
            return v
        if not v.isalpha():
            raise ValueError("Currency must be a 3-letter code")
        return v.upper()


class ProfileResponseDTO(BaseModel):
    id: str
    email: str
    company_name: Optional[str] = None
    tax_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    brand_color: Optional[str] = None
    invoice_prefix: str
    invoice_counter: int
    default_currency: str
    next_invoice_number: str
    updated_at: datetime
