"""Request schemas for Client API"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from src.app.use_cases.clients.dtos import EMAIL_PATTERN


class ClientRequestSchema(BaseModel):
    """
    Request schema for creating or updating a client

    Used for POST /clients and PUT /clients/{client_id}.
    """

    name: str = Field(..., min_length=1, description="Client name (required, non-empty)")
    email: Optional[str] = Field(default=None, description="Billing email (optional)")
    phone: Optional[str] = None
    tax_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("Name is required")
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if v and not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email")
        return v or None
