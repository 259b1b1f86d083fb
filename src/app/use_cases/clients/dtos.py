"""Data Transfer Objects for Client Use Cases"""

import re
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ClientCommandDTO(BaseModel):
    """
    Command DTO for creating or updating a client

    Empty email strings are treated as "no email".
    """

    name: str = Field(..., description="Client name (required)")
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    tax_id: Optional[str] = Field(default=None)
    address: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None)
    state: Optional[str] = Field(default=None)
    zip_code: Optional[str] = Field(default=None)
    country: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Name must not be blank"""
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Accept empty values, otherwise require a plausible address"""
        if v is None or v == "":
            return None
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Acme Corp",
                "email": "billing@acme.test",
                "tax_id": "ACM010101ABC",
                "address": "1 Main St",
                "city": "Springfield",
            }
        }


class ClientResponseDTO(BaseModel):
    id: str
    user_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    tax_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
