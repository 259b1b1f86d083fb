"""Client Domain Entity

Customer billed by an owner. Referenced (not copied) by invoices, so
edits show up on later renders.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, String
from src.domain.base import BaseModel, generate_uuid, utc_now


class Client(BaseModel, table=True):
    """
    Client - Bill-to party of an invoice

    Domain Rules:
    - Each client belongs to exactly one owner
    - name is required
    """

    __tablename__ = "clients"
    __table_args__ = (
        Index('ix_clients_user_id', 'user_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique client identifier (UUID)"
    )

    user_id: str = Field(
        sa_column=Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        description="Owning user"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Client name"
    )

    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    tax_id: Optional[str] = Field(default=None, description="Client tax identifier")
    address: Optional[str] = Field(default=None)
    city: Optional[str] = Field(default=None)
    state: Optional[str] = Field(default=None)
    zip_code: Optional[str] = Field(default=None)
    country: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
