from .base import BaseModel, generate_uuid
from .user import User, format_invoice_number
from .client import Client
from .invoice import Invoice, InvoiceStatus, STATUS_TRANSITIONS
from .invoice_item import InvoiceItem
from .money import InvoiceTotals, line_subtotal, invoice_totals
from .exceptions import (
    DomainError,
    InvalidAmount,
    ValidationError,
    InvalidState,
    PersistenceError,
    RenderError,
)

__all__ = [
    "BaseModel",
    "generate_uuid",
    "User",
    "format_invoice_number",
    "Client",
    "Invoice",
    "InvoiceStatus",
    "STATUS_TRANSITIONS",
    "InvoiceItem",
    "InvoiceTotals",
    "line_subtotal",
    "invoice_totals",
    "DomainError",
    "InvalidAmount",
    "ValidationError",
    "InvalidState",
    "PersistenceError",
    "RenderError",
]
