from .user_repository import UserRepository
from .client_repository import ClientRepository
from .invoice_repository import InvoiceRepository
from .invoice_item_repository import InvoiceItemRepository

__all__ = [
    "UserRepository",
    "ClientRepository",
    "InvoiceRepository",
    "InvoiceItemRepository",
]
