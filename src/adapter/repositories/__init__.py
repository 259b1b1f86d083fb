from .user_repository import SqlAlchemyUserRepository
from .client_repository import SqlAlchemyClientRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_item_repository import SqlAlchemyInvoiceItemRepository

__all__ = [
    "SqlAlchemyUserRepository",
    "SqlAlchemyClientRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceItemRepository",
]
