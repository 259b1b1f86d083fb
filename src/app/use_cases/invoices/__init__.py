"""Invoice use cases"""
from .builder import InvoiceAggregateBuilder, InvoiceDraft, LineItemDraft
from .create_invoice import CreateInvoice
from .update_invoice import UpdateInvoice
from .duplicate_invoice import DuplicateInvoice
from .delete_invoice import DeleteInvoice
from .get_invoice import GetInvoice, ListInvoices
from .change_status import ChangeInvoiceStatus
from .render_invoice import RenderInvoicePdf
from .dtos import (
    InvoiceItemInputDTO,
    InvoiceCommandDTO,
    ChangeStatusCommandDTO,
    InvoiceItemDTO,
    ClientSummaryDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
    ListInvoicesResponseDTO,
    RenderedInvoiceDTO,
)

__all__ = [
    "InvoiceAggregateBuilder",
    "InvoiceDraft",
    "LineItemDraft",
    "CreateInvoice",
    "UpdateInvoice",
    "DuplicateInvoice",
    "DeleteInvoice",
    "GetInvoice",
    "ListInvoices",
    "ChangeInvoiceStatus",
    "RenderInvoicePdf",
    "InvoiceItemInputDTO",
    "InvoiceCommandDTO",
    "ChangeStatusCommandDTO",
    "InvoiceItemDTO",
    "ClientSummaryDTO",
    "InvoiceResponseDTO",
    "InvoiceSummaryDTO",
    "ListInvoicesResponseDTO",
    "RenderedInvoiceDTO",
]
