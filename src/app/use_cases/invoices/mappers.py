"""Entity to DTO conversions shared by the invoice use cases"""

from typing import List, Optional

from libs.result import Error
from src.domain.client import Client
from src.domain.exceptions import DomainError, PersistenceError, ValidationError
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem
from .dtos import (
    ClientSummaryDTO,
    InvoiceItemDTO,
    InvoiceResponseDTO,
    InvoiceSummaryDTO,
)


def to_invoice_response(
    invoice: Invoice,
    items: List[InvoiceItem],
    client: Optional[Client] = None,
) -> InvoiceResponseDTO:
    return InvoiceResponseDTO(
        id=invoice.id,
        user_id=invoice.user_id,
        client_id=invoice.client_id,
        invoice_number=invoice.invoice_number,
        status=invoice.status.value,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        currency=invoice.currency,
        subtotal=invoice.subtotal,
        tax_rate=invoice.tax_rate,
        tax_amount=invoice.tax_amount,
        discount_amount=invoice.discount_amount,
        total=invoice.total,
        notes=invoice.notes,
        terms=invoice.terms,
        items=[
            InvoiceItemDTO(
                id=item.id,
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                discount=item.discount,
                subtotal=item.subtotal,
                order=item.order,
            )
            for item in sorted(items, key=lambda i: i.order)
        ],
        client=(
            ClientSummaryDTO(id=client.id, name=client.name, email=client.email)
            if client
            else None
        ),
        created_at=invoice.created_at,
        updated_at=invoice.updated_at,
    )


def to_invoice_summary(invoice: Invoice, client_name: Optional[str] = None) -> InvoiceSummaryDTO:
    return InvoiceSummaryDTO(
        id=invoice.id,
        invoice_number=invoice.invoice_number,
        client_id=invoice.client_id,
        client_name=client_name,
        status=invoice.status.value,
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        currency=invoice.currency,
        total=invoice.total,
        created_at=invoice.created_at,
    )


def error_from(exc: DomainError) -> Error:
    """Translate a domain exception into a Result error"""
    if isinstance(exc, ValidationError):
        return Error(code=exc.code, message=exc.message, field=exc.field)
    return Error(code=exc.code, message=exc.message)


def invoice_not_found(invoice_id: str) -> Error:
    return Error(
        code="INVOICE_NOT_FOUND",
        message=f"Invoice with ID {invoice_id} not found",
        reason="Invoice does not exist or belongs to another user",
    )


def client_not_found(client_id: str) -> Error:
    return Error(
        code="CLIENT_NOT_FOUND",
        message=f"Client with ID {client_id} not found",
        reason="Client does not exist or belongs to another user",
    )


def user_not_found(user_id: str) -> Error:
    return Error(
        code="USER_NOT_FOUND",
        message=f"User with ID {user_id} not found",
        reason="Owner account does not exist",
    )


def persistence_failed(message: str, exc: Exception) -> Error:
    """Error for a write that was rolled back"""
    return Error(code=PersistenceError.code, message=message, reason=str(exc))
