"""Invoice API Routes

FastAPI routes for invoice CRUD, duplication, status changes and PDF download.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.dependencies import get_current_user_id
from src.api.error import ClientError
from src.api.schemas.invoice_request import InvoiceRequestSchema, InvoiceStatusRequestSchema
from src.app.use_cases.invoices import (
    ChangeInvoiceStatus,
    ChangeStatusCommandDTO,
    CreateInvoice,
    DeleteInvoice,
    DuplicateInvoice,
    GetInvoice,
    InvoiceCommandDTO,
    InvoiceResponseDTO,
    ListInvoices,
    ListInvoicesResponseDTO,
    RenderInvoicePdf,
    UpdateInvoice,
)
from src.adapter.repositories import (
    SqlAlchemyClientRepository,
    SqlAlchemyInvoiceItemRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyUserRepository,
)
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_pdf_service, get_session
from src.domain.invoice import InvoiceStatus

router = APIRouter(prefix="/invoices", tags=["Invoices"])

ERROR_EXAMPLE = {
    "application/json": {
        "example": {"error": {"code": "INVOICE_NOT_FOUND", "message": "Invoice with ID 123 not found"}}
    }
}


def _command(request: InvoiceRequestSchema) -> InvoiceCommandDTO:
    return InvoiceCommandDTO.model_validate(request.model_dump())


@router.get("", response_model=ListInvoicesResponseDTO, status_code=status.HTTP_200_OK)
async def list_invoices(
    status_filter: Optional[InvoiceStatus] = Query(default=None, alias="status"),
    limit: int = Query(default=50),
    offset: int = Query(default=0),
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    List the owner's invoices, newest first.

    **Query parameters:**
    - `status` (optional): DRAFT, SENT, PAID, OVERDUE or CANCELLED
    - `limit` (optional): 1-200, default 50
    - `offset` (optional): default 0
    """
    use_case = ListInvoices(SqlAlchemyClientRepository(session), SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(user_id, status=status_filter, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: {"description": "Invoice not found", "content": ERROR_EXAMPLE}},
)
async def get_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Retrieve one invoice with its items (in display order) and client."""
    use_case = GetInvoice(
        SqlAlchemyClientRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(user_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Validation error"},
        404: {"description": "Client not found"},
    },
)
async def create_invoice(
    request: InvoiceRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Create an invoice with its line items.

    Totals are computed server-side. When `invoice_number` is omitted the
    number is taken from the owner's prefix and counter (e.g. `INV-007`);
    the counter advances by one in the same transaction.

    **Returns:**
    - 201: Invoice created
    - 400: Validation error (first offending field in `error.field`)
    - 404: Client not found
    """
    use_case = CreateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyUserRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(user_id, _command(request))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={
        400: {"description": "Validation error"},
        404: {"description": "Invoice or client not found", "content": ERROR_EXAMPLE},
        409: {"description": "Invoice is not a draft"},
    },
)
async def update_invoice(
    invoice_id: str,
    request: InvoiceRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Replace a draft invoice's fields and items.

    **Returns:**
    - 200: Invoice updated
    - 409: Invoice is not in DRAFT status
    """
    use_case = UpdateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(user_id, invoice_id, _command(request))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    responses={404: {"description": "Invoice not found", "content": ERROR_EXAMPLE}},
)
async def delete_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Delete an invoice and all its items."""
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(user_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return {"message": "Invoice deleted", "id": result.value}


@router.post(
    "/{invoice_id}/duplicate",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Invoice not found", "content": ERROR_EXAMPLE}},
)
async def duplicate_invoice(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """
    Copy an invoice into a new draft numbered from the owner's counter,
    issued today and due in 30 days.
    """
    use_case = DuplicateInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyUserRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        due_days=ApplicationConfig.DUPLICATE_DUE_DAYS,
    )
    result = await use_case.execute(user_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    responses={409: {"description": "Transition not allowed"}},
)
async def change_invoice_status(
    invoice_id: str,
    request: InvoiceStatusRequestSchema,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
):
    """Move an invoice to another status (e.g. DRAFT -> SENT, SENT -> PAID)."""
    use_case = ChangeInvoiceStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(user_id, invoice_id, ChangeStatusCommandDTO(status=request.status))

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {"content": {"application/pdf": {}}, "description": "PDF document"},
        404: {"description": "Invoice not found", "content": ERROR_EXAMPLE},
        422: {"description": "Invoice cannot be rendered"},
    },
)
async def download_invoice_pdf(
    invoice_id: str,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: ReportLabPdfService = Depends(get_pdf_service),
):
    """
    Download the invoice as a PDF file.

    Draft invoices carry a DRAFT watermark.
    """
    use_case = RenderInvoicePdf(
        SqlAlchemyUserRepository(session),
        SqlAlchemyClientRepository(session),
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        pdf_service,
    )
    result = await use_case.execute(user_id, invoice_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=result.value.content,
        media_type=result.value.content_type,
        headers={"Content-Disposition": f"attachment; filename={result.value.filename}"},
    )
