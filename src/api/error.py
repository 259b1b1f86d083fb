"""API error types and handlers

Use case errors travel as ClientError and are rendered as
{"error": {"code": ..., "message": ..., "reason": ..., "field": ...}}.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_STATE": status.HTTP_409_CONFLICT,
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CLIENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "RENDER_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "PERSISTENCE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "DASHBOARD_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(HTTPException):
    """HTTP error carrying a use case Error"""

    def __init__(self, error: Error, status_code: int = None):
        super().__init__(
            status_code=status_code or STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST),
            detail=error.message,
        )
        self.error = error


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} {exc.error.reason}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error.model_dump(exclude_none=True)},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    error = Error(
        code="VALIDATION_ERROR",
        message=first.get("msg", "Invalid request parameters"),
        field=".".join(location) or None,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": error.model_dump(exclude_none=True)},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
