"""
Mapping of service exceptions to HTTP responses.

Every error body has the shape {"error": message}.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core import (
    get_logger,
    PDFSearchError,
    BackendUnavailableError,
    BlobNotFoundError,
    ConfigurationError,
    DocumentNotFoundError,
    DuplicateContentError,
    ExtractionError,
    InconsistentStateError,
    ValidationError
)

logger = get_logger(__name__)


# Checked in order, first match wins
STATUS_CODES = (
    (ValidationError, 400),
    (DuplicateContentError, 409),
    (ExtractionError, 422),
    (DocumentNotFoundError, 404),
    (BlobNotFoundError, 404),
    (BackendUnavailableError, 503),
    (InconsistentStateError, 500),
    (ConfigurationError, 500)
)


def status_for(exc: PDFSearchError) -> int:
    for exc_type, status_code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def handle_service_error(request: Request, exc: PDFSearchError) -> JSONResponse:
    status_code = status_for(exc)

    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.details}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({status_code}): {exc.message}")

    return error_response(status_code, exc.message)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = ", ".join(
        ".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()
    )
    return error_response(400, f"Invalid request: {fields}" if fields else "Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on an application."""
    app.add_exception_handler(PDFSearchError, handle_service_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
