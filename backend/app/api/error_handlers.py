"""Error Handlers — map stock and catalogue failures onto the HTTP error body.

Invariants:
    - StockroomError status comes from ERROR_CODES (404 not-found, 409 duplicate
      product or inventory row, 400 quantity/price rules, 503 storage outage)
    - Client-side failures log at warning, 5xx at error; the product_id and
      operation from ErrorContext ride along as log extras
    - Malformed bodies (e.g. a non-numeric price) are 400 VALIDATION_ERROR with
      one entry per offending field
    - Anything else is 500 INTERNAL_ERROR; every error body carries a UTC timestamp
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.core.errors import ErrorCategory, ErrorCode, ErrorSeverity, StockroomError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_stockroom_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_stockroom_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(StockroomError)
    async def stockroom_error_handler(request: Request, exc: StockroomError):
        """Handle all Stockroom domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"StockroomError: {exc.message}",
            extra={
                "error_code": exc.code.value,
                "path": request.url.path,
                "method": request.method,
                "product_id": exc.context.product_id,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": ErrorCode.INTERNAL_ERROR.value,
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                    "timestamp": _now(),
                },
            },
        )


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": ErrorCode.VALIDATION_ERROR.value,
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "timestamp": _now(),
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
