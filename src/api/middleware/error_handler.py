"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.application.dto.responses import ErrorResponse
from src.config import get_logger
from src.core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    InsufficientStockError,
    LedgerError,
    NotFoundError,
    PersistenceError,
    ReferenceInUseError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthorizationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InsufficientStockError: status.HTTP_409_CONFLICT,
    ReferenceInUseError: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "AUTHORIZATION_ERROR": "Send X-Principal-Id and X-Tenant-Id through the gateway.",
    "INSUFFICIENT_STOCK": "Reduce the quantity or post an entry for the material first.",
    "REFERENCE_IN_USE": "Rows referenced by movements cannot be deleted.",
    "PERSISTENCE_ERROR": "Nothing was saved. Retry the request; check server logs if it persists.",
    "CONFIGURATION_ERROR": "Fix the invalid environment variable and restart the service.",
    "MATERIAL_NOT_FOUND": "Check the material ID and try GET /api/materials to list materials.",
    "CATEGORY_NOT_FOUND": "Check the category ID and try GET /api/categories.",
    "SUPPLIER_NOT_FOUND": "Check the supplier ID and try GET /api/suppliers.",
    "EMPLOYEE_NOT_FOUND": "Check the employee ID and try GET /api/employees.",
    "THIRD_PARTY_NOT_FOUND": "Check the third party ID and try GET /api/third-parties.",
    "MOVEMENT_NOT_FOUND": "Check the movement ID and try GET /api/movements.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authentication is required.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)

    # Prefer LedgerError.code, fall back to class name
    if isinstance(exc, LedgerError):
        error_code = exc.code
        message = exc.message
        detail = str(exc.details) if exc.details else None
    else:
        error_code = exc.__class__.__name__
        message = str(exc)
        detail = None

    request_id = getattr(request.state, "request_id", None)

    if status_code >= 500:
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
    else:
        logger.warning(
            "request_rejected",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=message,
        )

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error_code=error_code,
            message=message,
            hint=_get_hint(error_code, status_code),
            detail=detail,
            path=request.url.path,
        ).model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Converts exceptions to standardized JSON error responses.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(LedgerError)
    async def ledger_exception_handler(
        request: Request,
        exc: LedgerError,
    ) -> JSONResponse:
        """Handle domain errors raised by routes and dependencies."""
        return error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        hint = _get_hint(error_code, exc.status_code)

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=hint,
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 400:
        return "BAD_REQUEST"
    if status_code == 401:
        return "AUTHORIZATION_ERROR"
    if status_code == 405:
        return "METHOD_NOT_ALLOWED"
    return "HTTP_ERROR"
