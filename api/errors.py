"""
Exception handlers.

Maps ordering errors to HTTP responses. Error bodies always carry
``error`` (stable kind), ``message`` and ``path``.
"""
import logging
from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.domain.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    InsufficientStockError,
    InvalidStateError,
    NotFoundError,
    OrderingError,
    PersistenceError,
    ValidationError,
    WebhookAuthError,
)


logger = logging.getLogger(__name__)


# Most specific class first
STATUS_BY_ERROR: Dict[type, int] = {
    InsufficientStockError: status.HTTP_400_BAD_REQUEST,
    InvalidStateError: status.HTTP_400_BAD_REQUEST,
    WebhookAuthError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: OrderingError) -> int:
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    """Handle ordering errors.

    Args:
        request: FastAPI request
        exc: OrderingError raised by a service

    Returns:
        JSONResponse with error details
    """
    code = status_for(exc)
    if code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    elif isinstance(exc, WebhookAuthError):
        logger.warning(f"Webhook signature rejected: {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(
        status_code=code,
        content={**exc.to_dict(), "path": request.url.path},
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reshape FastAPI body/query validation failures."""
    problems = [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": ValidationError.kind,
            "message": "Invalid request.",
            "details": {"errors": problems},
            "path": request.url.path,
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "Internal server error",
            "path": request.url.path,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderingError, ordering_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)
