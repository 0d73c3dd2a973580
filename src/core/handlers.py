from __future__ import annotations

"""
Global exception handlers for the FastAPI application.

Every ``PhonegateError`` is translated into a JSON response
``{"detail": <message>, "code": <code>}``. The status code follows the error
taxonomy:

    NotFoundError          -> 404
    InvalidInputError      -> 400
    ConflictError          -> 409
    UnauthorizedError      -> 401
    ForbiddenError         -> 403
    TooManyRequestsError   -> 429
    InternalError / base   -> 500

Messages are rendered in the request language when the error carries the
default catalogue message.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from src.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    PhonegateError,
    TooManyRequestsError,
    UnauthorizedError,
)
from src.utils.i18n import get_request_language, get_translated_message

__all__ = [
    "not_found_error_handler",
    "invalid_input_error_handler",
    "conflict_error_handler",
    "unauthorized_error_handler",
    "forbidden_error_handler",
    "too_many_requests_error_handler",
    "phonegate_error_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _error_response(request: Request, exc: PhonegateError, status_code: int) -> JSONResponse:
    locale = get_request_language(request)
    detail = get_translated_message(exc.code, locale) if exc.translatable else exc.message
    return JSONResponse(status_code=status_code, content={"detail": detail, "code": exc.code})


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Handles `NotFoundError`, returning a `404 Not Found`."""
    logger.info("Resource not found", error=exc.code, path=request.url.path)
    return _error_response(request, exc, status.HTTP_404_NOT_FOUND)


async def invalid_input_error_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """Handles `InvalidInputError`, returning a `400 Bad Request`.

    Covers malformed fields (phone, username, password, OTP shape) as well as
    rejected codes, tokens and domain transitions.
    """
    logger.warning("Invalid input", error=exc.code, path=request.url.path)
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST)


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    """Handles `ConflictError`, returning a `409 Conflict`.

    Raised for username/phone collisions and account status conflicts.
    """
    logger.warning("Conflict", error=exc.code, path=request.url.path)
    return _error_response(request, exc, status.HTTP_409_CONFLICT)


async def unauthorized_error_handler(request: Request, exc: UnauthorizedError) -> JSONResponse:
    """Handles `UnauthorizedError`, returning a `401 Unauthorized`.

    This handler catches bad credentials and invalid or expired refresh and
    access credentials.
    """
    logger.warning(
        "Authentication failure",
        error=exc.code,
        client_ip=_client_ip(request),
        path=request.url.path,
    )
    return _error_response(request, exc, status.HTTP_401_UNAUTHORIZED)


async def forbidden_error_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
    logger.warning("Forbidden", error=exc.code, client_ip=_client_ip(request), path=request.url.path)
    return _error_response(request, exc, status.HTTP_403_FORBIDDEN)


async def too_many_requests_error_handler(request: Request, exc: TooManyRequestsError) -> JSONResponse:
    """Handles `TooManyRequestsError`, returning a `429 Too Many Requests`.

    Logged for security monitoring with the client IP and the limiter template.
    """
    logger.warning(
        "rate_limit_exceeded",
        client_ip=_client_ip(request),
        path=request.url.path,
        limiter=getattr(exc, "limiter", ""),
    )
    return _error_response(request, exc, status.HTTP_429_TOO_MANY_REQUESTS)


async def phonegate_error_handler(request: Request, exc: PhonegateError) -> JSONResponse:
    """Handles `InternalError` and the base `PhonegateError`, returning a `500`.

    The response never carries internal details.
    """
    log = logger.critical if isinstance(exc, InternalError) else logger.error
    log(
        "An unhandled application error occurred",
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return _error_response(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so the taxonomy
    bases cover every concrete error.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(InvalidInputError, invalid_input_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(UnauthorizedError, unauthorized_error_handler)
    app.add_exception_handler(ForbiddenError, forbidden_error_handler)
    app.add_exception_handler(TooManyRequestsError, too_many_requests_error_handler)
    app.add_exception_handler(PhonegateError, phonegate_error_handler)
