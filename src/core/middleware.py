"""Middleware configuration for the FastAPI application.

This module registers CORS and the per-request language / logging context.
Rate limiting is not a middleware here: each route calls the limiter itself.
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.utils.i18n import get_request_language


def configure_middleware(app: FastAPI, allowed_origins: list[str]) -> None:
    """Configure all middleware for the FastAPI application.

    Args:
        app (FastAPI): The FastAPI application instance
        allowed_origins: Origins allowed to send credentialed requests
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_context_middleware)


async def request_context_middleware(request: Request, call_next):
    """Resolve the request language and bind a request id to the log context.

    The language lands on ``request.state.language`` and in the
    ``Content-Language`` response header; the request id is echoed as
    ``X-Request-ID``.
    """
    lang = get_request_language(request)
    request.state.language = lang
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path, method=request.method)
    try:
        response = await call_next(request)
    finally:
        structlog.contextvars.clear_contextvars()

    response.headers["Content-Language"] = lang
    response.headers["X-Request-ID"] = request_id
    return response
