"""Application factory for creating and configuring the FastAPI application.

This module provides a factory function to create a properly configured FastAPI application
with middleware, exception handlers and routers registered.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from src.adapters.api.v1 import api_router
from src.core.config.settings import Settings
from src.core.config.settings import settings as default_settings
from src.core.container import ServiceContainer
from src.core.handlers import register_exception_handlers
from src.core.lifecycle import create_lifespan_manager
from src.core.middleware import configure_middleware


def create_application(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the process settings.
        container: Pre-built services. When given it is installed on
            ``app.state.container`` right away and is not closed on shutdown.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    settings = settings or (container.settings if container is not None else default_settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Phone-number account authentication service.",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=create_lifespan_manager(settings, container),
        default_response_class=JSONResponse,
    )
    if container is not None:
        app.state.container = container

    configure_middleware(app, settings.ALLOWED_ORIGINS)
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")

    return app
