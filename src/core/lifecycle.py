"""Application lifecycle management.

Startup builds the ``ServiceContainer`` (unless one was injected, as the tests
do) and, for the SQL backend outside production, creates the tables. Shutdown
releases the container's connections.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from src.core.config.settings import Settings
from src.core.container import ServiceContainer
from src.core.logging import logger


def create_lifespan_manager(settings: Settings, container: Optional[ServiceContainer] = None):
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = container is None
        current = container or ServiceContainer.build(settings)
        app.state.container = current

        if current.database is not None and settings.APP_ENV != "production":
            await current.database.create_all()

        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        if owned:
            await current.aclose()
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
