import os

# Settings are read at import time, so the test environment must be in place
# before anything from ``src`` is imported.
os.environ.setdefault("APP_ENV", "test")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_SECRET_KEY", "phonegate-test-secret-key-0123456789abcdef")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("LOG_JSON", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.core.application import create_application
from src.core.config.settings import Settings
from src.core.container import ServiceContainer
from src.infrastructure.services.sms_sender import LoggingSmsSender
from src.utils.i18n import setup_i18n


@pytest.fixture(scope="session", autouse=True)
def load_translations():
    setup_i18n()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(APP_ENV="test", STORAGE_BACKEND="memory", BCRYPT_WORK_FACTOR=4)


@pytest.fixture
def sms_sender() -> LoggingSmsSender:
    return LoggingSmsSender()


@pytest.fixture
def container(test_settings, sms_sender) -> ServiceContainer:
    """Fully wired in-memory stack with a capturing SMS sender."""
    return ServiceContainer.build(test_settings, sms_sender=sms_sender)


@pytest.fixture
def app(container):
    return create_application(container=container)


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
