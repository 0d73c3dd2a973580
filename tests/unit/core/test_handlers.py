"""Tests for the exception taxonomy and its HTTP mapping."""

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.core.exceptions import (
    AccountStateConflictError,
    AccountStatusForbiddenError,
    DeliveryError,
    InvalidCredentialsError,
    InvalidOtpError,
    InvalidOtpSessionError,
    PhonegateError,
    RateLimitExceededError,
    UserAlreadyExistsError,
)
from src.core.handlers import register_exception_handlers
from src.core.middleware import configure_middleware
from src.domain.entities.user import AccountStatus

RAISED = {
    "not-found": InvalidOtpSessionError,
    "invalid": InvalidOtpError,
    "conflict": lambda: UserAlreadyExistsError(UserAlreadyExistsError.PHONE),
    "state": lambda: AccountStateConflictError(AccountStatus.LOCKED),
    "unauthorized": InvalidCredentialsError,
    "forbidden": AccountStatusForbiddenError,
    "limited": lambda: RateLimitExceededError(limiter="login"),
    "internal": DeliveryError,
    "custom": lambda: PhonegateError("Explicit message", code="custom_code"),
}


@pytest.fixture
def app():
    app = FastAPI()
    configure_middleware(app, ["http://test"])
    register_exception_handlers(app)

    @app.get("/raise/{kind}")
    async def raise_error(kind: str):
        raise RAISED[kind]()

    return app


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


class TestExceptionHandlers:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kind, status_code, code",
        [
            ("not-found", 404, "invalid_otp_session"),
            ("invalid", 400, "invalid_otp"),
            ("conflict", 409, "phone_already_exists"),
            ("state", 409, "account_locked"),
            ("unauthorized", 401, "invalid_credentials"),
            ("forbidden", 403, "account_state_conflict"),
            ("limited", 429, "rate_limit_exceeded"),
            ("internal", 500, "delivery_failed"),
            ("custom", 500, "custom_code"),
        ],
    )
    async def test_status_mapping(self, client, kind, status_code, code):
        response = await client.get(f"/raise/{kind}")

        assert response.status_code == status_code
        assert response.json()["code"] == code
        assert response.json()["detail"]

    @pytest.mark.asyncio
    async def test_detail_follows_request_language(self, client):
        english = await client.get("/raise/unauthorized")
        portuguese = await client.get("/raise/unauthorized", headers={"Accept-Language": "pt-BR"})

        assert english.json()["detail"] != portuguese.json()["detail"]
        assert portuguese.headers["Content-Language"] == "pt"

    @pytest.mark.asyncio
    async def test_explicit_messages_are_kept(self, client):
        response = await client.get("/raise/custom", headers={"Accept-Language": "pt"})

        assert response.json()["detail"] == "Explicit message"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        response = await client.get("/raise/invalid", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"


class TestExceptionMessages:
    def test_default_message_comes_from_catalogue(self):
        error = InvalidCredentialsError()

        assert error.translatable is True
        assert error.message != error.code

    def test_user_already_exists_field(self):
        assert UserAlreadyExistsError(UserAlreadyExistsError.USERNAME).code == "username_already_exists"
