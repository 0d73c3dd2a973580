"""End-to-end account lifecycle over HTTP, from signup to disabling the account."""

import pytest

from src.core.config.settings import Settings
from tests.utils.flows import last_code_sent_to

PHONE = "+15551234567"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        APP_ENV="test",
        STORAGE_BACKEND="memory",
        BCRYPT_WORK_FACTOR=4,
        RATE_LIMIT_SENSITIVE="50/minute",
        RATE_LIMIT_LOGIN="50/minute",
    )


class TestAccountLifecycle:
    @pytest.mark.asyncio
    async def test_full_lifecycle(self, async_client, container, sms_sender):
        # Sign up and verify
        signup = await async_client.post(
            "/api/v1/auth/signup",
            json={"username": "alice_01", "full_name": "Alice Liddell", "phone": PHONE, "password": "Secr3t!1"},
        )
        assert signup.status_code == 201
        verify = await async_client.post(
            "/api/v1/auth/verify-account",
            json={"session_id": signup.json()["session_id"], "code": last_code_sent_to(sms_sender, PHONE)},
        )
        assert verify.status_code == 200
        assert verify.json()["user"]["status"] == "ACTIVE"

        # Log in and rotate the session
        login = await async_client.post("/api/v1/auth/login", json={"username": "alice_01", "password": "Secr3t!1"})
        assert login.status_code == 200
        refreshed = await async_client.post("/api/v1/auth/refresh-token")
        assert refreshed.status_code == 200
        headers = {"Authorization": f"Bearer {refreshed.json()['access_token']}"}

        # Change the password while logged in
        changed = await async_client.post(
            "/api/v1/users/me/password",
            json={"current_password": "Secr3t!1", "new_password": "Ch4nged!"},
            headers=headers,
        )
        assert changed.status_code == 200

        # Forget it and reset it by SMS
        forgot = await async_client.post("/api/v1/auth/forgot-password", json={"phone": PHONE})
        reset_token = await async_client.post(
            "/api/v1/auth/reset-password-token",
            json={"session_id": forgot.json()["session_id"], "code": last_code_sent_to(sms_sender, PHONE)},
        )
        assert reset_token.status_code == 200
        reset = await async_client.post(
            "/api/v1/auth/reset-password",
            json={"token": reset_token.json()["reset_token"], "new_password": "R3set!pw"},
        )
        assert reset.status_code == 200

        old_password = await async_client.post(
            "/api/v1/auth/login", json={"username": "alice_01", "password": "Ch4nged!"}
        )
        assert old_password.status_code == 401
        login = await async_client.post("/api/v1/auth/login", json={"username": "alice_01", "password": "R3set!pw"})
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}

        # Disable the account
        disabled = await async_client.post("/api/v1/users/me/disable", headers=headers)
        assert disabled.status_code == 200
        blocked = await async_client.post("/api/v1/auth/login", json={"username": "alice_01", "password": "R3set!pw"})
        assert blocked.status_code == 409
        assert blocked.json()["code"] == "account_disabled"

    @pytest.mark.asyncio
    async def test_pending_signup_can_be_resent_by_phone(self, async_client, container, sms_sender):
        signup = await async_client.post(
            "/api/v1/auth/signup",
            json={"username": "alice_01", "full_name": "Alice Liddell", "phone": PHONE, "password": "Secr3t!1"},
        )

        await container.account_verification_service.resend_code_by_phone(PHONE)
        verify = await async_client.post(
            "/api/v1/auth/verify-account",
            json={"session_id": signup.json()["session_id"], "code": last_code_sent_to(sms_sender, PHONE)},
        )

        assert verify.status_code == 200
