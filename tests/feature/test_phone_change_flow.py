"""Phone number change across two accounts."""

import pytest

from tests.utils.flows import last_code_sent_to, register_active_user


class TestPhoneChangeFlow:
    @pytest.mark.asyncio
    async def test_new_phone_is_used_for_password_reset(self, async_client, container, sms_sender):
        # Arrange
        session = await register_active_user(container, sms_sender)
        headers = {"Authorization": f"Bearer {session.access_token}"}

        # Act
        await async_client.post(
            "/api/v1/users/me/phone/verification", json={"phone": "+15559876543"}, headers=headers
        )
        confirm = await async_client.patch(
            "/api/v1/users/me/phone/verification/confirm",
            json={"code": last_code_sent_to(sms_sender, "+15559876543")},
            headers=headers,
        )
        old_phone_messages = len(sms_sender.sent_messages)
        await async_client.post("/api/v1/auth/forgot-password", json={"phone": "+15551234567"})
        await async_client.post("/api/v1/auth/forgot-password", json={"phone": "+15559876543"})

        # Assert
        assert confirm.status_code == 200
        assert len(sms_sender.sent_messages) == old_phone_messages + 1
        assert sms_sender.sent_messages[-1][0] == "+15559876543"

    @pytest.mark.asyncio
    async def test_code_of_one_user_does_not_confirm_another(self, async_client, container, sms_sender):
        # Arrange
        alice = await register_active_user(container, sms_sender)
        bob = await register_active_user(container, sms_sender, username="bob_0001", phone="+15557654321")
        await async_client.post(
            "/api/v1/users/me/phone/verification",
            json={"phone": "+15550001111"},
            headers={"Authorization": f"Bearer {alice.access_token}"},
        )
        alice_code = last_code_sent_to(sms_sender, "+15550001111")

        # Act
        response = await async_client.patch(
            "/api/v1/users/me/phone/verification/confirm",
            json={"code": alice_code},
            headers={"Authorization": f"Bearer {bob.access_token}"},
        )

        # Assert
        assert response.status_code == 404
        user = await container.user_repository.get_by_username("alice_01")
        assert user.phone == "+15551234567"

    @pytest.mark.asyncio
    async def test_phone_of_another_account_conflicts(self, async_client, container, sms_sender):
        alice = await register_active_user(container, sms_sender)
        await register_active_user(container, sms_sender, username="bob_0001", phone="+15557654321")

        response = await async_client.post(
            "/api/v1/users/me/phone/verification",
            json={"phone": "+15557654321"},
            headers={"Authorization": f"Bearer {alice.access_token}"},
        )

        assert response.status_code == 409
        assert response.json()["code"] == "phone_already_exists"
