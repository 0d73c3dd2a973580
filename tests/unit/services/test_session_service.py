"""Tests for SessionService: login, logout and refresh token rotation."""

from datetime import timedelta

import pytest
import pytest_asyncio

from src.core.exceptions import (
    AccountStateConflictError,
    InvalidCredentialsError,
    RefreshTokenExpiredError,
    RefreshTokenNotFoundError,
)
from src.domain.entities.user import AccountStatus
from tests.factories.user import create_fake_user
from tests.utils.flows import register_active_user


@pytest_asyncio.fixture
async def active_user(container, sms_sender):
    result = await register_active_user(container, sms_sender)
    return result.user


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_returns_token_pair(self, container, active_user):
        # Act
        result = await container.session_service.login("alice_01", "Secr3t!1")

        # Assert
        assert result.user.id == active_user.id
        claims = container.credential_signer.verify_access_credential(result.access_token)
        assert claims.user_id == active_user.id

    @pytest.mark.asyncio
    async def test_second_login_invalidates_first_refresh_token(self, container, active_user):
        first = await container.session_service.login("alice_01", "Secr3t!1")
        second = await container.session_service.login("alice_01", "Secr3t!1")

        with pytest.raises(RefreshTokenNotFoundError):
            await container.session_service.refresh(first.refresh_token)
        assert (await container.session_service.refresh(second.refresh_token)).user.id == active_user.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username, password",
        [("alice_01", "Wrong!123"), ("nobody_here", "Secr3t!1"), ("a!", "Secr3t!1"), ("alice_01", "")],
    )
    async def test_bad_credentials_are_indistinguishable(self, container, active_user, username, password):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await container.session_service.login(username, password)
        assert exc_info.value.code == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_pending_account_cannot_log_in(self, container):
        await container.signup_service.signup("alice_01", "Alice Liddell", "+15551234567", "Secr3t!1")

        with pytest.raises(AccountStateConflictError) as exc_info:
            await container.session_service.login("alice_01", "Secr3t!1")
        assert exc_info.value.status is AccountStatus.PENDING_VERIFICATION


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_revokes_refresh_token(self, container, active_user):
        result = await container.session_service.login("alice_01", "Secr3t!1")

        await container.session_service.logout(result.refresh_token)

        with pytest.raises(RefreshTokenNotFoundError):
            await container.session_service.refresh(result.refresh_token)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "   ", "unknown-token"])
    async def test_logout_without_valid_token_is_a_no_op(self, container, token):
        await container.session_service.logout(token)


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh_rotates_token(self, container, active_user):
        # Arrange
        login = await container.session_service.login("alice_01", "Secr3t!1")

        # Act
        refreshed = await container.session_service.refresh(login.refresh_token)

        # Assert
        assert refreshed.refresh_token != login.refresh_token
        with pytest.raises(RefreshTokenNotFoundError):
            await container.session_service.refresh(login.refresh_token)

    @pytest.mark.asyncio
    async def test_expired_token_is_deleted(self, container, active_user):
        # Arrange
        login = await container.session_service.login("alice_01", "Secr3t!1")
        stored = await container.refresh_token_repository.get_by_token(login.refresh_token)
        stored.expires_at = stored.created_at - timedelta(seconds=1)
        await container.refresh_token_repository.save(stored)

        # Act
        with pytest.raises(RefreshTokenExpiredError):
            await container.session_service.refresh(login.refresh_token)

        # Assert
        assert await container.refresh_token_repository.get_by_token(login.refresh_token) is None

    @pytest.mark.asyncio
    async def test_refresh_for_disabled_owner_is_a_conflict(self, container, active_user):
        login = await container.session_service.login("alice_01", "Secr3t!1")
        user = await container.user_repository.get_by_id(active_user.id)
        user.disable_account()
        await container.user_repository.save(user)

        with pytest.raises(AccountStateConflictError):
            await container.session_service.refresh(login.refresh_token)

    @pytest.mark.asyncio
    async def test_refresh_for_deleted_owner_reads_as_not_found(self, container):
        ghost = create_fake_user()
        token = await container.refresh_token_service.issue(ghost)

        with pytest.raises(RefreshTokenNotFoundError):
            await container.session_service.refresh(token.token)
        assert await container.refresh_token_repository.get_by_user_id(ghost.id) is None
