"""Tests for the refresh token engine and token pair issuing."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from src.core.exceptions import RefreshTokenExpiredError, RefreshTokenNotFoundError
from src.domain.interfaces.services import AccessCredential, ICredentialSigner
from src.domain.services.tokens import AuthTokenService, RefreshTokenService
from src.infrastructure.repositories import InMemoryRefreshTokenRepository
from tests.factories.user import create_fake_user


class MutableClock:
    def __init__(self):
        self.now = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return MutableClock()


@pytest.fixture
def repository():
    return InMemoryRefreshTokenRepository()


@pytest.fixture
def service(repository, clock):
    return RefreshTokenService(repository, expiration_days=7, clock=clock)


class TestRefreshTokenService:
    @pytest.mark.asyncio
    async def test_issue_sets_expiry_from_clock(self, service, clock):
        user = create_fake_user()

        token = await service.issue(user)

        assert token.user_id == user.id
        assert token.expires_at == clock.now + timedelta(days=7)

    @pytest.mark.asyncio
    async def test_issue_replaces_the_previous_token(self, service, repository):
        # Arrange
        user = create_fake_user()
        first = await service.issue(user)

        # Act
        second = await service.issue(user)

        # Assert
        assert repository.count() == 1
        with pytest.raises(RefreshTokenNotFoundError):
            await service.validate(first.token)
        assert (await service.validate(second.token)).id == second.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["", "   ", None])
    async def test_blank_token_is_not_found(self, service, value):
        with pytest.raises(RefreshTokenNotFoundError):
            await service.validate(value)

    @pytest.mark.asyncio
    async def test_expiry_is_fail_closed_and_deletes(self, service, repository, clock):
        user = create_fake_user()
        token = await service.issue(user)

        clock.now = token.expires_at

        with pytest.raises(RefreshTokenExpiredError):
            await service.verify_not_expired(token)
        assert repository.count() == 0

    @pytest.mark.asyncio
    async def test_token_just_before_expiry_is_valid(self, service, clock):
        token = await service.issue(create_fake_user())

        clock.now = token.expires_at - timedelta(seconds=1)

        await service.verify_not_expired(token)

    @pytest.mark.asyncio
    async def test_revoke_removes_users_token(self, service, repository):
        user = create_fake_user()
        await service.issue(user)

        await service.revoke(user.id)

        assert await repository.get_by_user_id(user.id) is None


class TestAuthTokenService:
    @pytest.mark.asyncio
    async def test_issue_tokens_combines_signer_and_refresh_token(self, service):
        # Arrange
        expires = datetime(2025, 1, 1, 0, 15, tzinfo=timezone.utc)
        signer = Mock(spec=ICredentialSigner)
        signer.issue_access_credential.return_value = AccessCredential(token="jwt", expires_at=expires)
        user = create_fake_user()

        # Act
        result = await AuthTokenService(service, signer).issue_tokens(user)

        # Assert
        signer.issue_access_credential.assert_called_once_with(user)
        assert result.access_token == "jwt"
        assert result.access_token_expires_at == expires
        assert len(result.refresh_token) == 43
        assert result.user is user
