"""Tests for VerificationDispatcher failure isolation."""

import pytest

from src.core.exceptions import DeliveryError
from src.domain.interfaces.services import IVerificationNotifier
from src.domain.services.notification import VerificationDispatcher
from tests.factories.user import create_fake_user


@pytest.fixture
def notifier(mocker):
    notifier = mocker.Mock(spec=IVerificationNotifier)
    notifier.notify_verification_required = mocker.AsyncMock()
    return notifier


class TestVerificationDispatcher:
    @pytest.mark.asyncio
    async def test_successful_dispatch(self, notifier):
        user = create_fake_user()

        assert await VerificationDispatcher(notifier).dispatch(user) is True
        notifier.notify_verification_required.assert_awaited_once_with(user, None)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [DeliveryError(), RuntimeError("gateway exploded")])
    async def test_failures_are_absorbed(self, notifier, error):
        # Arrange
        notifier.notify_verification_required.side_effect = error

        # Act
        dispatched = await VerificationDispatcher(notifier).dispatch(create_fake_user(), "+15557654321")

        # Assert
        assert dispatched is False
