"""Refresh Token Engine Domain Service.

Issues, validates, rotates and revokes the long-lived session tokens. A user owns
at most one live token: ``issue`` always deletes before it creates, so a second
login (or a refresh) invalidates whatever token was out there before.
"""

import uuid
from datetime import datetime, timezone
from typing import Callable

import structlog

from src.core.exceptions import RefreshTokenExpiredError, RefreshTokenNotFoundError
from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IRefreshTokenRepository

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RefreshTokenService:
    """Domain service for the refresh token lifecycle.

    Rotation policy:
    - Every successful refresh replaces the presented token
    - Expired tokens are deleted as soon as they are detected (no grace window)
    - Logout deletes the owner's token
    """

    def __init__(
        self,
        refresh_token_repository: IRefreshTokenRepository,
        expiration_days: int = 7,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._repository = refresh_token_repository
        self._expiration_days = expiration_days
        self._clock = clock

    async def issue(self, user: User) -> RefreshToken:
        """Delete any token owned by ``user`` and persist a brand-new one."""
        await self._repository.delete_by_user_id(user.id)
        token = RefreshToken.create(user.id, self._expiration_days, now=self._clock())
        saved = await self._repository.save(token)
        logger.info(
            "Refresh token issued",
            user_id=str(user.id),
            token=saved.mask_for_logging(),
            expires_at=saved.expires_at.isoformat(),
        )
        return saved

    async def validate(self, token_value: str) -> RefreshToken:
        """Look up the row matching ``token_value``.

        Raises:
            RefreshTokenNotFoundError: If the value is blank or unknown.
        """
        if not token_value or not token_value.strip():
            raise RefreshTokenNotFoundError()
        token = await self._repository.get_by_token(token_value.strip())
        if token is None:
            logger.warning("Refresh token not found", token=token_value[:8] + "...")
            raise RefreshTokenNotFoundError()
        return token

    async def verify_not_expired(self, token: RefreshToken) -> None:
        """Fail closed on expiry, deleting the token before raising.

        Raises:
            RefreshTokenExpiredError: When the clock is at or past ``expires_at``.
        """
        try:
            token.verify_not_expired(self._clock())
        except RefreshTokenExpiredError:
            await self._repository.delete(token)
            logger.info("Expired refresh token deleted", user_id=str(token.user_id), token=token.mask_for_logging())
            raise

    async def revoke(self, user_id: uuid.UUID) -> None:
        await self._repository.delete_by_user_id(user_id)
        logger.info("Refresh token revoked", user_id=str(user_id))

    async def revoke_token(self, token: RefreshToken) -> None:
        await self._repository.delete(token)
        logger.info("Refresh token revoked", user_id=str(token.user_id), token=token.mask_for_logging())
