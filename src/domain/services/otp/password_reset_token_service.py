"""Password reset token Domain Service.

A reset token is issued after the user proved control of the phone with an OTP
and authorizes exactly one password change.
"""

import uuid
from datetime import timedelta

import structlog

from src.core.exceptions import InvalidPasswordResetTokenError
from src.domain.interfaces.stores import IPasswordResetTokenStore
from src.domain.value_objects.reset_token import ResetToken

logger = structlog.get_logger(__name__)


class PasswordResetTokenService:
    """Issues and redeems single-use password reset tokens."""

    def __init__(self, token_store: IPasswordResetTokenStore, ttl: timedelta = timedelta(minutes=5)):
        self._token_store = token_store
        self._ttl_seconds = int(ttl.total_seconds())

    async def issue(self, user_id: uuid.UUID) -> ResetToken:
        token = ResetToken.generate()
        await self._token_store.put(token.value, user_id, self._ttl_seconds)
        logger.info("Password reset token issued", user_id=str(user_id), token=token.mask_for_logging())
        return token

    async def consume(self, token: ResetToken | str) -> uuid.UUID:
        """Resolve the owner of ``token`` and delete the token in the same step.

        The token is gone after this call whatever the caller does next.

        Raises:
            InvalidPasswordResetTokenError: If the token is malformed, unknown or expired.
        """
        reset_token = token if isinstance(token, ResetToken) else ResetToken(token)
        user_id = await self._token_store.take_user_id(reset_token.value)
        if user_id is None:
            logger.warning("Password reset token rejected", token=reset_token.mask_for_logging())
            raise InvalidPasswordResetTokenError()
        return user_id
