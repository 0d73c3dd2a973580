"""Session Domain Service.

Login, logout and refresh: the three flows that create, destroy and rotate the
single refresh token a user owns.
"""

from typing import Optional

import structlog

from src.core.exceptions import (
    AccountStateConflictError,
    InvalidCredentialsError,
    InvalidUsernameFormatError,
    RefreshTokenNotFoundError,
)
from src.domain.interfaces.repositories import IRefreshTokenRepository, IUserRepository
from src.domain.interfaces.services import IPasswordHasher, ITransactionManager
from src.domain.services.tokens.auth_token_service import AuthResult, AuthTokenService
from src.domain.services.tokens.refresh_token_service import RefreshTokenService
from src.domain.value_objects.username import Username

logger = structlog.get_logger(__name__)


class SessionService:
    """Domain service for the refresh token backed session lifecycle.

    A successful login or refresh deletes whatever refresh token the user held
    before, so a second login from another device silently ends the first
    session.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        refresh_token_repository: IRefreshTokenRepository,
        password_hasher: IPasswordHasher,
        refresh_token_service: RefreshTokenService,
        auth_token_service: AuthTokenService,
        transaction_manager: ITransactionManager,
    ):
        self._user_repository = user_repository
        self._refresh_token_repository = refresh_token_repository
        self._password_hasher = password_hasher
        self._refresh_token_service = refresh_token_service
        self._auth_token_service = auth_token_service
        self._transaction_manager = transaction_manager

    async def login(self, username: str, password: str) -> AuthResult:
        """Authenticate by username and password.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password.
            AccountStateConflictError: The account is not active.
        """
        try:
            username_vo = Username(username)
        except InvalidUsernameFormatError:
            raise InvalidCredentialsError()

        user = await self._user_repository.get_by_username(username_vo.value)
        if user is None:
            logger.warning("Login failed - user not found", username=username_vo.mask_for_logging())
            raise InvalidCredentialsError()

        try:
            user.ensure_account_enabled()
        except AccountStateConflictError:
            logger.warning("Login rejected - account not enabled", user_id=str(user.id), status=user.status.value)
            raise

        if not password or not self._password_hasher.matches(password, user.password_hash):
            logger.warning("Login failed - wrong password", user_id=str(user.id))
            raise InvalidCredentialsError()

        result = await self._transaction_manager.run(lambda: self._auth_token_service.issue_tokens(user))
        logger.info("Login successful", user_id=str(user.id))
        return result

    async def logout(self, refresh_token: Optional[str]) -> None:
        """Delete the presented refresh token.

        A missing, blank or unknown token is not an error.
        """
        if not refresh_token or not refresh_token.strip():
            logger.debug("Logout without refresh token")
            return

        token = await self._refresh_token_repository.get_by_token(refresh_token.strip())
        if token is None:
            logger.debug("Logout with unknown refresh token")
            return

        await self._transaction_manager.run(lambda: self._refresh_token_service.revoke_token(token))
        logger.info("Logout successful", user_id=str(token.user_id))

    async def refresh(self, refresh_token: Optional[str]) -> AuthResult:
        """Exchange a refresh token for a brand-new token pair.

        Raises:
            RefreshTokenNotFoundError: Blank or unknown token, or its owner is gone.
            AccountStateConflictError: The owner is not active.
            RefreshTokenExpiredError: The token expired; it is deleted.
        """
        token = await self._refresh_token_service.validate(refresh_token or "")

        user = await self._user_repository.get_by_id(token.user_id)
        if user is None:
            await self._refresh_token_service.revoke_token(token)
            raise RefreshTokenNotFoundError()

        user.ensure_account_enabled()
        await self._refresh_token_service.verify_not_expired(token)

        result = await self._transaction_manager.run(lambda: self._auth_token_service.issue_tokens(user))
        logger.info("Refresh token rotated", user_id=str(user.id))
        return result
