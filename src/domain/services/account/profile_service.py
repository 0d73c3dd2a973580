"""Self-service profile operations for authenticated users."""

import uuid

import structlog

from src.core.exceptions import UserAlreadyExistsError, UserNotFoundError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import ITransactionManager
from src.domain.services.tokens.refresh_token_service import RefreshTokenService
from src.domain.value_objects.full_name import FullName
from src.domain.value_objects.username import Username

logger = structlog.get_logger(__name__)


class ProfileService:
    """Reads and edits the caller's own account."""

    def __init__(
        self,
        user_repository: IUserRepository,
        refresh_token_service: RefreshTokenService,
        transaction_manager: ITransactionManager,
    ):
        self._user_repository = user_repository
        self._refresh_token_service = refresh_token_service
        self._transaction_manager = transaction_manager

    async def get_profile(self, user_id: uuid.UUID) -> User:
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    async def update_profile(self, user_id: uuid.UUID, full_name: str) -> User:
        user = await self.get_profile(user_id)
        user.update_profile(FullName(full_name).value)
        saved = await self._transaction_manager.run(lambda: self._user_repository.save(user))
        logger.info("Profile updated", user_id=str(user_id))
        return saved

    async def change_username(self, user_id: uuid.UUID, new_username: str) -> User:
        """Rename the account.

        Raises:
            UserAlreadyExistsError: Another account already uses ``new_username``.
        """
        user = await self.get_profile(user_id)
        username = Username(new_username)
        if username.value == user.username:
            return user

        owner = await self._user_repository.get_by_username(username.value)
        if owner is not None and owner.id != user.id:
            logger.warning("Username change rejected - taken", user_id=str(user_id), username=username.mask_for_logging())
            raise UserAlreadyExistsError(UserAlreadyExistsError.USERNAME)

        user.change_username(username.value)
        saved = await self._transaction_manager.run(lambda: self._user_repository.save(user))
        logger.info("Username changed", user_id=str(user_id), username=username.mask_for_logging())
        return saved

    async def disable_my_account(self, user_id: uuid.UUID) -> None:
        """Disable the account and end its session. Idempotent."""
        user = await self.get_profile(user_id)
        user.disable_account()

        async def _disable() -> None:
            await self._user_repository.save(user)
            await self._refresh_token_service.revoke(user.id)

        await self._transaction_manager.run(_disable)
        logger.info("Account disabled", user_id=str(user_id))
