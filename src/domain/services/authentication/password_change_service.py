"""Password change for authenticated users."""

import uuid

import structlog

from src.core.exceptions import IncorrectPasswordError, UserNotFoundError
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import IPasswordHasher, ITransactionManager
from src.domain.value_objects.password import Password

logger = structlog.get_logger(__name__)


class PasswordChangeService:
    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
        transaction_manager: ITransactionManager,
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._transaction_manager = transaction_manager

    async def change_password(self, user_id: uuid.UUID, current_password: str, new_password: str) -> None:
        """Replace the password after checking the current one.

        Raises:
            UserNotFoundError: Unknown user.
            IncorrectPasswordError: ``current_password`` does not match.
            InvalidPasswordFormatError: ``new_password`` breaks the policy.
        """
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        if not current_password or not self._password_hasher.matches(current_password, user.password_hash):
            logger.warning("Password change rejected - wrong current password", user_id=str(user_id))
            raise IncorrectPasswordError()

        password = Password(new_password)
        user.update_password_hash(self._password_hasher.hash(password.value))
        await self._transaction_manager.run(lambda: self._user_repository.save(user))
        logger.info("Password changed", user_id=str(user_id))
