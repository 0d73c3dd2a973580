"""Repository interfaces for abstracting data persistence in the domain layer.

This module defines the abstract base classes (interfaces) for repositories,
which act as a "port" in the context of Hexagonal Architecture. The domain layer
uses these interfaces to interact with persistence mechanisms without being
coupled to any specific technology.

The concrete implementations of these interfaces reside in the `infrastructure`
layer (SQLModel/PostgreSQL and in-memory adapters).
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.user import AccountStatus, User


class IUserRepository(ABC):
    """An interface defining the contract for user persistence operations.

    Username and phone are unique at this level: ``save`` of a new user whose
    username or phone collides with an existing row raises
    ``UserAlreadyExistsError`` even when a prior ``exists_by_*`` check passed.
    """

    @abstractmethod
    async def save(self, user: User) -> User:
        """Inserts or updates a user.

        Raises:
            UserAlreadyExistsError: On a username or phone uniqueness violation.
        """
        raise NotImplementedError

    @abstractmethod
    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_phone(self, phone: str) -> Optional[User]:
        """Retrieves a user by phone number.

        Args:
            phone: Phone number in E.164 format.
        """
        raise NotImplementedError

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def exists_by_phone(self, phone: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def find_by_status_older_than(
        self,
        status: AccountStatus,
        cutoff: datetime,
        age_field: str = "created_at",
        limit: Optional[int] = None,
    ) -> List[User]:
        """Retrieves users in ``status`` whose ``age_field`` is strictly before ``cutoff``.

        Args:
            status: Status to match.
            cutoff: Rows with a timestamp older than this qualify.
            age_field: ``"created_at"`` or ``"updated_at"``.
            limit: Maximum number of rows to return (bounded cleanup batches).
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_all(self, users: Sequence[User]) -> int:
        """Hard-deletes the given users.

        Returns:
            Number of rows actually deleted (rows already gone are not counted).
        """
        raise NotImplementedError


class IRefreshTokenRepository(ABC):
    """An interface defining the contract for refresh token persistence.

    A user owns at most one row; the unique constraint on ``user_id`` backs the
    single-session rule enforced by the refresh token service.
    """

    @abstractmethod
    async def save(self, token: RefreshToken) -> RefreshToken:
        raise NotImplementedError

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_user_id(self, user_id: uuid.UUID) -> Optional[RefreshToken]:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, token: RefreshToken) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete_by_user_id(self, user_id: uuid.UUID) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete_all_by_user_ids(self, user_ids: Sequence[uuid.UUID]) -> int:
        """Deletes the tokens owned by any of ``user_ids``.

        Returns:
            Number of tokens deleted.
        """
        raise NotImplementedError
