"""In-memory repositories for development and tests.

They enforce the same uniqueness rules as the SQL tables and hand out copies,
so mutating a returned aggregate does not change what is stored until ``save``.
"""

import copy
import uuid
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from src.core.exceptions import UserAlreadyExistsError
from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.user import AccountStatus, User
from src.domain.interfaces.repositories import IRefreshTokenRepository, IUserRepository


class InMemoryUserRepository(IUserRepository):
    def __init__(self) -> None:
        self._users: Dict[uuid.UUID, User] = {}

    async def save(self, user: User) -> User:
        for other in self._users.values():
            if other.id == user.id:
                continue
            if other.username == user.username:
                raise UserAlreadyExistsError(UserAlreadyExistsError.USERNAME)
            if other.phone == user.phone:
                raise UserAlreadyExistsError(UserAlreadyExistsError.PHONE)
        self._users[user.id] = copy.copy(user)
        return user

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        user = self._users.get(user_id)
        return copy.copy(user) if user is not None else None

    async def get_by_username(self, username: str) -> Optional[User]:
        return self._find(lambda u: u.username == username)

    async def get_by_phone(self, phone: str) -> Optional[User]:
        return self._find(lambda u: u.phone == phone)

    async def exists_by_username(self, username: str) -> bool:
        return self._find(lambda u: u.username == username) is not None

    async def exists_by_phone(self, phone: str) -> bool:
        return self._find(lambda u: u.phone == phone) is not None

    async def find_by_status_older_than(
        self,
        status: AccountStatus,
        cutoff: datetime,
        age_field: str = "created_at",
        limit: Optional[int] = None,
    ) -> List[User]:
        if age_field not in ("created_at", "updated_at"):
            raise ValueError(f"Unsupported age field: {age_field}")
        matches = sorted(
            (u for u in self._users.values() if u.status is status and getattr(u, age_field) < cutoff),
            key=lambda u: getattr(u, age_field),
        )
        if limit is not None:
            matches = matches[:limit]
        return [copy.copy(u) for u in matches]

    async def delete_all(self, users: Sequence[User]) -> int:
        deleted = 0
        for user in users:
            if self._users.pop(user.id, None) is not None:
                deleted += 1
        return deleted

    def _find(self, predicate) -> Optional[User]:
        for user in self._users.values():
            if predicate(user):
                return copy.copy(user)
        return None


class InMemoryRefreshTokenRepository(IRefreshTokenRepository):
    """At most one token per user, like the unique ``user_id`` column."""

    def __init__(self) -> None:
        self._tokens: Dict[uuid.UUID, RefreshToken] = {}

    async def save(self, token: RefreshToken) -> RefreshToken:
        self._tokens[token.user_id] = copy.copy(token)
        return token

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        for stored in self._tokens.values():
            if stored.token == token:
                return copy.copy(stored)
        return None

    async def get_by_user_id(self, user_id: uuid.UUID) -> Optional[RefreshToken]:
        stored = self._tokens.get(user_id)
        return copy.copy(stored) if stored is not None else None

    async def delete(self, token: RefreshToken) -> None:
        stored = self._tokens.get(token.user_id)
        if stored is not None and stored.id == token.id:
            del self._tokens[token.user_id]

    async def delete_by_user_id(self, user_id: uuid.UUID) -> None:
        self._tokens.pop(user_id, None)

    async def delete_all_by_user_ids(self, user_ids: Sequence[uuid.UUID]) -> int:
        deleted = 0
        for user_id in user_ids:
            if self._tokens.pop(user_id, None) is not None:
                deleted += 1
        return deleted

    def count(self) -> int:
        return len(self._tokens)
