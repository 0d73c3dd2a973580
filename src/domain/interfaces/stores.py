"""Keyed-store interfaces for short-lived authentication artefacts.

Every artefact here expires on its own: one-time codes, OTP sessions, password
reset tokens and pending phone changes. Implementations live in
``src.infrastructure.stores`` and sit on top of a generic ``IKeyValueStore``
(Redis in production, in-process for development and tests).
"""

import uuid
from abc import ABC, abstractmethod
from typing import Optional


class IKeyValueStore(ABC):
    """Interface for a TTL-capable string key-value store.

    ``take`` and ``take_if_match`` must be atomic: when two callers race on the
    same key, at most one of them observes the value.
    """

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Stores ``value`` under ``key``, replacing any previous value and TTL."""
        raise NotImplementedError

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def take(self, key: str) -> Optional[str]:
        """Atomically reads and deletes ``key``."""
        raise NotImplementedError

    @abstractmethod
    async def take_if_match(self, key: str, expected: str) -> bool:
        """Atomically deletes ``key`` if and only if it currently holds ``expected``.

        Returns:
            ``True`` if the value matched and was deleted.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:
        raise NotImplementedError


class IOtpStore(ABC):
    """Storage for one-time codes, at most one live code per user."""

    @abstractmethod
    async def put(self, user_id: uuid.UUID, code: str, ttl_seconds: int) -> None:
        """Stores ``code`` for ``user_id``, overwriting any unconsumed code."""
        raise NotImplementedError

    @abstractmethod
    async def take_if_match(self, user_id: uuid.UUID, code: str) -> bool:
        """Consumes the live code of ``user_id`` if it equals ``code``."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, user_id: uuid.UUID) -> None:
        raise NotImplementedError


class IOtpSessionStore(ABC):
    """Maps an opaque OTP session id to a user id for a short TTL."""

    @abstractmethod
    async def put(self, session_id: str, user_id: uuid.UUID, ttl_seconds: int) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get_user_id(self, session_id: str) -> Optional[uuid.UUID]:
        """Resolves the session without consuming it."""
        raise NotImplementedError

    @abstractmethod
    async def take_user_id(self, session_id: str) -> Optional[uuid.UUID]:
        """Resolves and consumes the session atomically."""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        raise NotImplementedError


class IPasswordResetTokenStore(ABC):
    """Maps a single-use password reset token to a user id."""

    @abstractmethod
    async def put(self, token: str, user_id: uuid.UUID, ttl_seconds: int) -> None:
        raise NotImplementedError

    @abstractmethod
    async def take_user_id(self, token: str) -> Optional[uuid.UUID]:
        """Resolves and deletes the token atomically."""
        raise NotImplementedError


class IPendingPhoneChangeStore(ABC):
    """Holds the requested new phone number of a user, one per user."""

    @abstractmethod
    async def put(self, user_id: uuid.UUID, phone: str, ttl_seconds: int) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get(self, user_id: uuid.UUID) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, user_id: uuid.UUID) -> None:
        raise NotImplementedError
