"""Prefixed artefact stores on top of an ``IKeyValueStore``.

Key layout:

- ``otp:user:<user_id>`` -> 6-digit code (signup verification, password reset)
- ``otp:phone-change:<user_id>`` -> 6-digit code sent to a pending new phone
- ``otp-session:<session_id>`` -> user id
- ``password-reset-token:<token>`` -> user id
- ``pending-phone-change:<user_id>`` -> E.164 phone
"""

import uuid
from typing import Optional

from src.domain.interfaces.stores import (
    IKeyValueStore,
    IOtpSessionStore,
    IOtpStore,
    IPasswordResetTokenStore,
    IPendingPhoneChangeStore,
)

OTP_PREFIX = "otp:user:"
PHONE_CHANGE_OTP_PREFIX = "otp:phone-change:"
OTP_SESSION_PREFIX = "otp-session:"
PASSWORD_RESET_TOKEN_PREFIX = "password-reset-token:"
PENDING_PHONE_CHANGE_PREFIX = "pending-phone-change:"


def _as_uuid(value: Optional[str]) -> Optional[uuid.UUID]:
    return uuid.UUID(value) if value else None


class KeyValueOtpStore(IOtpStore):
    def __init__(self, store: IKeyValueStore, prefix: str = OTP_PREFIX):
        self._store = store
        self._prefix = prefix

    async def put(self, user_id: uuid.UUID, code: str, ttl_seconds: int) -> None:
        await self._store.set(self._key(user_id), code, ttl_seconds)

    async def take_if_match(self, user_id: uuid.UUID, code: str) -> bool:
        return await self._store.take_if_match(self._key(user_id), code)

    async def delete(self, user_id: uuid.UUID) -> None:
        await self._store.delete(self._key(user_id))

    def _key(self, user_id: uuid.UUID) -> str:
        return f"{self._prefix}{user_id}"


class KeyValueOtpSessionStore(IOtpSessionStore):
    def __init__(self, store: IKeyValueStore, prefix: str = OTP_SESSION_PREFIX):
        self._store = store
        self._prefix = prefix

    async def put(self, session_id: str, user_id: uuid.UUID, ttl_seconds: int) -> None:
        await self._store.set(self._prefix + session_id, str(user_id), ttl_seconds)

    async def get_user_id(self, session_id: str) -> Optional[uuid.UUID]:
        return _as_uuid(await self._store.get(self._prefix + session_id))

    async def take_user_id(self, session_id: str) -> Optional[uuid.UUID]:
        return _as_uuid(await self._store.take(self._prefix + session_id))

    async def delete(self, session_id: str) -> None:
        await self._store.delete(self._prefix + session_id)


class KeyValuePasswordResetTokenStore(IPasswordResetTokenStore):
    def __init__(self, store: IKeyValueStore, prefix: str = PASSWORD_RESET_TOKEN_PREFIX):
        self._store = store
        self._prefix = prefix

    async def put(self, token: str, user_id: uuid.UUID, ttl_seconds: int) -> None:
        await self._store.set(self._prefix + token, str(user_id), ttl_seconds)

    async def take_user_id(self, token: str) -> Optional[uuid.UUID]:
        return _as_uuid(await self._store.take(self._prefix + token))


class KeyValuePendingPhoneChangeStore(IPendingPhoneChangeStore):
    """Holds the requested phone; a new request for the same user replaces it."""

    def __init__(self, store: IKeyValueStore, prefix: str = PENDING_PHONE_CHANGE_PREFIX):
        self._store = store
        self._prefix = prefix

    async def put(self, user_id: uuid.UUID, phone: str, ttl_seconds: int) -> None:
        await self._store.set(f"{self._prefix}{user_id}", phone, ttl_seconds)

    async def get(self, user_id: uuid.UUID) -> Optional[str]:
        return await self._store.get(f"{self._prefix}{user_id}")

    async def delete(self, user_id: uuid.UUID) -> None:
        await self._store.delete(f"{self._prefix}{user_id}")
