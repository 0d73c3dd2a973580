"""Short-lived authentication artefacts (OTPs, sessions, reset tokens, pending phones)."""

from .auth_stores import (
    PHONE_CHANGE_OTP_PREFIX,
    KeyValueOtpSessionStore,
    KeyValueOtpStore,
    KeyValuePasswordResetTokenStore,
    KeyValuePendingPhoneChangeStore,
)
from .key_value import InMemoryKeyValueStore, RedisKeyValueStore

__all__ = [
    "PHONE_CHANGE_OTP_PREFIX",
    "InMemoryKeyValueStore",
    "KeyValueOtpSessionStore",
    "KeyValueOtpStore",
    "KeyValuePasswordResetTokenStore",
    "KeyValuePendingPhoneChangeStore",
    "RedisKeyValueStore",
]
