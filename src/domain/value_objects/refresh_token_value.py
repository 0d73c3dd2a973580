"""Refresh token value object."""

import re
import secrets
from dataclasses import dataclass
from typing import ClassVar, Pattern

from src.core.exceptions import RefreshTokenNotFoundError


@dataclass(frozen=True)
class RefreshTokenValue:
    """The opaque string a client presents to renew its session.

    Generated with ``secrets.token_urlsafe(32)`` (256 bits). A presented value
    with the wrong shape cannot match any stored token, so it is rejected as
    not found rather than as malformed input.
    """

    value: str

    TOKEN_BYTES: ClassVar[int] = 32
    PATTERN: ClassVar[Pattern[str]] = re.compile(r"^[A-Za-z0-9_-]{43}$")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.PATTERN.match(self.value):
            raise RefreshTokenNotFoundError()

    @classmethod
    def generate(cls) -> "RefreshTokenValue":
        return cls(secrets.token_urlsafe(cls.TOKEN_BYTES))

    def mask_for_logging(self) -> str:
        return self.value[:8] + "..."

    def __str__(self) -> str:
        return self.value
