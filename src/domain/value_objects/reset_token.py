"""Reset Token Value Object for password reset authorization.

A reset token is issued once the user proved control of the phone with an OTP,
and is exchanged exactly once for a password change.
"""

import re
import secrets
from dataclasses import dataclass
from typing import ClassVar, Pattern

from src.core.exceptions import InvalidPasswordResetTokenError


@dataclass(frozen=True)
class ResetToken:
    """Password reset token value object.

    Security Features:
        - 256 bits of entropy from ``secrets.token_urlsafe``
        - URL-safe alphabet, fixed length, validated on construction
        - Immutable once created

    Attributes:
        value: The token string (43 URL-safe characters)
    """

    value: str

    TOKEN_BYTES: ClassVar[int] = 32
    PATTERN: ClassVar[Pattern[str]] = re.compile(r"^[A-Za-z0-9_-]{43}$")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.PATTERN.match(self.value):
            raise InvalidPasswordResetTokenError()

    @classmethod
    def generate(cls) -> "ResetToken":
        return cls(secrets.token_urlsafe(cls.TOKEN_BYTES))

    def mask_for_logging(self) -> str:
        """Return masked token for safe logging (first 8 chars)."""
        return self.value[:8] + "..."

    def __str__(self) -> str:
        return self.value
