"""Username value object.

Usernames are 3 to 50 characters of ASCII letters, digits and underscores.
They are compared exactly as stored; surrounding whitespace is stripped.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Pattern

from src.core.exceptions import InvalidUsernameFormatError


@dataclass(frozen=True)
class Username:
    """Validated username.

    Attributes:
        value: The username as stored on the user aggregate.
    """

    value: str

    MIN_LENGTH: ClassVar[int] = 3
    MAX_LENGTH: ClassVar[int] = 50
    PATTERN: ClassVar[Pattern[str]] = re.compile(r"^[A-Za-z0-9_]+$")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidUsernameFormatError()
        normalized = self.value.strip()
        if not self.MIN_LENGTH <= len(normalized) <= self.MAX_LENGTH:
            raise InvalidUsernameFormatError()
        if not self.PATTERN.match(normalized):
            raise InvalidUsernameFormatError()
        object.__setattr__(self, "value", normalized)

    def mask_for_logging(self) -> str:
        """Return masked username for safe logging (first 2 chars + asterisks)."""
        return self.value[:2] + "*" * (len(self.value) - 2)

    def __str__(self) -> str:
        return self.value
