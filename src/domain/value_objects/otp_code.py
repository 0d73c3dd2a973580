"""One-time verification code value object."""

import re
import secrets
from dataclasses import dataclass, field
from typing import ClassVar, Pattern

from src.core.exceptions import InvalidOtpFormatError


@dataclass(frozen=True)
class OtpCode:
    """A 6-digit decimal one-time code.

    Generation policy: codes are drawn uniformly from 100000-999999 using the
    ``secrets`` CSPRNG, so a generated code never has a leading zero. Parsing
    accepts any 6-digit string (including ``000123``) so that validation
    compares exactly what was stored.
    """

    value: str = field(repr=False)

    LENGTH: ClassVar[int] = 6
    MIN_VALUE: ClassVar[int] = 100_000
    MAX_VALUE: ClassVar[int] = 999_999
    PATTERN: ClassVar[Pattern[str]] = re.compile(r"[0-9]{6}")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.PATTERN.fullmatch(self.value):
            raise InvalidOtpFormatError()

    @classmethod
    def generate(cls) -> "OtpCode":
        """Generate a fresh code in the 100000-999999 range."""
        number = cls.MIN_VALUE + secrets.randbelow(cls.MAX_VALUE - cls.MIN_VALUE + 1)
        return cls(str(number))

    @classmethod
    def parse(cls, raw: str) -> "OtpCode":
        """Build a code from user input, trimming surrounding whitespace."""
        return cls(raw.strip() if isinstance(raw, str) else raw)

    def mask_for_logging(self) -> str:
        return "*" * self.LENGTH

    def __str__(self) -> str:
        return self.value
