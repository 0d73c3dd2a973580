"""Plain-text password value object.

Only the format policy lives here; hashing is delegated to the
``IPasswordHasher`` port so the domain never depends on a hashing library.
"""

from dataclasses import dataclass, field
from typing import ClassVar

from src.core.exceptions import InvalidPasswordFormatError


@dataclass(frozen=True)
class Password:
    """A candidate password: 6 to 20 characters, no whitespace.

    ``repr`` never shows the value.
    """

    value: str = field(repr=False)

    MIN_LENGTH: ClassVar[int] = 6
    MAX_LENGTH: ClassVar[int] = 20

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidPasswordFormatError()
        if not self.MIN_LENGTH <= len(self.value) <= self.MAX_LENGTH:
            raise InvalidPasswordFormatError()
        if any(ch.isspace() for ch in self.value):
            raise InvalidPasswordFormatError()

    def mask_for_logging(self) -> str:
        return "*" * 8
