"""Full name value object."""

from dataclasses import dataclass
from typing import ClassVar

from src.core.exceptions import InvalidFullNameError


@dataclass(frozen=True)
class FullName:
    """Display name of a user, 3 to 100 characters after trimming."""

    value: str

    MIN_LENGTH: ClassVar[int] = 3
    MAX_LENGTH: ClassVar[int] = 100

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidFullNameError()
        normalized = " ".join(self.value.split())
        if not self.MIN_LENGTH <= len(normalized) <= self.MAX_LENGTH:
            raise InvalidFullNameError()
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
