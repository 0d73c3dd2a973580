"""Phone number value object backed by the ``phonenumbers`` library.

Phone numbers are always stored in E.164 form (``+5511987654321``), which is also
the uniqueness key in the user repository.
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Pattern

import phonenumbers
from phonenumbers import NumberParseException, PhoneNumberFormat

from src.core.exceptions import InvalidPhoneFormatError


@dataclass(frozen=True)
class Phone:
    """A phone number in E.164 format.

    Use ``Phone.parse`` for user input: it accepts national formats (with the
    configured default region), spaces, dashes and parentheses. The constructor
    only accepts an already normalized E.164 string.
    """

    value: str

    E164_PATTERN: ClassVar[Pattern[str]] = re.compile(r"\+[1-9][0-9]{6,14}")

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.E164_PATTERN.fullmatch(self.value):
            raise InvalidPhoneFormatError()

    @classmethod
    def parse(cls, raw: str, default_region: str = "BR") -> "Phone":
        """Parse free-form user input into an E.164 phone number.

        Args:
            raw: Number as typed by the user.
            default_region: ISO 3166 region used when ``raw`` has no ``+`` prefix.

        Raises:
            InvalidPhoneFormatError: If the input cannot be a phone number.
        """
        if not raw or not raw.strip():
            raise InvalidPhoneFormatError()
        try:
            parsed = phonenumbers.parse(raw.strip(), default_region)
        except NumberParseException as exc:
            raise InvalidPhoneFormatError() from exc
        if not phonenumbers.is_possible_number(parsed):
            raise InvalidPhoneFormatError()
        return cls(phonenumbers.format_number(parsed, PhoneNumberFormat.E164))

    def mask_for_logging(self) -> str:
        """Keep the country prefix and the last 4 digits."""
        return self.value[:3] + "*" * (len(self.value) - 7) + self.value[-4:]

    def __str__(self) -> str:
        return self.value
