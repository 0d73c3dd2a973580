"""OTP session identifier value object.

An OTP session lets an unauthenticated client (signup, resend, forgot password)
refer to a user without ever seeing the user id or the phone number.
"""

import uuid
from dataclasses import dataclass

from src.core.exceptions import InvalidOtpSessionError


@dataclass(frozen=True)
class OtpSessionId:
    """Opaque session id, a canonical UUID4 string."""

    value: str

    def __post_init__(self) -> None:
        try:
            parsed = uuid.UUID(str(self.value))
        except (TypeError, ValueError) as exc:
            raise InvalidOtpSessionError() from exc
        object.__setattr__(self, "value", str(parsed))

    @classmethod
    def generate(cls) -> "OtpSessionId":
        return cls(str(uuid.uuid4()))

    def mask_for_logging(self) -> str:
        return self.value[:8] + "..."

    def __str__(self) -> str:
        return self.value
