"""Domain Value Objects for the authentication domain.

Value objects are immutable objects that describe domain concepts by their attributes
rather than their identity. Each one validates itself on construction and raises the
matching ``InvalidInputError`` subclass from ``src.core.exceptions``.
"""

from .full_name import FullName
from .otp_code import OtpCode
from .otp_session_id import OtpSessionId
from .password import Password
from .phone import Phone
from .refresh_token_value import RefreshTokenValue
from .reset_token import ResetToken
from .username import Username

__all__ = [
    "FullName",
    "OtpCode",
    "OtpSessionId",
    "Password",
    "Phone",
    "RefreshTokenValue",
    "ResetToken",
    "Username",
]
