from __future__ import annotations

"""Centralized, structured exception hierarchy for Phonegate.

Every failure the authentication core can report is one of six kinds, each a
base class below: not found, invalid input, conflict, unauthorized, too many
requests and internal. Concrete errors carry a machine-readable ``code`` that
doubles as the i18n catalogue key for the human-readable ``message``.

The hierarchy is designed to:
- Provide specific errors for each failure scenario of the auth flows.
- Support internationalization (i18n) for user-facing messages.
- Map cleanly to HTTP status codes in the API layer (see ``src.core.handlers``).
"""

from typing import Final, Optional

from src.utils.i18n import get_translated_message

__all__: Final = [
    "PhonegateError",
    "NotFoundError",
    "InvalidInputError",
    "ConflictError",
    "UnauthorizedError",
    "ForbiddenError",
    "TooManyRequestsError",
    "InternalError",
    "UserNotFoundError",
    "InvalidOtpSessionError",
    "PhoneChangeNotInitiatedError",
    "InvalidOtpError",
    "InvalidOtpFormatError",
    "InvalidPasswordResetTokenError",
    "InvalidTokenFormatError",
    "InvalidPhoneFormatError",
    "InvalidUsernameFormatError",
    "InvalidPasswordFormatError",
    "InvalidFullNameError",
    "IncorrectPasswordError",
    "DomainValidationError",
    "UserAlreadyExistsError",
    "AccountStateConflictError",
    "InvalidCredentialsError",
    "RefreshTokenNotFoundError",
    "RefreshTokenExpiredError",
    "InvalidAccessTokenError",
    "AccountStatusForbiddenError",
    "RateLimitExceededError",
    "DeliveryError",
    "PersistenceError",
]


class PhonegateError(Exception):
    """Base exception class for all custom errors in the Phonegate application.

    Attributes:
        message (str): A human-readable error message, suitable for logging and
                       for the API response body. Defaults to the translated
                       catalogue entry for ``code``.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "internal_error"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None):
        self.code = code or type(self).code
        self.translatable = message is None
        self.message = message or get_translated_message(self.code)
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Taxonomy bases
# ---------------------------------------------------------------------------


class NotFoundError(PhonegateError):
    """A user, token or session referenced by the request does not exist. Maps to 404."""

    code = "not_found"


class InvalidInputError(PhonegateError):
    """The request is malformed or violates a business rule. Maps to 400."""

    code = "invalid_input"


class ConflictError(PhonegateError):
    """A uniqueness violation or an account-status conflict. Maps to 409."""

    code = "conflict"


class UnauthorizedError(PhonegateError):
    """Bad credentials or an expired/invalid credential. Maps to 401."""

    code = "unauthorized"


class ForbiddenError(PhonegateError):
    """The caller is authenticated but may not act in its current state. Maps to 403."""

    code = "forbidden"


class TooManyRequestsError(PhonegateError):
    """Rate limit exhausted. Maps to 429."""

    code = "rate_limit_exceeded"


class InternalError(PhonegateError):
    """Unexpected persistence or delivery failure. Maps to 500."""

    code = "internal_error"


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------


class UserNotFoundError(NotFoundError):
    code = "user_not_found"


class InvalidOtpSessionError(NotFoundError):
    """Raised when an OTP session id is unknown or its TTL has elapsed."""

    code = "invalid_otp_session"


class PhoneChangeNotInitiatedError(NotFoundError):
    """Raised when completing or resending a phone change that has no pending record."""

    code = "phone_change_not_initiated"


# ---------------------------------------------------------------------------
# Invalid input
# ---------------------------------------------------------------------------


class InvalidOtpError(InvalidInputError):
    """Raised when a one-time code is missing, wrong or expired.

    The message is deliberately the same for all three cases.
    """

    code = "invalid_otp"


class InvalidOtpFormatError(InvalidInputError):
    code = "invalid_otp_format"


class InvalidPasswordResetTokenError(InvalidInputError):
    code = "invalid_password_reset_token"


class InvalidTokenFormatError(InvalidInputError):
    code = "invalid_token_format"


class InvalidPhoneFormatError(InvalidInputError):
    code = "invalid_phone_format"


class InvalidUsernameFormatError(InvalidInputError):
    code = "invalid_username_format"


class InvalidPasswordFormatError(InvalidInputError):
    code = "invalid_password_format"


class InvalidFullNameError(InvalidInputError):
    code = "invalid_full_name"


class IncorrectPasswordError(InvalidInputError):
    """Raised when the current password given to change-password does not match."""

    code = "incorrect_current_password"


class DomainValidationError(InvalidInputError):
    """Raised when an aggregate refuses a transition, e.g. verifying an active account."""

    code = "domain_validation_error"


# ---------------------------------------------------------------------------
# Conflict
# ---------------------------------------------------------------------------


class UserAlreadyExistsError(ConflictError):
    """Raised when a username or phone number is already owned by another user.

    Attributes:
        field (str): ``"USERNAME"`` or ``"PHONE"``.
    """

    USERNAME: Final = "USERNAME"
    PHONE: Final = "PHONE"

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        code = "username_already_exists" if field == self.USERNAME else "phone_already_exists"
        super().__init__(message, code)


class AccountStateConflictError(ConflictError):
    """Raised when the account status forbids the requested operation.

    Attributes:
        status: The offending ``AccountStatus`` (or ``None`` for the generic
                "locked or disabled" rejection used by resend flows).
    """

    code = "account_state_conflict"

    def __init__(self, status=None, message: Optional[str] = None):
        self.status = status
        code = f"account_{status.value.lower()}" if status is not None else None
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Unauthorized / forbidden
# ---------------------------------------------------------------------------


class InvalidCredentialsError(UnauthorizedError):
    """Raised when login credentials are invalid.

    The message is generic to prevent user enumeration.
    """

    code = "invalid_credentials"


class RefreshTokenNotFoundError(UnauthorizedError):
    code = "refresh_token_not_found"


class RefreshTokenExpiredError(UnauthorizedError):
    code = "refresh_token_expired"


class InvalidAccessTokenError(UnauthorizedError):
    code = "invalid_access_token"


class AccountStatusForbiddenError(ForbiddenError):
    """Raised at the HTTP boundary when a valid access token belongs to a non-active user."""

    code = "account_state_conflict"


# ---------------------------------------------------------------------------
# Rate limiting / internal
# ---------------------------------------------------------------------------


class RateLimitExceededError(TooManyRequestsError):
    """Raised when a rate limit bucket has no tokens left.

    Attributes:
        limiter (str): Name of the template that rejected the call.
    """

    code = "rate_limit_exceeded"

    def __init__(self, limiter: str = "", message: Optional[str] = None):
        self.limiter = limiter
        super().__init__(message)


class DeliveryError(InternalError):
    """Raised by SMS senders when a message cannot be delivered."""

    code = "delivery_failed"


class PersistenceError(InternalError):
    code = "persistence_error"
