"""Authentication flows: signup, verification, sessions and passwords."""

from .account_verification_service import AccountVerificationService
from .password_change_service import PasswordChangeService
from .password_reset_service import PasswordResetService
from .session_service import SessionService
from .signup_service import SignupService

__all__ = [
    "AccountVerificationService",
    "PasswordChangeService",
    "PasswordResetService",
    "SessionService",
    "SignupService",
]
