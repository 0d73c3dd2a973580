"""Domain Services for the phone authentication bounded context.

Engines:
- OTP: one-time codes, OTP sessions and password reset tokens (``otp``)
- Tokens: refresh token lifecycle and access/refresh pair issuing (``tokens``)

Flows:
- Authentication: signup, verification, login/logout/refresh, password reset and change
- Account: phone change, profile edits, self-disable and cleanup sweeps

Every flow receives its collaborators through the constructor; nothing here
reads global configuration.
"""

from .account import AccountCleanupService, PhoneChangeService, ProfileService
from .authentication import (
    AccountVerificationService,
    PasswordChangeService,
    PasswordResetService,
    SessionService,
    SignupService,
)
from .notification import VerificationDispatcher
from .otp import OtpService, OtpSessionService, PasswordResetTokenService
from .tokens import AuthResult, AuthTokenService, RefreshTokenService

__all__ = [
    # Engines
    "OtpService",
    "OtpSessionService",
    "PasswordResetTokenService",
    "RefreshTokenService",
    "AuthTokenService",
    "AuthResult",
    "VerificationDispatcher",
    # Authentication flows
    "SignupService",
    "AccountVerificationService",
    "SessionService",
    "PasswordResetService",
    "PasswordChangeService",
    # Account flows
    "PhoneChangeService",
    "ProfileService",
    "AccountCleanupService",
]
