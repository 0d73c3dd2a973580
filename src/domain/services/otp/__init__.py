"""One-time code engine: codes, OTP sessions and password reset tokens."""

from .otp_service import OtpService
from .otp_session_service import OtpSessionService
from .password_reset_token_service import PasswordResetTokenService

__all__ = ["OtpService", "OtpSessionService", "PasswordResetTokenService"]
