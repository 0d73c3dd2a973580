from __future__ import annotations

"""Authentication API schemas package.

Request models, small envelopes and response models are grouped in focused
modules and re-exported here.
"""

# flake8: noqa: F401 – re-export

from .misc import MessageResponse, OtpSessionResponse, ResetTokenResponse
from .requests import (
    ForgotPasswordRequest,
    LoginRequest,
    ResendOtpRequest,
    ResetPasswordRequest,
    ResetPasswordTokenRequest,
    SignupRequest,
    VerifyAccountRequest,
)
from .responses import TokenResponse, UserOut
