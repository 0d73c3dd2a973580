from __future__ import annotations

"""Request‐payload Pydantic models for authentication endpoints.

Shape rules (username pattern, phone format, password policy, OTP digits) are
enforced by the domain value objects so every violation maps to the same
``400`` body; the models only bound the field sizes.
"""

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Payload expected by ``POST /auth/signup``."""

    username: str = Field(..., max_length=64, examples=["alice_01"])
    full_name: str = Field(..., max_length=128, examples=["Alice Liddell"])
    phone: str = Field(..., max_length=32, examples=["+15551234567"])
    password: str = Field(..., max_length=64, examples=["Secr3t!1"])


class VerifyAccountRequest(BaseModel):
    """Payload expected by ``POST /auth/verify-account``."""

    session_id: str = Field(..., max_length=64)
    code: str = Field(..., max_length=16, examples=["123456"])


class ResendOtpRequest(BaseModel):
    """Payload expected by ``POST /auth/resend-otp``."""

    session_id: str = Field(..., max_length=64)


class LoginRequest(BaseModel):
    """Payload expected by ``POST /auth/login``."""

    username: str = Field(..., max_length=64, examples=["alice_01"])
    password: str = Field(..., max_length=64, examples=["Secr3t!1"])


class ForgotPasswordRequest(BaseModel):
    """Payload expected by ``POST /auth/forgot-password``."""

    phone: str = Field(..., max_length=32, examples=["+15551234567"])


class ResetPasswordTokenRequest(BaseModel):
    """Payload expected by ``POST /auth/reset-password-token``."""

    session_id: str = Field(..., max_length=64)
    code: str = Field(..., max_length=16, examples=["123456"])


class ResetPasswordRequest(BaseModel):
    """Payload expected by ``POST /auth/reset-password``."""

    token: str = Field(..., max_length=64)
    new_password: str = Field(..., max_length=64)
