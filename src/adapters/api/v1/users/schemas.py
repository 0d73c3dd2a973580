from __future__ import annotations

"""Request‐payload Pydantic models for the ``/users/me`` endpoints."""

from pydantic import BaseModel, Field


class UpdateProfileRequest(BaseModel):
    full_name: str = Field(..., max_length=128, examples=["Alice Liddell"])


class ChangeUsernameRequest(BaseModel):
    username: str = Field(..., max_length=64, examples=["alice_02"])


class ChangePasswordRequest(BaseModel):
    """Payload expected by ``POST /users/me/password``."""

    current_password: str = Field(..., max_length=64, description="Current password for verification")
    new_password: str = Field(..., max_length=64, description="New password, 6-20 characters, no whitespace")


class PhoneChangeRequest(BaseModel):
    phone: str = Field(..., max_length=32, examples=["+15557654321"])


class ConfirmPhoneChangeRequest(BaseModel):
    code: str = Field(..., max_length=16, examples=["123456"])
