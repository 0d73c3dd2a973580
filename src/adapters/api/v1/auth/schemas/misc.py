from __future__ import annotations

"""Miscellaneous utility schemas used by the auth API."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Simple envelope used for *200* or *202* acknowledgments."""

    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class OtpSessionResponse(BaseModel):
    """Returned by flows that send a code: the session the code must be verified against."""

    session_id: str
    message: str


class ResetTokenResponse(BaseModel):
    """Single-use token authorising ``POST /auth/reset-password``."""

    reset_token: str
