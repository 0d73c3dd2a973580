from __future__ import annotations

"""Response Pydantic model for token data."""

from datetime import datetime

from pydantic import BaseModel

from src.adapters.api.v1.auth.schemas.responses.user import UserOut


class TokenResponse(BaseModel):
    """Access credential returned by verify, login and refresh.

    The refresh token is not part of the body; it travels in the HTTP-only
    ``refresh_token`` cookie.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_at: datetime
    user: UserOut
