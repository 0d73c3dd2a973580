from __future__ import annotations

"""Utility functions for authentication API routes.

Shared helpers for the endpoints that hand out or revoke sessions (verify,
login, refresh, logout), so the cookie attributes stay identical everywhere.
"""

from fastapi import Response

from src.adapters.api.v1.auth.schemas import TokenResponse, UserOut
from src.core.config.settings import Settings
from src.domain.services.tokens import AuthResult

REFRESH_TOKEN_COOKIE = "refresh_token"
REFRESH_TOKEN_COOKIE_PATH = "/api/v1/auth"


def _secure_cookies(settings: Settings) -> bool:
    return settings.APP_ENV in ("production", "staging")


def issue_session(response: Response, result: AuthResult, settings: Settings) -> TokenResponse:
    """Set the refresh token cookie and build the body with the access credential.

    Note:
        The cookie is HTTP-only with ``SameSite=Strict`` and is scoped to the
        auth endpoints; ``Secure`` is set outside development and test.
    """
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=result.refresh_token,
        max_age=settings.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=_secure_cookies(settings),
        samesite="strict",
        path=REFRESH_TOKEN_COOKIE_PATH,
    )
    return TokenResponse(
        access_token=result.access_token,
        expires_at=result.access_token_expires_at,
        user=UserOut.from_entity(result.user),
    )


def clear_session(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=REFRESH_TOKEN_COOKIE,
        path=REFRESH_TOKEN_COOKIE_PATH,
        httponly=True,
        secure=_secure_cookies(settings),
        samesite="strict",
    )
