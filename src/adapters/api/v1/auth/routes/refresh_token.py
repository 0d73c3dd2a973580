from __future__ import annotations

"""/auth/refresh-token route module.

Rotates the refresh token: the cookie value is spent and replaced with a
brand-new one on every successful call. An expired token is deleted and the
401 answer also clears the cookie.
"""

from typing import Optional

from fastapi import APIRouter, Cookie, Request, Response

from src.adapters.api.v1.auth.schemas import TokenResponse
from src.adapters.api.v1.auth.utils import REFRESH_TOKEN_COOKIE, clear_session, issue_session
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.core.exceptions import RefreshTokenExpiredError
from src.core.handlers import unauthorized_error_handler
from src.domain.rate_limiting import GLOBAL

router = APIRouter()


@router.post(
    "",
    response_model=TokenResponse,
    summary="Exchange the refresh token cookie for a new token pair",
    responses={
        401: {"description": "Missing, unknown or expired refresh token"},
        409: {"description": "Account is no longer active"},
    },
)
async def refresh_session(
    request: Request,
    response: Response,
    container: Container,
    identity: ClientIdentity,
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_TOKEN_COOKIE),
) -> TokenResponse:
    await container.rate_limiter.acquire_or_raise(GLOBAL, identity)

    try:
        result = await container.session_service.refresh(refresh_token)
    except RefreshTokenExpiredError as e:
        error_response = await unauthorized_error_handler(request, e)
        clear_session(error_response, container.settings)
        return error_response
    return issue_session(response, result, container.settings)
