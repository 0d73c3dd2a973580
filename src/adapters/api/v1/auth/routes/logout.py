from __future__ import annotations

"""/auth/logout route module.

Deletes the refresh token presented in the cookie. Logging out without a
cookie, or with a token that is already gone, still succeeds.
"""

from typing import Optional

from fastapi import APIRouter, Cookie, Request, Response

from src.adapters.api.v1.auth.schemas import MessageResponse
from src.adapters.api.v1.auth.utils import REFRESH_TOKEN_COOKIE, clear_session
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.domain.rate_limiting import GLOBAL
from src.utils.i18n import get_request_language, get_translated_message

router = APIRouter()


@router.post("", response_model=MessageResponse, summary="Log out and revoke the refresh token")
async def logout(
    request: Request,
    response: Response,
    container: Container,
    identity: ClientIdentity,
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_TOKEN_COOKIE),
) -> MessageResponse:
    await container.rate_limiter.acquire_or_raise(GLOBAL, identity)

    await container.session_service.logout(refresh_token)
    clear_session(response, container.settings)
    return MessageResponse(message=get_translated_message("logout_successful", get_request_language(request)))
