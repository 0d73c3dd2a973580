from __future__ import annotations

"""/auth/login route module.

A successful login replaces whatever refresh token the user held, so logging
in on a second device ends the first session.
"""

import structlog
from fastapi import APIRouter, Response

from src.adapters.api.v1.auth.schemas import LoginRequest, TokenResponse
from src.adapters.api.v1.auth.utils import issue_session
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.domain.rate_limiting import LOGIN

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=TokenResponse,
    summary="Log in with username and password",
    responses={
        401: {"description": "Invalid credentials"},
        409: {"description": "Account pending verification, locked or disabled"},
        429: {"description": "Too many login attempts"},
    },
)
async def login(
    payload: LoginRequest,
    response: Response,
    container: Container,
    identity: ClientIdentity,
) -> TokenResponse:
    await container.rate_limiter.acquire_or_raise(LOGIN, identity)

    result = await container.session_service.login(payload.username, payload.password)
    logger.debug("Session issued", user_id=str(result.user.id))
    return issue_session(response, result, container.settings)
