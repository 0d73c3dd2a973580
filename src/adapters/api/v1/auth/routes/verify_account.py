from __future__ import annotations

"""/auth/verify-account route module.

Activates the account behind an OTP session and opens the first session: the
access credential goes in the body, the refresh token in an HTTP-only cookie.
"""

from fastapi import APIRouter, Response

from src.adapters.api.v1.auth.schemas import TokenResponse, VerifyAccountRequest
from src.adapters.api.v1.auth.utils import issue_session
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.domain.rate_limiting import SENSITIVE_OPERATION

router = APIRouter()


@router.post(
    "",
    response_model=TokenResponse,
    summary="Verify a new account with the code sent by SMS",
    responses={
        400: {"description": "Wrong, expired or malformed code, or account already verified"},
        404: {"description": "Unknown or expired OTP session"},
        429: {"description": "Too many attempts"},
    },
)
async def verify_account(
    payload: VerifyAccountRequest,
    response: Response,
    container: Container,
    identity: ClientIdentity,
) -> TokenResponse:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, identity)

    result = await container.account_verification_service.verify_account(payload.session_id, payload.code)
    return issue_session(response, result, container.settings)
