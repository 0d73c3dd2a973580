from __future__ import annotations

"""/auth/reset-password route module.

The reset token is spent by this call whether or not the new password is
accepted.
"""

from fastapi import APIRouter, Request

from src.adapters.api.v1.auth.schemas import MessageResponse, ResetPasswordRequest
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.domain.rate_limiting import SENSITIVE_OPERATION
from src.utils.i18n import get_request_language, get_translated_message

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    summary="Set a new password with a reset token",
    responses={400: {"description": "Invalid reset token or password"}},
)
async def reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    container: Container,
    identity: ClientIdentity,
) -> MessageResponse:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, identity)

    await container.password_reset_service.reset_password(payload.token, payload.new_password)
    return MessageResponse(
        message=get_translated_message("password_reset_successful", get_request_language(request))
    )
