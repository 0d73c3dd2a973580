from __future__ import annotations

"""/auth/reset-password-token route module: trade a reset code for a reset token."""

from fastapi import APIRouter

from src.adapters.api.v1.auth.schemas import ResetPasswordTokenRequest, ResetTokenResponse
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.domain.rate_limiting import SENSITIVE_OPERATION

router = APIRouter()


@router.post(
    "",
    response_model=ResetTokenResponse,
    summary="Validate the password reset code",
    responses={
        400: {"description": "Wrong, expired or malformed code"},
        404: {"description": "Unknown or expired OTP session"},
        409: {"description": "Account is not active"},
    },
)
async def reset_password_token(
    payload: ResetPasswordTokenRequest,
    container: Container,
    identity: ClientIdentity,
) -> ResetTokenResponse:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, identity)

    token = await container.password_reset_service.validate_reset_otp(payload.session_id, payload.code)
    return ResetTokenResponse(reset_token=token.value)
