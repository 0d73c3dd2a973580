from __future__ import annotations

"""/auth/resend-otp route module."""

from fastapi import APIRouter, Request

from src.adapters.api.v1.auth.schemas import OtpSessionResponse, ResendOtpRequest
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.domain.rate_limiting import SENSITIVE_OPERATION
from src.utils.i18n import get_request_language, get_translated_message

router = APIRouter()


@router.post(
    "",
    response_model=OtpSessionResponse,
    summary="Send a new verification code for an OTP session",
    responses={
        404: {"description": "Unknown or expired OTP session"},
        409: {"description": "Account is locked or disabled"},
        429: {"description": "Too many resend requests"},
    },
)
async def resend_otp(
    request: Request,
    payload: ResendOtpRequest,
    container: Container,
    identity: ClientIdentity,
) -> OtpSessionResponse:
    """Re-send the code; the session id stays the same."""
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, identity)

    await container.account_verification_service.resend_code(payload.session_id)
    return OtpSessionResponse(
        session_id=payload.session_id,
        message=get_translated_message("verification_code_sent", get_request_language(request)),
    )
