from __future__ import annotations

"""/auth/forgot-password route module.

The answer is identical whether or not the phone belongs to an active account:
a session id and the same message. Only a registered, active phone actually
receives a code.
"""

from fastapi import APIRouter, Request

from src.adapters.api.v1.auth.schemas import ForgotPasswordRequest, OtpSessionResponse
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.domain.rate_limiting import SENSITIVE_OPERATION
from src.utils.i18n import get_request_language, get_translated_message

router = APIRouter()


@router.post("", response_model=OtpSessionResponse, summary="Request a password reset code")
async def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    container: Container,
    identity: ClientIdentity,
) -> OtpSessionResponse:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, identity)

    session_id = await container.password_reset_service.forgot_password(payload.phone)
    return OtpSessionResponse(
        session_id=session_id.value,
        message=get_translated_message("verification_code_sent_if_registered", get_request_language(request)),
    )
