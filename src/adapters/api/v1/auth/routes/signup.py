from __future__ import annotations

"""/auth/signup route module.

Creates a ``PENDING_VERIFICATION`` account and sends the first verification
code. The response carries the OTP session id the client verifies against.
"""

from fastapi import APIRouter, Request, status

from src.adapters.api.v1.auth.schemas import OtpSessionResponse, SignupRequest
from src.adapters.api.v1.dependencies import ClientIdentity, Container
from src.domain.rate_limiting import SENSITIVE_OPERATION
from src.utils.i18n import get_request_language, get_translated_message

router = APIRouter()


@router.post(
    "",
    response_model=OtpSessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign up with a phone number",
    responses={
        400: {"description": "Invalid username, full name, phone or password"},
        409: {"description": "Username or phone already registered"},
        429: {"description": "Too many signup attempts"},
    },
)
async def signup(
    request: Request,
    payload: SignupRequest,
    container: Container,
    identity: ClientIdentity,
) -> OtpSessionResponse:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, identity)

    session_id = await container.signup_service.signup(
        username=payload.username,
        full_name=payload.full_name,
        phone=payload.phone,
        password=payload.password,
    )
    return OtpSessionResponse(
        session_id=session_id.value,
        message=get_translated_message("signup_successful", get_request_language(request)),
    )
