from __future__ import annotations

"""/users/me/phone routes.

Two-step phone change: request a code on the new number, then confirm it. The
code is bound to the caller's user id.
"""

from fastapi import APIRouter, Request

from src.adapters.api.v1.auth.schemas import MessageResponse, UserOut
from src.adapters.api.v1.dependencies import Container, CurrentUser
from src.adapters.api.v1.users.schemas import ConfirmPhoneChangeRequest, PhoneChangeRequest
from src.domain.rate_limiting import SENSITIVE_OPERATION
from src.utils.i18n import get_request_language, get_translated_message

router = APIRouter()


@router.post(
    "/phone/verification",
    response_model=MessageResponse,
    summary="Start a phone number change",
    responses={409: {"description": "Phone already registered to another account"}},
)
async def initiate_phone_change(
    request: Request,
    payload: PhoneChangeRequest,
    current_user: CurrentUser,
    container: Container,
) -> MessageResponse:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, str(current_user.id))

    await container.phone_change_service.initiate(current_user.id, payload.phone)
    return MessageResponse(message=get_translated_message("phone_change_initiated", get_request_language(request)))


@router.patch(
    "/phone/verification/confirm",
    response_model=UserOut,
    summary="Confirm the phone number change with the code",
    responses={
        400: {"description": "Wrong, expired or malformed code"},
        404: {"description": "No phone change in progress"},
    },
)
async def confirm_phone_change(
    payload: ConfirmPhoneChangeRequest,
    current_user: CurrentUser,
    container: Container,
) -> UserOut:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, str(current_user.id))

    user = await container.phone_change_service.complete(current_user.id, payload.code)
    return UserOut.from_entity(user)


@router.post(
    "/phone/verification/resend-otp",
    response_model=MessageResponse,
    summary="Re-send the phone change code",
    responses={404: {"description": "No phone change in progress"}},
)
async def resend_phone_change_code(request: Request, current_user: CurrentUser, container: Container) -> MessageResponse:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, str(current_user.id))

    await container.phone_change_service.resend(current_user.id)
    return MessageResponse(message=get_translated_message("verification_code_sent", get_request_language(request)))
