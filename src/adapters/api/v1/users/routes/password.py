from __future__ import annotations

"""/users/me/password route module."""

from fastapi import APIRouter, Request

from src.adapters.api.v1.auth.schemas import MessageResponse
from src.adapters.api.v1.dependencies import Container, CurrentUser
from src.adapters.api.v1.users.schemas import ChangePasswordRequest
from src.domain.rate_limiting import SENSITIVE_OPERATION
from src.utils.i18n import get_request_language, get_translated_message

router = APIRouter()


@router.post(
    "/password",
    response_model=MessageResponse,
    summary="Change the password",
    responses={400: {"description": "Current password incorrect or new password invalid"}},
)
async def change_password(
    request: Request,
    payload: ChangePasswordRequest,
    current_user: CurrentUser,
    container: Container,
) -> MessageResponse:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, str(current_user.id))

    await container.password_change_service.change_password(
        current_user.id, payload.current_password, payload.new_password
    )
    return MessageResponse(
        message=get_translated_message("password_changed_successfully", get_request_language(request))
    )
