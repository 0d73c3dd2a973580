from __future__ import annotations

"""/users/me/disable route module."""

from fastapi import APIRouter, Request, Response

from src.adapters.api.v1.auth.schemas import MessageResponse
from src.adapters.api.v1.auth.utils import clear_session
from src.adapters.api.v1.dependencies import Container, CurrentUser
from src.domain.rate_limiting import SENSITIVE_OPERATION
from src.utils.i18n import get_request_language, get_translated_message

router = APIRouter()


@router.post("/disable", response_model=MessageResponse, summary="Disable the current account")
async def disable_account(
    request: Request,
    response: Response,
    current_user: CurrentUser,
    container: Container,
) -> MessageResponse:
    """Disable the account and revoke its refresh token.

    The account is removed by the disabled-account cleanup sweep later on.
    """
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, str(current_user.id))

    await container.profile_service.disable_my_account(current_user.id)
    clear_session(response, container.settings)
    return MessageResponse(
        message=get_translated_message("account_disabled_successfully", get_request_language(request))
    )
