from __future__ import annotations

"""/users/me profile routes: read, rename and edit the display name."""

from fastapi import APIRouter

from src.adapters.api.v1.auth.schemas import UserOut
from src.adapters.api.v1.dependencies import Container, CurrentUser
from src.adapters.api.v1.users.schemas import ChangeUsernameRequest, UpdateProfileRequest
from src.domain.rate_limiting import GLOBAL, SENSITIVE_OPERATION

router = APIRouter()


@router.get("", response_model=UserOut, summary="Get the current user")
async def get_me(current_user: CurrentUser, container: Container) -> UserOut:
    await container.rate_limiter.acquire_or_raise(GLOBAL, str(current_user.id))
    return UserOut.from_entity(current_user)


@router.patch("/profile", response_model=UserOut, summary="Update the display name")
async def update_profile(payload: UpdateProfileRequest, current_user: CurrentUser, container: Container) -> UserOut:
    await container.rate_limiter.acquire_or_raise(GLOBAL, str(current_user.id))
    user = await container.profile_service.update_profile(current_user.id, payload.full_name)
    return UserOut.from_entity(user)


@router.patch(
    "/username",
    response_model=UserOut,
    summary="Change the username",
    responses={409: {"description": "Username already taken"}},
)
async def change_username(payload: ChangeUsernameRequest, current_user: CurrentUser, container: Container) -> UserOut:
    await container.rate_limiter.acquire_or_raise(SENSITIVE_OPERATION, str(current_user.id))
    user = await container.profile_service.change_username(current_user.id, payload.username)
    return UserOut.from_entity(user)
