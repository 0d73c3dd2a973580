from __future__ import annotations

"""Current-user router package – self-service endpoints behind a bearer access token."""

from fastapi import APIRouter

from .routes import disable as disable_route
from .routes import password as password_route
from .routes import phone as phone_route
from .routes import profile as profile_route

router = APIRouter(tags=["users"])

# Delegate to sub-routers ----------------------------------------------------

router.include_router(profile_route.router, prefix="/users/me")
router.include_router(password_route.router, prefix="/users/me")
router.include_router(phone_route.router, prefix="/users/me")
router.include_router(disable_route.router, prefix="/users/me")

__all__ = ["router"]
