from __future__ import annotations

"""Authentication router package – bundles the unauthenticated account endpoints."""

from fastapi import APIRouter

from .routes import forgot_password as forgot_password_route
from .routes import login as login_route
from .routes import logout as logout_route
from .routes import refresh_token as refresh_token_route
from .routes import resend_otp as resend_otp_route
from .routes import reset_password as reset_password_route
from .routes import reset_password_token as reset_password_token_route
from .routes import signup as signup_route
from .routes import verify_account as verify_account_route

router = APIRouter(prefix="/auth", tags=["auth"])

# Delegate to sub-routers ----------------------------------------------------

router.include_router(signup_route.router, prefix="/signup")
router.include_router(verify_account_route.router, prefix="/verify-account")
router.include_router(resend_otp_route.router, prefix="/resend-otp")
router.include_router(login_route.router, prefix="/login")
router.include_router(logout_route.router, prefix="/logout")
router.include_router(refresh_token_route.router, prefix="/refresh-token")
router.include_router(forgot_password_route.router, prefix="/forgot-password")
router.include_router(reset_password_token_route.router, prefix="/reset-password-token")
router.include_router(reset_password_route.router, prefix="/reset-password")

__all__ = ["router"]
