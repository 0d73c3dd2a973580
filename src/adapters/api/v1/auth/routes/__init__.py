from __future__ import annotations

"""Subpackage aggregating individual auth route modules."""

__all__ = [
    "signup",
    "verify_account",
    "resend_otp",
    "login",
    "logout",
    "refresh_token",
    "forgot_password",
    "reset_password_token",
    "reset_password",
]
