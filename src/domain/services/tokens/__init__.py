"""Refresh token engine and access/refresh token pair issuing."""

from .auth_token_service import AuthResult, AuthTokenService
from .refresh_token_service import RefreshTokenService

__all__ = ["AuthResult", "AuthTokenService", "RefreshTokenService"]
