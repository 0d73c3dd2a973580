"""Repository implementations for the infrastructure layer."""

from .in_memory import InMemoryRefreshTokenRepository, InMemoryUserRepository
from .refresh_token_repository import RefreshTokenRepository
from .user_repository import UserRepository

__all__ = [
    "InMemoryRefreshTokenRepository",
    "InMemoryUserRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
