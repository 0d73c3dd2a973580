"""Domain entities: the user aggregate and its refresh token."""

from .refresh_token import RefreshToken
from .user import AccountStatus, Role, User

__all__ = ["AccountStatus", "RefreshToken", "Role", "User"]
