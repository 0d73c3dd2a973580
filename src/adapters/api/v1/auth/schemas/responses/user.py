from __future__ import annotations

"""Response Pydantic model for user data."""

import uuid
from datetime import datetime

from pydantic import BaseModel

from src.domain.entities.user import AccountStatus, Role, User


class UserOut(BaseModel):
    """Serialised representation of :class:`~src.domain.entities.user.User`."""

    id: uuid.UUID
    username: str
    full_name: str
    phone: str
    status: AccountStatus
    role: Role
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            phone=user.phone,
            status=user.status,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
