"""Refresh token entity.

A refresh token belongs to exactly one user and a user owns at most one live
token. Expiry is fail-closed: a token is expired at, not after, ``expires_at``.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from src.core.exceptions import RefreshTokenExpiredError
from src.domain.value_objects.refresh_token_value import RefreshTokenValue


@dataclass(eq=False)
class RefreshToken:
    """Long-lived opaque credential exchanged for a fresh access credential.

    Attributes:
        id: Row identifier.
        token: The opaque value handed to the client.
        user_id: Owning user.
        expires_at: Absolute expiry (UTC).
        created_at: Issue time (UTC).
    """

    id: uuid.UUID
    token: str = field(repr=False)
    user_id: uuid.UUID
    expires_at: datetime
    created_at: datetime

    def __post_init__(self) -> None:
        self.token = RefreshTokenValue(self.token).value

    @classmethod
    def create(cls, user_id: uuid.UUID, expiration_days: int, now: Optional[datetime] = None) -> "RefreshToken":
        """Issue a new token for ``user_id`` expiring ``expiration_days`` from now."""
        issued_at = now or datetime.now(timezone.utc)
        return cls(
            id=uuid.uuid4(),
            token=RefreshTokenValue.generate().value,
            user_id=user_id,
            expires_at=issued_at + timedelta(days=expiration_days),
            created_at=issued_at,
        )

    @classmethod
    def reconstitute(
        cls,
        id: uuid.UUID,
        token: str,
        user_id: uuid.UUID,
        expires_at: datetime,
        created_at: datetime,
    ) -> "RefreshToken":
        return cls(
            id=id,
            token=token,
            user_id=user_id,
            expires_at=_as_utc(expires_at),
            created_at=_as_utc(created_at),
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        current = now or datetime.now(timezone.utc)
        return current >= self.expires_at

    def verify_not_expired(self, now: Optional[datetime] = None) -> None:
        """Raises:
            RefreshTokenExpiredError: when ``now >= expires_at``.
        """
        if self.is_expired(now):
            raise RefreshTokenExpiredError()

    def mask_for_logging(self) -> str:
        return self.token[:8] + "..."


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
