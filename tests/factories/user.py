from __future__ import annotations

"""Factory for generating fake user data for testing."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from faker import Faker

from src.domain.entities.user import AccountStatus, Role, User

fake = Faker()

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"


def fake_username() -> str:
    return fake.lexify("user_????????", letters=LOWERCASE)


def fake_phone() -> str:
    """A US number in E.164 form from the 555 test range."""
    return "+1555" + fake.numerify("#######")


def create_fake_user(
    id: Optional[uuid.UUID] = None,
    username: Optional[str] = None,
    full_name: Optional[str] = None,
    phone: Optional[str] = None,
    password_hash: Optional[str] = None,
    status: AccountStatus = AccountStatus.ACTIVE,
    role: Role = Role.USER,
    created_at: Optional[datetime] = None,
    updated_at: Optional[datetime] = None,
) -> User:
    """Create a fake User aggregate for testing.

    Args:
        id: User ID, defaults to a random UUID4.
        username: Username, defaults to ``user_<8 letters>``.
        full_name: Display name, defaults to a fake name.
        phone: E.164 phone, defaults to a 555 number.
        password_hash: Stored hash, defaults to a random hex digest.
        status: Account status, defaults to ACTIVE.
        role: User role, defaults to USER.
        created_at: Creation timestamp, defaults to now.
        updated_at: Update timestamp, defaults to ``created_at``.

    Returns:
        User: A fake User entity.
    """
    created = created_at or datetime.now(timezone.utc)
    return User.reconstitute(
        id=id or uuid.uuid4(),
        username=username or fake_username(),
        full_name=full_name or fake.name(),
        phone=phone or fake_phone(),
        password_hash=password_hash or fake.sha256(),
        status=status,
        role=role,
        created_at=created,
        updated_at=updated_at or created,
    )
