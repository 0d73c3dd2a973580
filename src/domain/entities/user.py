"""User aggregate root and the account status state machine.

The user is the only aggregate whose lifecycle the authentication flows mutate.
Every status change goes through a method on this class; the methods are pure
functions of the current status (no I/O), persistence is the caller's job.

State machine::

    PENDING_VERIFICATION --confirm_verification--> ACTIVE
    ACTIVE --lock--> LOCKED --unlock--> ACTIVE
    PENDING_VERIFICATION | ACTIVE | LOCKED --disable_account--> DISABLED
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from src.core.exceptions import (
    AccountStateConflictError,
    DomainValidationError,
)
from src.domain.value_objects.full_name import FullName
from src.domain.value_objects.phone import Phone
from src.domain.value_objects.username import Username


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountStatus(str, Enum):
    """Coarse lifecycle flag gating which operations a user may perform."""

    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    ACTIVE = "ACTIVE"
    LOCKED = "LOCKED"
    DISABLED = "DISABLED"


class Role(str, Enum):
    """Flat role label embedded in access credentials.

    Attributes:
        ADMIN: Administrative account.
        MANAGER: Staff account.
        USER: Regular account, the default for signups.
    """

    ADMIN = "admin"
    MANAGER = "manager"
    USER = "user"


@dataclass(eq=False)
class User:
    """Represents a User entity and acts as an Aggregate Root.

    Use ``User.create`` for a brand-new signup and ``User.reconstitute`` when
    rebuilding from storage; both run the same field validation.

    Attributes:
        id: Opaque unique identifier (UUID4).
        username: Unique username, 3-50 chars of ``[A-Za-z0-9_]``.
        full_name: Display name.
        phone: Unique phone number in E.164 format.
        password_hash: Hash produced by the ``IPasswordHasher`` port.
        status: Current ``AccountStatus``.
        role: Flat role label.
        created_at: Creation timestamp (UTC).
        updated_at: Timestamp of the last mutation (UTC).
    """

    id: uuid.UUID
    username: str
    full_name: str
    phone: str
    password_hash: str = field(repr=False)
    status: AccountStatus = AccountStatus.PENDING_VERIFICATION
    role: Role = Role.USER
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.username = Username(self.username).value
        self.full_name = FullName(self.full_name).value
        self.phone = Phone(self.phone).value
        if not self.password_hash:
            raise DomainValidationError()
        self.status = AccountStatus(self.status)
        self.role = Role(self.role)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        username: str,
        full_name: str,
        phone: str,
        password_hash: str,
        role: Role = Role.USER,
        now: Optional[datetime] = None,
    ) -> "User":
        """Create a new account in ``PENDING_VERIFICATION``."""
        timestamp = now or utcnow()
        return cls(
            id=uuid.uuid4(),
            username=username,
            full_name=full_name,
            phone=phone,
            password_hash=password_hash,
            status=AccountStatus.PENDING_VERIFICATION,
            role=role,
            created_at=timestamp,
            updated_at=timestamp,
        )

    @classmethod
    def reconstitute(
        cls,
        id: uuid.UUID,
        username: str,
        full_name: str,
        phone: str,
        password_hash: str,
        status: AccountStatus,
        role: Role,
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        """Rebuild an existing account from persisted data."""
        return cls(
            id=id if isinstance(id, uuid.UUID) else uuid.UUID(str(id)),
            username=username,
            full_name=full_name,
            phone=phone,
            password_hash=password_hash,
            status=status,
            role=role,
            created_at=_as_utc(created_at),
            updated_at=_as_utc(updated_at),
        )

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    @property
    def is_enabled(self) -> bool:
        return self.status is AccountStatus.ACTIVE

    @property
    def is_pending(self) -> bool:
        return self.status is AccountStatus.PENDING_VERIFICATION

    @property
    def is_locked(self) -> bool:
        return self.status is AccountStatus.LOCKED

    @property
    def is_disabled(self) -> bool:
        return self.status is AccountStatus.DISABLED

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def ensure_account_enabled(self) -> None:
        """Fail unless the account is ``ACTIVE``.

        Raises:
            AccountStateConflictError: carrying the offending status.
        """
        if self.status is not AccountStatus.ACTIVE:
            raise AccountStateConflictError(self.status)

    def ensure_can_request_otp(self) -> None:
        """Fail for ``LOCKED`` and ``DISABLED``; pending and active accounts may ask for a code.

        Raises:
            AccountStateConflictError: carrying the offending status.
        """
        if self.status in (AccountStatus.LOCKED, AccountStatus.DISABLED):
            raise AccountStateConflictError(self.status)

    def confirm_verification(self) -> None:
        """Transition ``PENDING_VERIFICATION -> ACTIVE``.

        Raises:
            DomainValidationError: if the account is already active.
            AccountStateConflictError: if the account is locked or disabled.
        """
        if self.status is AccountStatus.ACTIVE:
            raise DomainValidationError(code="account_already_verified")
        if self.status is not AccountStatus.PENDING_VERIFICATION:
            raise AccountStateConflictError(self.status)
        self._transition(AccountStatus.ACTIVE)

    def lock(self) -> None:
        """Transition ``ACTIVE -> LOCKED``."""
        if self.status is AccountStatus.LOCKED:
            return
        self.ensure_account_enabled()
        self._transition(AccountStatus.LOCKED)

    def unlock(self) -> None:
        """Transition ``LOCKED -> ACTIVE``."""
        if self.status is not AccountStatus.LOCKED:
            raise DomainValidationError(code="account_not_locked")
        self.activate()

    def activate(self) -> None:
        if self.status is AccountStatus.DISABLED:
            raise AccountStateConflictError(self.status)
        self._transition(AccountStatus.ACTIVE)

    def disable_account(self) -> None:
        """Transition any non-disabled status to ``DISABLED``. Idempotent."""
        if self.status is AccountStatus.DISABLED:
            return
        self._transition(AccountStatus.DISABLED)

    # ------------------------------------------------------------------
    # Attribute updates
    # ------------------------------------------------------------------

    def update_password_hash(self, password_hash: str) -> None:
        if not password_hash:
            raise DomainValidationError()
        self.password_hash = password_hash
        self._touch()

    def update_phone(self, phone: str) -> None:
        self.phone = Phone(phone).value
        self._touch()

    def update_profile(self, full_name: str) -> None:
        self.full_name = FullName(full_name).value
        self._touch()

    def change_username(self, username: str) -> None:
        self.username = Username(username).value
        self._touch()

    def _transition(self, status: AccountStatus) -> None:
        self.status = status
        self._touch()

    def _touch(self) -> None:
        self.updated_at = utcnow()


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
