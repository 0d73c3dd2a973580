"""SQLModel tables and the explicit record <-> aggregate mapping.

The domain aggregates never inherit from SQLModel. Rows are converted with
``to_domain`` (through ``reconstitute``, so persisted data is re-validated) and
``from_domain``.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlmodel import Field, SQLModel

from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.user import AccountStatus, Role, User


class UserRecord(SQLModel, table=True):
    """Row of the ``users`` table."""

    __tablename__ = "users"

    id: uuid.UUID = Field(primary_key=True)
    username: str = Field(sa_column=Column(String(50), unique=True, nullable=False, index=True))
    full_name: str = Field(sa_column=Column(String(100), nullable=False))
    phone: str = Field(sa_column=Column(String(16), unique=True, nullable=False, index=True))
    password_hash: str = Field(sa_column=Column(String(255), nullable=False))
    status: str = Field(sa_column=Column(String(32), nullable=False, index=True))
    role: str = Field(sa_column=Column(String(16), nullable=False))
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False, index=True))
    updated_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False, index=True))

    def to_domain(self) -> User:
        return User.reconstitute(
            id=self.id,
            username=self.username,
            full_name=self.full_name,
            phone=self.phone,
            password_hash=self.password_hash,
            status=AccountStatus(self.status),
            role=Role(self.role),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_domain(cls, user: User) -> "UserRecord":
        record = cls(id=user.id)
        record.apply(user)
        return record

    def apply(self, user: User) -> None:
        """Copy the mutable state of ``user`` onto this row."""
        self.username = user.username
        self.full_name = user.full_name
        self.phone = user.phone
        self.password_hash = user.password_hash
        self.status = user.status.value
        self.role = user.role.value
        self.created_at = user.created_at
        self.updated_at = user.updated_at


class RefreshTokenRecord(SQLModel, table=True):
    """Row of the ``refresh_tokens`` table; ``user_id`` is unique (one session per user)."""

    __tablename__ = "refresh_tokens"

    id: uuid.UUID = Field(primary_key=True)
    token: str = Field(sa_column=Column(String(64), unique=True, nullable=False, index=True))
    user_id: uuid.UUID = Field(foreign_key="users.id", unique=True, nullable=False, index=True)
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    created_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))

    def to_domain(self) -> RefreshToken:
        return RefreshToken.reconstitute(
            id=self.id,
            token=self.token,
            user_id=self.user_id,
            expires_at=self.expires_at,
            created_at=self.created_at,
        )

    @classmethod
    def from_domain(cls, token: RefreshToken) -> "RefreshTokenRecord":
        return cls(
            id=token.id,
            token=token.token,
            user_id=token.user_id,
            expires_at=token.expires_at,
            created_at=token.created_at,
        )
