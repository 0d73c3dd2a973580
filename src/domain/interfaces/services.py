"""Service ports used by the authentication core.

The core never depends on a hashing library, an SMS gateway, a JWT library or
a database session directly: it talks to these interfaces, and the service
container plugs in the infrastructure adapters.
"""

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, Optional, TypeVar

from src.domain.entities.user import Role, User

T = TypeVar("T")


class IPasswordHasher(ABC):
    """Interface for one-way password hashing."""

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def matches(self, plaintext: str, password_hash: str) -> bool:
        """Returns ``True`` if ``plaintext`` hashes to ``password_hash``.

        Never raises for a malformed hash; it simply does not match.
        """
        raise NotImplementedError


class ISmsSender(ABC):
    """Interface for SMS delivery."""

    @abstractmethod
    async def send(self, phone: str, message: str) -> None:
        """Sends ``message`` to ``phone`` (E.164).

        Raises:
            DeliveryError: If the message could not be handed to the gateway.
        """
        raise NotImplementedError


@dataclass(frozen=True)
class AccessCredential:
    """A signed, self-expiring access credential."""

    token: str
    expires_at: datetime


@dataclass(frozen=True)
class AccessClaims:
    """Claims extracted from a verified access credential."""

    user_id: uuid.UUID
    username: str
    role: Role
    expires_at: datetime


class ICredentialSigner(ABC):
    """Interface for issuing and verifying short-lived access credentials."""

    @abstractmethod
    def issue_access_credential(self, user: User) -> AccessCredential:
        raise NotImplementedError

    @abstractmethod
    def verify_access_credential(self, token: str) -> AccessClaims:
        """Raises:
            InvalidAccessTokenError: If the signature, issuer or expiry check fails.
        """
        raise NotImplementedError


class IVerificationNotifier(ABC):
    """Interface for the "verification required" side effect.

    Issues a one-time code for the user and delivers it by SMS.
    """

    @abstractmethod
    async def notify_verification_required(self, user: User, target_phone: Optional[str] = None) -> None:
        """Issues an OTP for ``user.id`` and sends it to ``target_phone`` or ``user.phone``."""
        raise NotImplementedError


class ITransactionManager(ABC):
    """Scoped transaction wrapper around a flow's persistence writes."""

    @abstractmethod
    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        """Runs ``fn`` inside a transaction: commit on success, rollback on error."""
        raise NotImplementedError
