"""Domain Interfaces for dependency inversion.

These interfaces define the contracts the infrastructure layer implements, so
the authentication flows depend on abstractions only.

Interface Organization:
- Repositories: users and refresh tokens (durable state)
- Stores: OTPs, OTP sessions, reset tokens, pending phone changes (TTL state)
- Services: hashing, SMS, credential signing, notification, transactions
"""

from .repositories import IRefreshTokenRepository, IUserRepository
from .services import (
    AccessClaims,
    AccessCredential,
    ICredentialSigner,
    IPasswordHasher,
    ISmsSender,
    ITransactionManager,
    IVerificationNotifier,
)
from .stores import (
    IKeyValueStore,
    IOtpSessionStore,
    IOtpStore,
    IPasswordResetTokenStore,
    IPendingPhoneChangeStore,
)

__all__ = [
    # Repositories
    "IUserRepository",
    "IRefreshTokenRepository",
    # Stores
    "IKeyValueStore",
    "IOtpStore",
    "IOtpSessionStore",
    "IPasswordResetTokenStore",
    "IPendingPhoneChangeStore",
    # Services
    "IPasswordHasher",
    "ISmsSender",
    "ICredentialSigner",
    "IVerificationNotifier",
    "ITransactionManager",
    "AccessCredential",
    "AccessClaims",
]
