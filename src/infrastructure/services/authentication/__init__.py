"""Hashing and credential signing adapters."""

from .credential_signer import JwtCredentialSigner
from .password_hasher import BcryptPasswordHasher

__all__ = ["BcryptPasswordHasher", "JwtCredentialSigner"]
