"""bcrypt password hashing through passlib."""

from passlib.context import CryptContext

from src.domain.interfaces.services import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """``IPasswordHasher`` backed by a passlib ``CryptContext``.

    Security:
        - bcrypt with a configurable work factor (``BCRYPT_WORK_FACTOR``)
        - Constant-time comparison via passlib
        - Hashes from an older work factor still verify (``deprecated="auto"``)
    """

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def matches(self, plaintext: str, password_hash: str) -> bool:
        try:
            return self._context.verify(plaintext, password_hash)
        except (ValueError, TypeError):
            return False
