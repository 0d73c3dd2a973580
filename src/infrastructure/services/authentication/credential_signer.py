"""Access credential signing with PyJWT.

Access credentials are short-lived JWTs carrying ``sub`` (user id),
``username``, ``role``, ``iat``, ``exp`` and ``iss``. They are never stored:
expiry is the only revocation.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

from jwt import PyJWTError
from jwt import decode as jwt_decode
from jwt import encode as jwt_encode
from structlog import get_logger

from src.core.exceptions import InvalidAccessTokenError
from src.domain.entities.user import Role, User
from src.domain.interfaces.services import AccessClaims, AccessCredential, ICredentialSigner

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JwtCredentialSigner(ICredentialSigner):
    """Issues and verifies access JWTs (RS256 with a PEM key pair, or HS256)."""

    def __init__(
        self,
        signing_key: str,
        verification_key: str,
        algorithm: str = "RS256",
        issuer: str = "phonegate",
        expire_minutes: int = 15,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._signing_key = signing_key
        self._verification_key = verification_key
        self._algorithm = algorithm
        self._issuer = issuer
        self._ttl = timedelta(minutes=expire_minutes)
        self._clock = clock

    def issue_access_credential(self, user: User) -> AccessCredential:
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        payload = {
            "sub": str(user.id),
            "username": user.username,
            "role": user.role.value,
            "iat": issued_at,
            "exp": expires_at,
            "iss": self._issuer,
        }
        token = jwt_encode(payload, self._signing_key, algorithm=self._algorithm)
        logger.debug("Access token created", user_id=str(user.id), expires_at=expires_at.isoformat())
        return AccessCredential(token=token, expires_at=expires_at)

    def verify_access_credential(self, token: str) -> AccessClaims:
        if not token:
            raise InvalidAccessTokenError()
        try:
            payload = jwt_decode(
                token,
                self._verification_key,
                algorithms=[self._algorithm],
                issuer=self._issuer,
                options={"require": ["sub", "exp", "iat", "iss"]},
            )
            return AccessClaims(
                user_id=uuid.UUID(payload["sub"]),
                username=payload.get("username", ""),
                role=Role(payload.get("role", Role.USER.value)),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (PyJWTError, ValueError, KeyError) as e:
            logger.warning("Access token rejected", error=str(e))
            raise InvalidAccessTokenError() from e
