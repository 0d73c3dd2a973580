from __future__ import annotations

"""FastAPI dependency providers shared by the v1 routers.

Everything comes from the ``ServiceContainer`` stored on ``app.state``; there is
no module-level service lookup.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.core.container import ServiceContainer
from src.core.exceptions import (
    AccountStatusForbiddenError,
    InvalidAccessTokenError,
    UserNotFoundError,
)
from src.domain.entities.user import User
from src.domain.rate_limiting import RateLimitKey

_bearer = HTTPBearer(auto_error=False)


def get_container(request: Request) -> ServiceContainer:  # noqa: D401
    """Return the container built at startup."""

    return request.app.state.container


Container = Annotated[ServiceContainer, Depends(get_container)]


def get_client_identity(request: Request) -> str:
    """Rate limit identity of an unauthenticated caller (forwarded-for, then peer)."""

    return RateLimitKey.resolve_identity(
        principal=None,
        forwarded_for=request.headers.get("X-Forwarded-For"),
        peer_address=request.client.host if request.client else None,
    )


ClientIdentity = Annotated[str, Depends(get_client_identity)]


async def get_current_user(
    container: Container,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> User:
    """Resolve the bearer access token to an active ``User``.

    Raises:
        InvalidAccessTokenError: Missing, malformed, expired or foreign token, or
            the user no longer exists.
        AccountStatusForbiddenError: The user is not ``ACTIVE``.
    """

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise InvalidAccessTokenError()

    claims = container.credential_signer.verify_access_credential(credentials.credentials)
    try:
        user = await container.profile_service.get_profile(claims.user_id)
    except UserNotFoundError as e:
        raise InvalidAccessTokenError() from e

    if not user.is_enabled:
        raise AccountStatusForbiddenError()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
