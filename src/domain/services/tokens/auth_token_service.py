"""Issues the access credential + refresh token pair returned by verify, login and refresh."""

from dataclasses import dataclass
from datetime import datetime

from src.domain.entities.refresh_token import RefreshToken
from src.domain.entities.user import User
from src.domain.interfaces.services import ICredentialSigner
from src.domain.services.tokens.refresh_token_service import RefreshTokenService


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful authentication.

    The caller sets ``refresh_token`` as an HTTP-only cookie and returns
    ``access_token`` in the body.
    """

    user: User
    access_token: str
    access_token_expires_at: datetime
    refresh_token: str
    refresh_token_expires_at: datetime


class AuthTokenService:
    """Combines the refresh token engine and the credential signer."""

    def __init__(self, refresh_token_service: RefreshTokenService, credential_signer: ICredentialSigner):
        self._refresh_token_service = refresh_token_service
        self._credential_signer = credential_signer

    async def issue_tokens(self, user: User) -> AuthResult:
        """Issue a fresh pair; the user's previous refresh token stops working."""
        refresh_token: RefreshToken = await self._refresh_token_service.issue(user)
        credential = self._credential_signer.issue_access_credential(user)
        return AuthResult(
            user=user,
            access_token=credential.token,
            access_token_expires_at=credential.expires_at,
            refresh_token=refresh_token.token,
            refresh_token_expires_at=refresh_token.expires_at,
        )
