"""Account Verification Domain Service.

Turns a pending account into an active one once the user proves control of the
phone, and re-sends verification codes on request.
"""

import structlog

from src.core.exceptions import AccountStateConflictError, UserNotFoundError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import ITransactionManager
from src.domain.services.notification import VerificationDispatcher
from src.domain.services.otp.otp_service import OtpService
from src.domain.services.otp.otp_session_service import OtpSessionService
from src.domain.services.tokens.auth_token_service import AuthResult, AuthTokenService
from src.domain.value_objects.otp_session_id import OtpSessionId
from src.domain.value_objects.phone import Phone

logger = structlog.get_logger(__name__)


class AccountVerificationService:
    """Domain service for phone verification of new accounts.

    Security Features:
    - The OTP is keyed by user id and consumed atomically
    - The OTP session outlives wrong codes and is consumed on success
    - Resend by phone never reveals whether the phone is registered
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        otp_service: OtpService,
        otp_session_service: OtpSessionService,
        auth_token_service: AuthTokenService,
        verification_dispatcher: VerificationDispatcher,
        transaction_manager: ITransactionManager,
        default_region: str = "BR",
    ):
        self._user_repository = user_repository
        self._otp_service = otp_service
        self._otp_session_service = otp_session_service
        self._auth_token_service = auth_token_service
        self._verification_dispatcher = verification_dispatcher
        self._transaction_manager = transaction_manager
        self._default_region = default_region

    async def verify_account(self, session_id: str, code: str) -> AuthResult:
        """Validate the code behind ``session_id`` and activate the account.

        Returns:
            AuthResult: A fresh access credential and refresh token.

        Raises:
            InvalidOtpSessionError: Unknown or expired session.
            UserNotFoundError: The session points at a deleted user.
            InvalidOtpError: Missing, wrong or expired code.
            DomainValidationError: The account is already active.
        """
        session = OtpSessionId(session_id)
        user_id = await self._otp_session_service.resolve(session)
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        await self._otp_service.validate(user.id, code)
        user.confirm_verification()

        async def _activate() -> AuthResult:
            saved = await self._user_repository.save(user)
            return await self._auth_token_service.issue_tokens(saved)

        result = await self._transaction_manager.run(_activate)
        await self._otp_session_service.consume(session)

        logger.info("Account verified", user_id=str(user.id))
        return result

    async def resend_code(self, session_id: str) -> None:
        """Send a new code to the user behind an OTP session.

        Raises:
            InvalidOtpSessionError: Unknown or expired session.
            AccountStateConflictError: The account is locked or disabled.
        """
        user_id = await self._otp_session_service.resolve(OtpSessionId(session_id))
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        await self._resend(user)

    async def resend_code_by_phone(self, phone: str) -> None:
        """Send a new code to ``phone``; a silent no-op if nobody owns it."""
        phone_vo = Phone.parse(phone, self._default_region)
        user = await self._user_repository.get_by_phone(phone_vo.value)
        if user is None:
            logger.info("Resend requested for unknown phone", phone=phone_vo.mask_for_logging())
            return
        await self._resend(user)

    async def _resend(self, user: User) -> None:
        try:
            user.ensure_can_request_otp()
        except AccountStateConflictError:
            logger.warning("Resend rejected", user_id=str(user.id), status=user.status.value)
            raise
        await self._verification_dispatcher.dispatch(user)
        logger.info("Verification code re-sent", user_id=str(user.id))
