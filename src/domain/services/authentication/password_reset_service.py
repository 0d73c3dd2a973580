"""Password Reset Domain Service.

Three unauthenticated steps:

1. ``forgot_password(phone)`` sends a code and returns an OTP session id
2. ``validate_reset_otp(session_id, code)`` trades the code for a reset token
3. ``reset_password(token, new_password)`` spends the token

Step 1 answers the same way whether or not the phone is registered.
"""

import structlog

from src.core.exceptions import AccountStateConflictError, UserNotFoundError
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import IPasswordHasher, ITransactionManager
from src.domain.services.notification import VerificationDispatcher
from src.domain.services.otp.otp_service import OtpService
from src.domain.services.otp.otp_session_service import OtpSessionService
from src.domain.services.otp.password_reset_token_service import PasswordResetTokenService
from src.domain.value_objects.otp_session_id import OtpSessionId
from src.domain.value_objects.password import Password
from src.domain.value_objects.phone import Phone
from src.domain.value_objects.reset_token import ResetToken

logger = structlog.get_logger(__name__)


class PasswordResetService:
    """Domain service for the forgot-password flow.

    Security Features:
    - Unknown or non-active phones get a decoy session id
    - The reset token is single use and consumed before the password changes
    - The OTP session is consumed once its code was accepted
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
        otp_service: OtpService,
        otp_session_service: OtpSessionService,
        reset_token_service: PasswordResetTokenService,
        verification_dispatcher: VerificationDispatcher,
        transaction_manager: ITransactionManager,
        default_region: str = "BR",
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._otp_service = otp_service
        self._otp_session_service = otp_session_service
        self._reset_token_service = reset_token_service
        self._verification_dispatcher = verification_dispatcher
        self._transaction_manager = transaction_manager
        self._default_region = default_region

    async def forgot_password(self, phone: str) -> OtpSessionId:
        """Start a password reset for ``phone``.

        Returns:
            OtpSessionId: A real session when the phone belongs to an active
            account, a decoy that resolves to nothing otherwise.
        """
        phone_vo = Phone.parse(phone, self._default_region)
        user = await self._user_repository.get_by_phone(phone_vo.value)
        if user is None:
            logger.info("Forgot password for unknown phone", phone=phone_vo.mask_for_logging())
            return self._otp_session_service.decoy()

        try:
            user.ensure_account_enabled()
        except AccountStateConflictError:
            logger.info("Forgot password for non-active account", user_id=str(user.id), status=user.status.value)
            return self._otp_session_service.decoy()

        session_id = await self._otp_session_service.create(user.id)
        await self._verification_dispatcher.dispatch(user)
        logger.info("Password reset code sent", user_id=str(user.id))
        return session_id

    async def validate_reset_otp(self, session_id: str, code: str) -> ResetToken:
        """Exchange the code behind ``session_id`` for a single-use reset token.

        Raises:
            InvalidOtpSessionError: Unknown, expired or decoy session.
            AccountStateConflictError: The account is not active.
            InvalidOtpError: Missing, wrong or expired code.
        """
        session = OtpSessionId(session_id)
        user_id = await self._otp_session_service.resolve(session)
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        user.ensure_account_enabled()
        await self._otp_service.validate(user.id, code)
        await self._otp_session_service.consume(session)

        return await self._reset_token_service.issue(user.id)

    async def reset_password(self, token: str, new_password: str) -> None:
        """Set a new password using a reset token.

        The token is deleted as soon as it is looked up, even if a later step
        fails.

        Raises:
            InvalidPasswordResetTokenError: Unknown, expired or spent token.
            UserNotFoundError: The owner was deleted in the meantime.
            InvalidPasswordFormatError: The new password breaks the policy.
        """
        user_id = await self._reset_token_service.consume(ResetToken(token))
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        password = Password(new_password)
        user.update_password_hash(self._password_hasher.hash(password.value))
        await self._transaction_manager.run(lambda: self._user_repository.save(user))
        logger.info("Password reset completed", user_id=str(user.id))
