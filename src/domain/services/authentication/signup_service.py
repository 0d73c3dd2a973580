"""User Signup Domain Service.

Creates accounts in ``PENDING_VERIFICATION`` and starts phone verification.
"""

import structlog

from src.core.exceptions import UserAlreadyExistsError
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import IPasswordHasher, ITransactionManager
from src.domain.services.notification import VerificationDispatcher
from src.domain.services.otp.otp_session_service import OtpSessionService
from src.domain.value_objects.full_name import FullName
from src.domain.value_objects.otp_session_id import OtpSessionId
from src.domain.value_objects.password import Password
from src.domain.value_objects.phone import Phone
from src.domain.value_objects.username import Username

logger = structlog.get_logger(__name__)


class SignupService:
    """Domain service for account creation.

    Responsibilities:
    - Validate username, full name, phone and password shapes
    - Reject a username or phone that is already taken
    - Persist the new pending account
    - Open an OTP session and dispatch the first verification code

    The uniqueness checks are a fast path only. Two concurrent signups can both
    pass them; the repository then rejects the loser with
    ``UserAlreadyExistsError`` on insert.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
        otp_session_service: OtpSessionService,
        verification_dispatcher: VerificationDispatcher,
        transaction_manager: ITransactionManager,
        default_region: str = "BR",
    ):
        self._user_repository = user_repository
        self._password_hasher = password_hasher
        self._otp_session_service = otp_session_service
        self._verification_dispatcher = verification_dispatcher
        self._transaction_manager = transaction_manager
        self._default_region = default_region

    async def signup(self, username: str, full_name: str, phone: str, password: str) -> OtpSessionId:
        """Register a new account.

        Args:
            username: Requested username.
            full_name: Display name.
            phone: Phone number as typed, parsed with the default region.
            password: Plain-text password.

        Returns:
            OtpSessionId: Session the client uses to verify the account.

        Raises:
            UserAlreadyExistsError: If the username or the phone is taken.
            InvalidInputError: If any field has an invalid shape.
        """
        username_vo = Username(username)
        full_name_vo = FullName(full_name)
        phone_vo = Phone.parse(phone, self._default_region)
        password_vo = Password(password)

        logger.info(
            "Signup started",
            username=username_vo.mask_for_logging(),
            phone=phone_vo.mask_for_logging(),
        )

        if await self._user_repository.exists_by_username(username_vo.value):
            logger.warning("Signup rejected - username taken", username=username_vo.mask_for_logging())
            raise UserAlreadyExistsError(UserAlreadyExistsError.USERNAME)

        if await self._user_repository.exists_by_phone(phone_vo.value):
            logger.warning("Signup rejected - phone taken", phone=phone_vo.mask_for_logging())
            raise UserAlreadyExistsError(UserAlreadyExistsError.PHONE)

        user = User.create(
            username=username_vo.value,
            full_name=full_name_vo.value,
            phone=phone_vo.value,
            password_hash=self._password_hasher.hash(password_vo.value),
        )

        saved_user = await self._transaction_manager.run(lambda: self._user_repository.save(user))
        session_id = await self._otp_session_service.create(saved_user.id)
        await self._verification_dispatcher.dispatch(saved_user)

        logger.info("Signup completed", user_id=str(saved_user.id), session=session_id.mask_for_logging())
        return session_id
