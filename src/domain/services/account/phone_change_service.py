"""Phone Change Domain Service.

Moving an account to a new phone number takes two steps. ``initiate`` parks the
new number in the pending phone change store and sends a code to it;
``complete`` validates that code against the current user's id and only then
swaps the number on the aggregate.
"""

import uuid
from datetime import timedelta

import structlog

from src.core.exceptions import (
    PhoneChangeNotInitiatedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from src.domain.entities.user import User
from src.domain.interfaces.repositories import IUserRepository
from src.domain.interfaces.services import ITransactionManager
from src.domain.interfaces.stores import IPendingPhoneChangeStore
from src.domain.services.notification import VerificationDispatcher
from src.domain.services.otp.otp_service import OtpService
from src.domain.value_objects.phone import Phone

logger = structlog.get_logger(__name__)


class PhoneChangeService:
    """Domain service for changing the phone of an authenticated user.

    The OTP is keyed by the id of the user who initiated the change, so a code
    issued to anybody else can never complete it. ``otp_service`` must use a
    store of its own: a code sent to the current phone (password reset) never
    confirms a pending number.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        pending_phone_store: IPendingPhoneChangeStore,
        otp_service: OtpService,
        verification_dispatcher: VerificationDispatcher,
        transaction_manager: ITransactionManager,
        ttl: timedelta = timedelta(minutes=5),
        default_region: str = "BR",
    ):
        self._user_repository = user_repository
        self._pending_phone_store = pending_phone_store
        self._otp_service = otp_service
        self._verification_dispatcher = verification_dispatcher
        self._transaction_manager = transaction_manager
        self._ttl_seconds = int(ttl.total_seconds())
        self._default_region = default_region

    async def initiate(self, user_id: uuid.UUID, new_phone: str) -> None:
        """Park ``new_phone`` and send a code to it.

        Raises:
            UserAlreadyExistsError: Another account owns ``new_phone``.
            AccountStateConflictError: The account is not active.
        """
        user = await self._get_enabled_user(user_id)
        phone = Phone.parse(new_phone, self._default_region)

        owner = await self._user_repository.get_by_phone(phone.value)
        if owner is not None and owner.id != user.id:
            logger.warning("Phone change rejected - phone taken", user_id=str(user.id), phone=phone.mask_for_logging())
            raise UserAlreadyExistsError(UserAlreadyExistsError.PHONE)

        await self._pending_phone_store.put(user.id, phone.value, self._ttl_seconds)
        await self._verification_dispatcher.dispatch(user, phone.value)
        logger.info("Phone change initiated", user_id=str(user.id), phone=phone.mask_for_logging())

    async def complete(self, user_id: uuid.UUID, code: str) -> User:
        """Validate the code and move the account to the pending phone.

        Raises:
            PhoneChangeNotInitiatedError: Nothing pending (or it expired).
            InvalidOtpError: Missing, wrong or expired code.
            UserAlreadyExistsError: Someone took the number in the meantime.
        """
        user = await self._get_enabled_user(user_id)
        pending = await self._pending_phone_store.get(user.id)
        if pending is None:
            raise PhoneChangeNotInitiatedError()

        await self._otp_service.validate(user.id, code)
        await self._pending_phone_store.delete(user.id)

        user.update_phone(pending)
        saved = await self._transaction_manager.run(lambda: self._user_repository.save(user))
        logger.info("Phone change completed", user_id=str(user.id), phone=Phone(pending).mask_for_logging())
        return saved

    async def resend(self, user_id: uuid.UUID) -> None:
        """Send a fresh code to the pending phone.

        Raises:
            PhoneChangeNotInitiatedError: Nothing pending (or it expired).
        """
        user = await self._get_enabled_user(user_id)
        pending = await self._pending_phone_store.get(user.id)
        if pending is None:
            raise PhoneChangeNotInitiatedError()

        await self._verification_dispatcher.dispatch(user, pending)
        logger.info("Phone change code re-sent", user_id=str(user.id))

    async def _get_enabled_user(self, user_id: uuid.UUID) -> User:
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        user.ensure_account_enabled()
        return user
