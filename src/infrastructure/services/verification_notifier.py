"""Issues a verification code and delivers it by SMS."""

from typing import Optional

import structlog

from src.domain.entities.user import User
from src.domain.interfaces.services import ISmsSender, IVerificationNotifier
from src.domain.services.otp.otp_service import OtpService
from src.domain.value_objects.phone import Phone
from src.utils.i18n import get_translated_message

logger = structlog.get_logger(__name__)


class SmsVerificationNotifier(IVerificationNotifier):
    """Concrete ``IVerificationNotifier``: OTP for ``user.id``, text to the target phone.

    The code is always keyed by the user id, also when it is sent to a pending
    new phone number.
    """

    def __init__(self, otp_service: OtpService, sms_sender: ISmsSender, language: str = "en"):
        self._otp_service = otp_service
        self._sms_sender = sms_sender
        self._language = language

    async def notify_verification_required(self, user: User, target_phone: Optional[str] = None) -> None:
        phone = Phone(target_phone or user.phone)
        code = await self._otp_service.issue(user.id)
        message = get_translated_message("otp_sms_message", self._language, code=code.value)
        await self._sms_sender.send(phone.value, message)
        logger.info("Verification code dispatched", user_id=str(user.id), phone=phone.mask_for_logging())
