"""OTP Engine Domain Service.

Issues and validates the 6-digit codes that prove control of a phone number.
Codes are keyed by user id only: issuing a new code silently replaces any
unconsumed one, and a code can be consumed exactly once.
"""

import uuid
from datetime import timedelta

import structlog

from src.core.exceptions import InvalidOtpError, InvalidOtpFormatError
from src.domain.interfaces.stores import IOtpStore
from src.domain.value_objects.otp_code import OtpCode

logger = structlog.get_logger(__name__)


class OtpService:
    """Domain service owning the one-time code protocol.

    Responsibilities:
    - Generate codes with the ``OtpCode`` policy (100000-999999)
    - Keep at most one live code per user (``put`` overwrites)
    - Validate-and-consume atomically through ``IOtpStore.take_if_match``

    Security Features:
    - Codes never appear in logs
    - Missing, wrong and expired codes fail with the same error
    """

    def __init__(self, otp_store: IOtpStore, ttl: timedelta = timedelta(minutes=5)):
        self._otp_store = otp_store
        self._ttl_seconds = int(ttl.total_seconds())

    async def issue(self, user_id: uuid.UUID) -> OtpCode:
        """Generate and store a fresh code for ``user_id``.

        Any previously issued, unconsumed code for the same user stops working.
        """
        code = OtpCode.generate()
        await self._otp_store.put(user_id, code.value, self._ttl_seconds)
        logger.info("OTP issued", user_id=str(user_id), ttl_seconds=self._ttl_seconds)
        return code

    async def validate(self, user_id: uuid.UUID, code: OtpCode | str) -> None:
        """Consume the live code of ``user_id`` if it equals ``code``.

        Raises:
            InvalidOtpError: If no code is live, the code differs or its TTL elapsed.
        """
        try:
            otp = code if isinstance(code, OtpCode) else OtpCode.parse(code)
        except InvalidOtpFormatError:
            logger.warning("OTP validation failed", user_id=str(user_id), reason="malformed")
            raise InvalidOtpError()

        if not await self._otp_store.take_if_match(user_id, otp.value):
            logger.warning("OTP validation failed", user_id=str(user_id), reason="mismatch_or_expired")
            raise InvalidOtpError()

        logger.info("OTP validated", user_id=str(user_id))
