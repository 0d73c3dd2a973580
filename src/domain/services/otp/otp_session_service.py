"""OTP Session Domain Service.

An OTP session is an opaque id that maps to a user id for a short time. It lets
unauthenticated flows (signup, resend, forgot password) point at a user without
revealing the user id or the phone number to the client.
"""

import uuid
from datetime import timedelta

import structlog

from src.core.exceptions import InvalidOtpSessionError
from src.domain.interfaces.stores import IOtpSessionStore
from src.domain.value_objects.otp_session_id import OtpSessionId

logger = structlog.get_logger(__name__)


class OtpSessionService:
    """Creates, resolves and consumes OTP sessions.

    A session survives failed code attempts so the user can retry or ask for a
    resend; it is consumed once the code it guards was accepted.
    """

    def __init__(self, session_store: IOtpSessionStore, ttl: timedelta = timedelta(minutes=10)):
        self._session_store = session_store
        self._ttl_seconds = int(ttl.total_seconds())

    async def create(self, user_id: uuid.UUID) -> OtpSessionId:
        session_id = OtpSessionId.generate()
        await self._session_store.put(session_id.value, user_id, self._ttl_seconds)
        logger.debug("OTP session created", session=session_id.mask_for_logging(), user_id=str(user_id))
        return session_id

    async def resolve(self, session_id: OtpSessionId | str) -> uuid.UUID:
        """Return the user id behind ``session_id`` without consuming it.

        Raises:
            InvalidOtpSessionError: If the session is malformed, unknown or expired.
        """
        session = session_id if isinstance(session_id, OtpSessionId) else OtpSessionId(session_id)
        user_id = await self._session_store.get_user_id(session.value)
        if user_id is None:
            logger.warning("OTP session not found", session=session.mask_for_logging())
            raise InvalidOtpSessionError()
        return user_id

    async def consume(self, session_id: OtpSessionId | str) -> None:
        session = session_id if isinstance(session_id, OtpSessionId) else OtpSessionId(session_id)
        await self._session_store.delete(session.value)

    @staticmethod
    def decoy() -> OtpSessionId:
        """A well-formed session id that is never stored.

        Returned when the real user must not be revealed (forgot password for an
        unknown or disabled phone).
        """
        return OtpSessionId.generate()
