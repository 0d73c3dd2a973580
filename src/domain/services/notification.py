"""Isolated dispatch of the "verification required" side effect.

Signup, resend, forgot password and phone change all end by asking the
``IVerificationNotifier`` to issue and deliver a code. None of them may fail
because the SMS gateway is down: the user can always ask for a resend.
"""

from typing import Optional

import structlog

from src.domain.entities.user import User
from src.domain.interfaces.services import IVerificationNotifier
from src.domain.value_objects.phone import Phone

logger = structlog.get_logger(__name__)


class VerificationDispatcher:
    """Calls the notifier and absorbs whatever it raises."""

    def __init__(self, notifier: IVerificationNotifier):
        self._notifier = notifier

    async def dispatch(self, user: User, target_phone: Optional[str] = None) -> bool:
        """Returns ``True`` if the notifier completed without raising."""
        try:
            await self._notifier.notify_verification_required(user, target_phone)
            return True
        except Exception as e:
            logger.error(
                "Verification notification failed",
                user_id=str(user.id),
                phone=Phone(target_phone or user.phone).mask_for_logging(),
                error_type=type(e).__name__,
                error=str(e),
            )
            return False
