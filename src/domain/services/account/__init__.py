"""Account self-service and housekeeping flows."""

from .account_cleanup_service import AccountCleanupService
from .phone_change_service import PhoneChangeService
from .profile_service import ProfileService

__all__ = ["AccountCleanupService", "PhoneChangeService", "ProfileService"]
