"""Account Cleanup Domain Service.

Two independent sweeps remove accounts that will never be used again:

- ``PENDING_VERIFICATION`` accounts created more than 24 hours ago
- ``DISABLED`` accounts last updated more than 7 days ago

Each sweep deletes the refresh tokens of the selected users, then the users.
Both are idempotent: a second run with no newly qualifying rows deletes nothing.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import structlog

from src.domain.entities.user import AccountStatus
from src.domain.interfaces.repositories import IRefreshTokenRepository, IUserRepository
from src.domain.interfaces.services import ITransactionManager

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccountCleanupService:
    """Batch deletion of stale pending and disabled accounts.

    Triggering the sweeps (cron, scheduler) is the caller's concern.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        refresh_token_repository: IRefreshTokenRepository,
        transaction_manager: ITransactionManager,
        pending_max_age: timedelta = timedelta(hours=24),
        disabled_max_age: timedelta = timedelta(days=7),
        batch_size: Optional[int] = 500,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._user_repository = user_repository
        self._refresh_token_repository = refresh_token_repository
        self._transaction_manager = transaction_manager
        self._pending_max_age = pending_max_age
        self._disabled_max_age = disabled_max_age
        self._batch_size = batch_size
        self._clock = clock

    async def cleanup_pending_accounts(self) -> int:
        """Returns:
            Number of pending users deleted.
        """
        cutoff = self._clock() - self._pending_max_age
        return await self._sweep(AccountStatus.PENDING_VERIFICATION, cutoff, "created_at")

    async def cleanup_disabled_accounts(self) -> int:
        """Returns:
            Number of disabled users deleted.
        """
        cutoff = self._clock() - self._disabled_max_age
        return await self._sweep(AccountStatus.DISABLED, cutoff, "updated_at")

    async def _sweep(self, status: AccountStatus, cutoff: datetime, age_field: str) -> int:
        async def _delete_batch() -> int:
            users = await self._user_repository.find_by_status_older_than(
                status, cutoff, age_field=age_field, limit=self._batch_size
            )
            if not users:
                return 0
            tokens = await self._refresh_token_repository.delete_all_by_user_ids([u.id for u in users])
            deleted = await self._user_repository.delete_all(users)
            logger.debug("Cleanup batch deleted", status=status.value, users=deleted, tokens=tokens)
            return deleted

        total = 0
        while True:
            deleted = await self._transaction_manager.run(_delete_batch)
            total += deleted
            if deleted == 0 or self._batch_size is None or deleted < self._batch_size:
                break

        logger.info("Account cleanup finished", status=status.value, cutoff=cutoff.isoformat(), deleted=total)
        return total
