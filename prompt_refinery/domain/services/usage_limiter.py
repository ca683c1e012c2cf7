"""Per-user daily quota on final generations."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from prompt_refinery.core.keyed_lock import KeyedLock
from prompt_refinery.domain.models.conversation import LimitStatus, UsageRecord
from prompt_refinery.persistence.usage_store import UsageStore

logger = logging.getLogger(__name__)

DEFAULT_DAILY_LIMIT = 5


def utc_today() -> str:
    """Current UTC calendar day as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


class UsageLimiter:
    """Tracks final generations per user and calendar day.

    A stored record dated any other day than today counts as no record at
    all. Records are overwritten, never deleted.
    """

    def __init__(
        self,
        store: UsageStore,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        today: Callable[[], str] = utc_today,
    ) -> None:
        self.store = store
        self.daily_limit = daily_limit
        self._today = today
        self._locks = KeyedLock()

    async def check_limit(self, user_id: str) -> LimitStatus:
        """Check whether the user may run another final generation.

        A missing or stale record is reset to zero for today as a side effect.

        Raises:
            StorageError: If the usage store is unavailable
        """
        async with self._locks.hold(user_id):
            today = self._today()
            record = await self.store.get(user_id)

            if record is None or record.date != today:
                await self.store.put(user_id, UsageRecord(date=today, count=0))
                return LimitStatus(allowed=True, remaining=self.daily_limit)

            if record.count >= self.daily_limit:
                return LimitStatus(allowed=False, remaining=0)

            return LimitStatus(allowed=True, remaining=self.daily_limit - record.count)

    async def increment_usage(self, user_id: str) -> int:
        """Record one final generation for today.

        The cap is not enforced here; callers run check_limit first.

        Returns:
            The new count for today

        Raises:
            StorageError: If the usage store is unavailable
        """
        async with self._locks.hold(user_id):
            today = self._today()
            record = await self.store.get(user_id)
            current = record.count if record is not None and record.date == today else 0

            await self.store.put(user_id, UsageRecord(date=today, count=current + 1))

        logger.info(
            "Usage incremented",
            extra={"user_id": user_id, "usage_count": current + 1, "usage_date": today},
        )
        return current + 1
