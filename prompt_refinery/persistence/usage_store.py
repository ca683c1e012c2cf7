"""Persistent per-user usage counters."""

from abc import ABC, abstractmethod

from prompt_refinery.core.errors import StorageError
from prompt_refinery.domain.models.conversation import UsageRecord
from prompt_refinery.infrastructure.redis import RedisClient


class UsageStore(ABC):
    """Key-value store of UsageRecord by user id.

    Implementations raise StorageError when the backend is unavailable.
    """

    @abstractmethod
    async def get(self, user_id: str) -> UsageRecord | None:
        """Read the user's record, None if never written."""

    @abstractmethod
    async def put(self, user_id: str, record: UsageRecord) -> None:
        """Overwrite the user's record."""


class InMemoryUsageStore(UsageStore):
    """Usage counters kept in process memory (development and tests)."""

    def __init__(self) -> None:
        self._records: dict[str, UsageRecord] = {}

    async def get(self, user_id: str) -> UsageRecord | None:
        record = self._records.get(user_id)
        return UsageRecord(record.date, record.count) if record else None

    async def put(self, user_id: str, record: UsageRecord) -> None:
        self._records[user_id] = UsageRecord(record.date, record.count)


class RedisUsageStore(UsageStore):
    """Usage counters stored as JSON documents in Redis."""

    KEY_PREFIX = "usage_limits"

    def __init__(self, client: RedisClient) -> None:
        self.client = client

    def _key(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}:{user_id}"

    async def get(self, user_id: str) -> UsageRecord | None:
        data = await self.client.get_json(self._key(user_id))
        if data is None:
            return None
        try:
            return UsageRecord.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Corrupt usage record for {user_id}") from e

    async def put(self, user_id: str, record: UsageRecord) -> None:
        await self.client.set_json(self._key(user_id), record.to_dict())
