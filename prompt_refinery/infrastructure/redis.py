"""Redis client wrapper backing the persistent usage counters."""

import json
import logging
from typing import Any

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from prompt_refinery.core.errors import StorageError
from prompt_refinery.settings import settings

logger = logging.getLogger(__name__)


class RedisClient:
    """Redis client wrapper for async operations.

    Unlike a cache, the usage counters must not silently disappear, so every
    failure (including "not connected") is raised as StorageError.
    """

    def __init__(self, url: str | None = None) -> None:
        """Initialize Redis client."""
        self._url = url or settings.redis_url
        self._client: aioredis.Redis | None = None

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Connect to Redis."""
        if self._client is not None:
            return
        try:
            client = aioredis.from_url(self._url, encoding="utf-8", decode_responses=True)
            await client.ping()
        except RedisError as e:
            logger.warning(f"Redis connection failed: {e}")
            raise StorageError() from e
        self._client = client
        logger.info("Redis connected successfully")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> aioredis.Redis:
        if self._client is None:
            raise StorageError("Usage storage not connected")
        return self._client

    async def get_json(self, key: str) -> dict[str, Any] | None:
        """Get JSON value from Redis.

        Args:
            key: Redis key

        Returns:
            Parsed JSON dict or None

        Raises:
            StorageError: If Redis is unreachable or the value is not JSON
        """
        client = self._require_client()
        try:
            value = await client.get(key)
        except RedisError as e:
            logger.error(f"Redis GET failed for {key}: {e}")
            raise StorageError() from e
        if value is None:
            return None
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt value stored under {key}") from e

    async def set_json(self, key: str, value: dict[str, Any]) -> None:
        """Set JSON value in Redis.

        Args:
            key: Redis key
            value: Dictionary to store

        Raises:
            StorageError: If Redis is unreachable
        """
        client = self._require_client()
        try:
            await client.set(key, json.dumps(value))
        except RedisError as e:
            logger.error(f"Redis SET failed for {key}: {e}")
            raise StorageError() from e


# Global Redis client instance
redis_client = RedisClient()
