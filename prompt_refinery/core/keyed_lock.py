"""Per-key asyncio locks.

Conversation turns and usage counter updates are read-modify-write sequences
keyed by user id. ``KeyedLock`` hands out one ``asyncio.Lock`` per key and
forgets it once nobody holds or waits on it, so the registry does not grow with
the number of users ever seen.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class KeyedLock:
    """Registry of asyncio locks indexed by key."""

    def __init__(self) -> None:
        # key -> (lock, number of tasks holding or waiting)
        self._locks: dict[str, tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        if key in self._locks:
            lock, users = self._locks[key]
        else:
            lock, users = asyncio.Lock(), 0
        self._locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[key]
            if users <= 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, users - 1)

    def __len__(self) -> int:
        return len(self._locks)
