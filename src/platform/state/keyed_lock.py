"""
Keyed Lock

In-process mutual exclusion per string key (e.g. one slot key per lock).
Holders of different keys never contend; holders of the same key linearize.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio

from src.platform.logging.loguru_io import Logger


class KeyedLock:
    """
    Lazily created anyio.Lock per key

    A lock entry lives only while at least one task holds or waits on it,
    so the map does not grow with the number of distinct keys ever seen.
    Locks are created inside the running event loop on first use.
    """

    def __init__(self) -> None:
        self._locks: dict[str, anyio.Lock] = {}
        self._holders: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = anyio.Lock()
            self._locks[key] = lock
        self._holders[key] = self._holders.get(key, 0) + 1

        try:
            async with lock:
                Logger.base.debug(f'🔒 [LOCK] Acquired lock: {key}')
                yield
        finally:
            remaining = self._holders[key] - 1
            if remaining:
                self._holders[key] = remaining
            else:
                del self._holders[key]
                del self._locks[key]
            Logger.base.debug(f'🔓 [LOCK] Released lock: {key}')

    def __len__(self) -> int:
        return len(self._locks)
