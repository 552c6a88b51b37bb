import asyncio
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Dict

from redis.asyncio import Redis
from redis.exceptions import LockError, LockNotOwnedError


logger = logging.getLogger(__name__)


class ShowLocks(ABC):
    """Serializes booking requests that target the same show."""

    @abstractmethod
    def hold(self, show_id: str) -> AsyncContextManager[None]:
        pass

    async def close(self) -> None:
        pass


class LocalShowLocks(ShowLocks):
    """One asyncio.Lock per show, created the first time the show is booked.

    Only valid inside a single event loop / process.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock_for(self, show_id: str) -> asyncio.Lock:
        lock = self._locks.get(show_id)
        if lock is None:
            lock = self._locks[show_id] = asyncio.Lock()
        return lock

    @asynccontextmanager
    async def hold(self, show_id: str) -> AsyncIterator[None]:
        async with self.lock_for(show_id):
            yield


class RedisShowLocks(ShowLocks):
    """Show locks shared by every worker process talking to the same redis."""

    def __init__(self, redis: Redis, timeout: float = 10.0, blocking_timeout: float = 5.0):
        self.redis = redis
        self.timeout = timeout
        self.blocking_timeout = blocking_timeout

    @staticmethod
    def key_for(show_id: str) -> str:
        # hash tag keeps every key of a show on the same cluster slot
        return f"lock:{{show:{show_id}}}"

    @asynccontextmanager
    async def hold(self, show_id: str) -> AsyncIterator[None]:
        lock = self.redis.lock(
            self.key_for(show_id),
            timeout=self.timeout,
            blocking_timeout=self.blocking_timeout,
        )
        if not await lock.acquire():
            raise LockError(f"Unable to lock show {show_id} within {self.blocking_timeout}s")
        logger.debug("acquired redis lock for show %s", show_id)
        try:
            yield
        finally:
            try:
                await lock.release()
            except LockNotOwnedError:
                # the key expired mid-section; whatever the section did stands
                logger.warning("redis lock for show %s expired before release (timeout %ss)",
                               show_id, self.timeout)

    async def close(self) -> None:
        await self.redis.aclose()
