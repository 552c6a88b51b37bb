from fastapi import Request
from redis.asyncio import Redis

from showbook.core.config import Settings
from showbook.core.locks import LocalShowLocks, RedisShowLocks, ShowLocks
from showbook.storage.base import Storage
from showbook.storage.memory import MemoryStorage


def build_storage(settings: Settings) -> Storage:
    if settings.STORAGE_BACKEND == "database":
        from showbook.db.session import async_session, engine
        from showbook.storage.database import DatabaseStorage
        return DatabaseStorage(async_session, engine=engine)
    return MemoryStorage()


def build_show_locks(settings: Settings) -> ShowLocks:
    if settings.LOCK_BACKEND == "redis":
        return RedisShowLocks(
            Redis.from_url(settings.REDIS_URL),
            timeout=settings.SHOW_LOCK_TIMEOUT,
            blocking_timeout=settings.SHOW_LOCK_BLOCKING_TIMEOUT,
        )
    return LocalShowLocks()


async def get_storage(request: Request) -> Storage:
    """FastAPI dependency returning the storage chosen at startup."""
    return request.app.state.storage


async def get_show_locks(request: Request) -> ShowLocks:
    return request.app.state.show_locks


__all__ = ["Storage", "MemoryStorage", "build_storage", "build_show_locks", "get_storage", "get_show_locks"]
