import asyncio
import pytest
from fastapi.testclient import TestClient
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

import showbook.models  # noqa: F401
from showbook.app import create_app
from showbook.core.config import Settings, settings
from showbook.core.locks import LocalShowLocks
from showbook.crud.booking import CRUDBooking
from showbook.db.base import Base
from showbook.scripts.seed_data import seed_shows
from showbook.storage.database import DatabaseStorage
from showbook.storage.memory import MemoryStorage


class YieldingMemoryStorage(MemoryStorage):
    """Memory storage that gives up the event loop on every call,
    so concurrent requests really interleave."""

    async def get_show(self, show_id):
        await asyncio.sleep(0)
        return await super().get_show(show_id)

    async def list_bookings(self, show_id=None):
        await asyncio.sleep(0)
        return await super().list_bookings(show_id)

    async def create_booking(self, booking):
        await asyncio.sleep(0)
        return await super().create_booking(booking)


@pytest.fixture
def show_locks():
    return LocalShowLocks()


@pytest.fixture
def allocator():
    return CRUDBooking(reject_seats_without_seat_model=False)


@pytest.fixture
async def memory_storage():
    storage = MemoryStorage()
    await storage.reset(seed_shows())
    return storage


@pytest.fixture
async def yielding_storage():
    storage = YieldingMemoryStorage()
    await storage.reset(seed_shows())
    return storage


@pytest.fixture
async def db_engine(tmp_path):
    """SQLite file per test, created in the same event loop as the test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'showbook_test.db'}",
        echo=False,
        future=True
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        expire_on_commit=False,
        autoflush=False
    )


@pytest.fixture
async def database_storage(db_session_factory):
    storage = DatabaseStorage(db_session_factory)
    await storage.reset(seed_shows())
    return storage


@pytest.fixture(params=["memory", "database"])
async def storage(request, db_session_factory):
    """Runs a test once per storage backend, both seeded with s1, s2 and s3."""
    if request.param == "memory":
        storage = MemoryStorage()
    else:
        storage = DatabaseStorage(db_session_factory)
    await storage.reset(seed_shows())
    return storage


@pytest.fixture
def test_settings():
    return Settings(
        ENV="test",
        STORAGE_BACKEND="memory",
        LOCK_BACKEND="local",
        SEED_ON_STARTUP=True,
        ALLOW_RESET=True,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(test_settings):
    app = create_app(settings=test_settings, storage=MemoryStorage(), show_locks=LocalShowLocks())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
async def redis_client():
    """Redis at REDIS_URL; tests depending on it are skipped when nothing answers."""
    redis = Redis.from_url(
        settings.REDIS_URL,
        decode_responses=False,
        socket_connect_timeout=2
    )
    try:
        await redis.ping()
    except Exception as e:
        await redis.aclose()
        pytest.skip(f"redis not reachable at {settings.REDIS_URL}: {e}")
    try:
        keys = await redis.keys("lock:{show:*")
        if keys:
            await redis.delete(*keys)
        yield redis
    finally:
        keys = await redis.keys("lock:{show:*")
        if keys:
            await redis.delete(*keys)
        await redis.aclose()
