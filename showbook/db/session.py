from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from showbook.core.config import get_settings
from showbook.db.base import Base


settings = get_settings()

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    future=True,
    pool_pre_ping=True
)

async_session = async_sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False
)


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Create all tables based on models.
    Used in development and tests; production schemas are managed out of band.
    """
    import showbook.models  # noqa: F401  registers the tables on Base.metadata

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
