"""
Async SQLAlchemy database setup.

Engines and session factories are built explicitly from settings at
application start and handed to the stores that need them.
"""
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

# Base class for all models
Base = declarative_base()


def build_engine(database_url: str, debug: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite URLs skip pre-ping since there is no server connection to check.
    """
    options = {
        "echo": debug,
        "future": True,
    }
    if not database_url.startswith("sqlite"):
        options["pool_pre_ping"] = True
        if debug:
            # NullPool avoids stale pooled connections under auto-reload
            options["poolclass"] = NullPool
    return create_async_engine(database_url, **options)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables that do not exist yet.

    Note: In production, manage the schema with migrations instead.
    """
    async with engine.begin() as conn:
        # Import models so they are registered on Base.metadata
        from instructor_reviews.models import review  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)


async def close_db(*engines: AsyncEngine) -> None:
    """Dispose engines; the same engine may be passed twice."""
    seen = set()
    for engine in engines:
        if id(engine) in seen:
            continue
        seen.add(id(engine))
        await engine.dispose()
