# door_catalog/database.py

# type: ignore[misc]
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import declarative_base

from door_catalog.core.config import Settings, get_settings

Base = declarative_base()


def create_engine_from_settings(settings: Optional[Settings] = None) -> AsyncEngine:
    """Build an async engine for the configured database.

    Pool sizing only applies to server databases; SQLite uses its own pool.
    """
    settings = settings or get_settings()
    url = settings.async_database_url

    engine_kwargs = {"echo": settings.DB_ECHO, "future": True}
    if not url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=10,
            max_overflow=20,
            pool_timeout=30,
            pool_recycle=1800,
        )
    return create_async_engine(url, **engine_kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


@asynccontextmanager
async def session_scope(settings: Optional[Settings] = None) -> AsyncIterator[AsyncSession]:
    """Engine + session for one command run, disposed on exit."""
    engine = create_engine_from_settings(settings)
    session_factory = create_session_factory(engine)
    session = session_factory()
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()
