from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from sparmatch.settings import POSTGRES_ASYNC_PREFIX, get_settings

logger = logging.getLogger(__name__)


def get_database_url() -> str | None:
    """Return the async database URL, or ``None`` when no store is configured.

    Malformed URLs raise ``RuntimeError`` from the settings layer so the API
    fails at startup instead of on the first search.
    """

    return get_settings().resolved_database_url


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create the async SQLAlchemy engine for the event store."""

    url = url or get_database_url()
    if url is None:
        raise RuntimeError(
            "DATABASE_URL is not set. Configure it before creating a database engine."
        )

    engine_kwargs: dict[str, object] = {"future": True, "echo": False}
    if url.startswith(POSTGRES_ASYNC_PREFIX):
        engine_kwargs.update(
            pool_size=10,  # Maintain 10 warm connections
            max_overflow=20,  # Allow up to 30 total connections
            pool_pre_ping=True,  # Validate connections before use
            pool_recycle=1800,  # Recycle connections every 30 min
            pool_timeout=30,
        )

    engine = create_async_engine(url, **engine_kwargs)

    from sparmatch.db.monitoring import setup_query_monitoring

    setup_query_monitoring(
        engine,
        slow_query_threshold=get_settings().slow_query_threshold,
        log_pool_stats=False,
    )
    return engine


def create_session_factory(engine: AsyncEngine) -> sessionmaker[AsyncSession]:
    return sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


# Global engine/session instances for FastAPI dependency injection
_engine: AsyncEngine | None = None
_session_factory: sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global engine instance."""
    global _engine
    if _engine is None:
        _engine = create_engine()
    return _engine


def get_session_factory() -> sessionmaker[AsyncSession]:
    """Lazily create a session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())
    return _session_factory


async def dispose_engine() -> None:
    """Close pooled connections; called from the application lifespan."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db() -> AsyncIterator[AsyncSession | None]:
    """
    Dependency to provide a database session.

    Yields ``None`` when no database is configured so discovery can degrade
    to the sample catalog instead of failing the request outright.
    """
    if get_database_url() is None:
        yield None
        return

    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_async_session_context() -> AsyncIterator[AsyncSession]:
    """
    Async context manager for scripts that need manual session control.
    """
    async with get_session_factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
