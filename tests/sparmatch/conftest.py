"""Shared fixtures for discovery engine tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sparmatch.db.models import Base
from sparmatch.schemas.event import Coordinate, GymSummary
from tests.support.in_memory_stores import SEARCHER_LATITUDE, SEARCHER_LONGITUDE, make_gym

TODAY = date(2030, 1, 1)


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    """Provide an in-memory SQLite session for repository tests."""
    pytest.importorskip("aiosqlite")
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async_session = async_sessionmaker(engine, expire_on_commit=False)
    async with async_session() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()
    await engine.dispose()


@pytest.fixture
def searcher() -> Coordinate:
    return Coordinate(latitude=SEARCHER_LATITUDE, longitude=SEARCHER_LONGITUDE)


@pytest.fixture
def gyms() -> dict[str, GymSummary]:
    """Gyms at increasing distances from the searcher fixture.

    ``near`` is ~5 km north, ``mid`` ~30 km north, ``far`` is Kaunas (~90 km)
    and ``unknown`` has no recorded coordinates.
    """
    return {
        "near": make_gym("gym-near", SEARCHER_LATITUDE + 0.045, SEARCHER_LONGITUDE),
        "mid": make_gym("gym-mid", SEARCHER_LATITUDE + 0.27, SEARCHER_LONGITUDE),
        "far": make_gym("gym-far", 54.8985, 23.9036, city="Kaunas"),
        "unknown": make_gym("gym-unknown", None, None),
    }
