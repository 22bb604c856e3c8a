"""Fighter profile lookups used by the recommendation flow."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sparmatch.db.models import Fighter
from sparmatch.db.repositories.base import coerce_enum
from sparmatch.schemas.event import ExperienceLevel, FighterQueryProfile, WeightClass


class SQLFighterRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_profile(self, fighter_id: str) -> FighterQueryProfile | None:
        """Return the query profile for ``fighter_id`` or ``None`` when unknown."""
        result = await self._session.execute(select(Fighter).where(Fighter.id == fighter_id))
        fighter = result.scalar_one_or_none()
        if fighter is None:
            return None

        return FighterQueryProfile(
            fighter_id=fighter.id,
            weight_class=coerce_enum(WeightClass, fighter.weight_class),
            experience_level=coerce_enum(ExperienceLevel, fighter.experience_level),
        )
