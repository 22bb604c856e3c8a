"""Gym repository serving both event joins and the gym directory."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sparmatch.db.models import Gym
from sparmatch.db.repositories.base import coerce_enum_list
from sparmatch.schemas.event import GymSummary
from sparmatch.schemas.gym import CombatSport, DirectoryGym


class SQLGymRepository:
    """Read access to the ``gyms`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_gyms(self, gym_ids: Sequence[str]) -> dict[str, GymSummary]:
        """Return summaries keyed by gym id; unknown ids are omitted."""
        if not gym_ids:
            return {}

        result = await self._session.execute(select(Gym).where(Gym.id.in_(list(gym_ids))))
        return {
            gym.id: GymSummary(
                gym_id=gym.id,
                name=gym.name,
                city=gym.city,
                country=gym.country,
                latitude=gym.latitude,
                longitude=gym.longitude,
            )
            for gym in result.scalars().all()
        }

    async def search_gyms(
        self,
        *,
        country_code: str | None = None,
        city: str | None = None,
        sport: CombatSport | None = None,
        search_term: str | None = None,
        claimed_only: bool | None = None,
    ) -> list[DirectoryGym]:
        """Search the directory ordered by gym name."""
        query = select(Gym).order_by(Gym.name, Gym.id)

        if country_code:
            query = query.where(Gym.country_code == country_code.upper())
        if city:
            query = query.where(func.lower(Gym.city) == city.lower())
        if search_term:
            query = query.where(func.lower(Gym.name).contains(search_term.lower()))
        if claimed_only is not None:
            query = query.where(Gym.is_claimed == claimed_only)

        result = await self._session.execute(query)
        gyms = [
            DirectoryGym(
                gym_id=gym.id,
                name=gym.name,
                slug=gym.slug,
                country_code=gym.country_code,
                country_name=gym.country,
                city=gym.city,
                address=gym.address,
                latitude=gym.latitude,
                longitude=gym.longitude,
                sports=coerce_enum_list(CombatSport, gym.sports),
                is_claimed=gym.is_claimed,
                verified=gym.verified,
            )
            for gym in result.scalars().all()
        ]
        # JSON containment differs between PostgreSQL and SQLite, so the sport
        # predicate runs here.
        if sport is not None:
            gyms = [gym for gym in gyms if sport in gym.sports]
        return gyms
