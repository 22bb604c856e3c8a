"""Gym directory discovery with distance annotation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError

from sparmatch.schemas.event import Coordinate
from sparmatch.schemas.gym import (
    CombatSport,
    DirectoryGym,
    GymSearchParams,
    GymSearchResponse,
    GymWithDistance,
)
from sparmatch.services.errors import CatalogUnavailable
from sparmatch.services.ranking import rank_by_distance
from sparmatch.utils.geo import optional_distance_km

logger = logging.getLogger(__name__)


@runtime_checkable
class GymDirectoryStore(Protocol):
    """Read surface of the gym directory."""

    async def search_gyms(
        self,
        *,
        country_code: str | None = None,
        city: str | None = None,
        sport: CombatSport | None = None,
        search_term: str | None = None,
        claimed_only: bool | None = None,
    ) -> Sequence[DirectoryGym]:
        """Return gyms matching every supplied predicate, ordered by name."""


def gym_matches(gym: DirectoryGym, params: GymSearchParams) -> bool:
    """Evaluate the directory predicates in Python.

    Country code, city and search term comparisons are case-insensitive,
    matching the SQL store; the search term matches anywhere in the gym name.
    """

    if params.country_code and gym.country_code.upper() != params.country_code.upper():
        return False
    if params.city and gym.city.lower() != params.city.lower():
        return False
    if params.sport and params.sport not in gym.sports:
        return False
    if params.search_term and params.search_term.lower() not in gym.name.lower():
        return False
    if params.claimed_only is not None and gym.is_claimed != params.claimed_only:
        return False
    return True


class GymDirectoryService:
    """Search the gym directory, optionally relative to the searcher."""

    def __init__(
        self,
        store: GymDirectoryStore | None,
        *,
        fallback_gyms: Sequence[DirectoryGym] | None = None,
    ) -> None:
        self._store = store
        self._fallback_gyms = list(fallback_gyms) if fallback_gyms is not None else None

    async def _query_store(self, params: GymSearchParams) -> list[DirectoryGym]:
        if self._store is None:
            raise CatalogUnavailable("Gym directory store is not configured")
        try:
            gyms = await self._store.search_gyms(
                country_code=params.country_code,
                city=params.city,
                sport=params.sport,
                search_term=params.search_term,
                claimed_only=params.claimed_only,
            )
        except (SQLAlchemyError, OSError) as exc:
            raise CatalogUnavailable(f"Gym directory query failed: {exc}") from exc
        return list(gyms)

    async def _load(self, params: GymSearchParams) -> tuple[list[DirectoryGym], bool]:
        """Return matching gyms and whether they came from the sample directory."""

        try:
            return await self._query_store(params), False
        except CatalogUnavailable as exc:
            if self._fallback_gyms is None:
                raise
            logger.warning("Gym directory unavailable, serving sample directory: %s", exc)
            return [gym for gym in self._fallback_gyms if gym_matches(gym, params)], True

    async def search_gyms(
        self,
        params: GymSearchParams,
        searcher_location: Coordinate | None = None,
    ) -> GymSearchResponse:
        gyms, from_sample = await self._load(params)

        annotated = [
            GymWithDistance(
                **gym.model_dump(),
                distance=optional_distance_km(searcher_location, gym.latitude, gym.longitude),
            )
            for gym in gyms
        ]
        if params.max_distance is not None and searcher_location is not None:
            ceiling = params.max_distance
            annotated = [
                gym for gym in annotated if gym.distance is not None and gym.distance <= ceiling
            ]
        ranked = rank_by_distance(annotated, searcher_location)

        total = len(ranked)
        page = ranked[params.offset : params.offset + params.limit]
        return GymSearchResponse(
            gyms=page,
            total=total,
            limit=params.limit,
            offset=params.offset,
            has_more=(params.offset + params.limit) < total,
            ranked=searcher_location is not None,
            source="sample" if from_sample else "live",
        )


__all__ = ["GymDirectoryService", "GymDirectoryStore", "gym_matches"]
