"""Profile-driven event recommendations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from sparmatch.schemas.event import (
    Coordinate,
    ExperienceLevel,
    FighterQueryProfile,
    SearchFilters,
    WeightClass,
)
from sparmatch.services.errors import ProfileNotFound
from sparmatch.services.location import LocationProvider, resolve_location
from sparmatch.settings import DEFAULT_LOCATION_TIMEOUT_SECONDS, DEFAULT_RECOMMENDATION_RADIUS_KM

if TYPE_CHECKING:
    from sparmatch.services.discovery_service import DiscoveryResult

logger = logging.getLogger(__name__)


@runtime_checkable
class FighterProfileStore(Protocol):
    async def get_profile(self, fighter_id: str) -> FighterQueryProfile | None:
        """Return the profile for ``fighter_id`` or ``None`` when unknown."""


async def load_fighter_profile(
    store: FighterProfileStore | None,
    fighter_id: str,
    *,
    weight_class: WeightClass | None = None,
    experience_level: ExperienceLevel | None = None,
) -> FighterQueryProfile:
    """Look up ``fighter_id`` or raise :class:`ProfileNotFound`.

    Without a configured store (offline or sample mode) a bare profile is
    built from ``weight_class`` and ``experience_level`` instead, so the
    recommendation flow can still be served from the fallback catalog.
    """

    if store is None:
        logger.info("No fighter profile store configured; using bare profile for %s", fighter_id)
        return FighterQueryProfile(
            fighter_id=fighter_id,
            weight_class=weight_class,
            experience_level=experience_level,
        )

    profile = await store.get_profile(fighter_id)
    if profile is None:
        raise ProfileNotFound(fighter_id)
    return profile


class EventSearcher(Protocol):
    async def search_events(
        self,
        filters: SearchFilters | None = None,
        searcher_location: Coordinate | None = None,
        searcher_id: str | None = None,
    ) -> DiscoveryResult:
        ...


def build_recommendation_filters(
    fighter: FighterQueryProfile,
    *,
    radius_km: float = DEFAULT_RECOMMENDATION_RADIUS_KM,
) -> SearchFilters:
    """Translate a fighter profile into search filters.

    Missing profile attributes simply leave the matching filter unset, so a
    bare profile recommends the whole published catalog.
    """

    return SearchFilters(
        weight_classes=[fighter.weight_class] if fighter.weight_class else None,
        experience_levels=[fighter.experience_level] if fighter.experience_level else None,
        max_distance=radius_km,
    )


class RecommendationComposer:
    """Derive a search from a fighter profile and run it through ``searcher``."""

    def __init__(
        self,
        searcher: EventSearcher,
        *,
        radius_km: float = DEFAULT_RECOMMENDATION_RADIUS_KM,
        location_timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
    ) -> None:
        self._searcher = searcher
        self._radius_km = radius_km
        self._location_timeout_seconds = location_timeout_seconds

    async def recommend(
        self,
        fighter: FighterQueryProfile,
        location_provider: LocationProvider | None,
    ) -> DiscoveryResult:
        filters = build_recommendation_filters(fighter, radius_km=self._radius_km)
        location = await resolve_location(
            location_provider, timeout_seconds=self._location_timeout_seconds
        )
        return await self._searcher.search_events(
            filters, searcher_location=location, searcher_id=fighter.fighter_id
        )


__all__ = [
    "EventSearcher",
    "FighterProfileStore",
    "RecommendationComposer",
    "build_recommendation_filters",
    "load_fighter_profile",
]
