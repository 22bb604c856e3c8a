"""Discovery facade: the single entry point for event searches.

Every search runs the same fixed sequence: catalog fetch, enrichment
(distance + request state), filtering, ranking. Distances only exist after
enrichment, so the order cannot change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sparmatch.schemas.event import (
    Coordinate,
    EnrichedEvent,
    EventStatus,
    FighterQueryProfile,
    SearchFilters,
)
from sparmatch.services.catalog import CatalogQuery, CatalogSource, CatalogSourceName
from sparmatch.services.enrichment import RequestStateEnricher, to_enriched_event
from sparmatch.services.errors import CatalogUnavailable
from sparmatch.services.filtering import filter_events
from sparmatch.services.location import LocationProvider, resolve_location
from sparmatch.services.ranking import rank_events
from sparmatch.services.recommendation import RecommendationComposer
from sparmatch.settings import (
    DEFAULT_LOCATION_TIMEOUT_SECONDS,
    DEFAULT_NEARBY_RADIUS_KM,
    DEFAULT_RECOMMENDATION_RADIUS_KM,
)

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """Outcome of one discovery call."""

    events: list[EnrichedEvent] = field(default_factory=list)
    source: CatalogSourceName = "live"
    ranked: bool = False
    location_available: bool = False

    def __len__(self) -> int:
        return len(self.events)


class DiscoveryService:
    """Search, nearby and recommendation flows over one shared pipeline.

    ``fallback_source`` is consulted only when ``catalog_source`` raises
    :class:`CatalogUnavailable`. Without a fallback that error propagates to
    the caller as the single non-degradable failure.
    """

    def __init__(
        self,
        catalog_source: CatalogSource,
        enricher: RequestStateEnricher,
        *,
        fallback_source: CatalogSource | None = None,
        location_provider: LocationProvider | None = None,
        location_timeout_seconds: float = DEFAULT_LOCATION_TIMEOUT_SECONDS,
        recommendation_radius_km: float = DEFAULT_RECOMMENDATION_RADIUS_KM,
    ) -> None:
        self._catalog_source = catalog_source
        self._fallback_source = fallback_source
        self._enricher = enricher
        self._location_provider = location_provider
        self._location_timeout_seconds = location_timeout_seconds
        self._composer = RecommendationComposer(
            self,
            radius_km=recommendation_radius_km,
            location_timeout_seconds=location_timeout_seconds,
        )

    async def resolve_searcher_location(self) -> Coordinate | None:
        """Resolve the configured location provider, bounded by the timeout."""

        return await resolve_location(
            self._location_provider, timeout_seconds=self._location_timeout_seconds
        )

    async def search_events(
        self,
        filters: SearchFilters | None = None,
        searcher_location: Coordinate | None = None,
        searcher_id: str | None = None,
    ) -> DiscoveryResult:
        """Fetch, enrich, filter and rank events for one searcher."""

        filters = filters or SearchFilters()
        query = CatalogQuery.from_filters(filters)

        try:
            entries = await self._catalog_source.load(query)
        except CatalogUnavailable as exc:
            if self._fallback_source is None:
                logger.error("Event catalog unavailable and no fallback configured: %s", exc)
                raise
            logger.warning("Event catalog unavailable, serving sample catalog: %s", exc)
            sample = await self._fallback_source.load(query)
            return DiscoveryResult(
                events=[to_enriched_event(entry) for entry in sample],
                source=self._fallback_source.name,
                ranked=False,
                location_available=searcher_location is not None,
            )

        enriched = await self._enricher.enrich(
            entries, searcher_id=searcher_id, searcher_location=searcher_location
        )
        filtered = filter_events(enriched, filters, searcher_location)
        ranked = rank_events(filtered, searcher_location)

        logger.debug(
            "Discovery search: %s catalog entries, %s after filtering (location=%s)",
            len(entries),
            len(ranked),
            searcher_location is not None,
        )
        return DiscoveryResult(
            events=ranked,
            source=self._catalog_source.name,
            ranked=searcher_location is not None,
            location_available=searcher_location is not None,
        )

    async def get_nearby_events(
        self,
        max_distance_km: float = DEFAULT_NEARBY_RADIUS_KM,
        searcher_id: str | None = None,
    ) -> DiscoveryResult:
        """Events within ``max_distance_km`` of the searcher.

        An unknown location is not a failure: the searcher gets the full,
        unranked catalog instead.
        """

        location = await self.resolve_searcher_location()
        if location is None:
            return await self.search_events(SearchFilters(), None, searcher_id)
        return await self.search_events(
            SearchFilters(max_distance=max_distance_km), location, searcher_id
        )

    async def get_recommended_events(self, fighter: FighterQueryProfile) -> DiscoveryResult:
        """Events matching the fighter's weight class, level and area."""

        return await self._composer.recommend(fighter, self._location_provider)

    async def get_gym_events(
        self,
        gym_id: str,
        searcher_id: str | None = None,
    ) -> DiscoveryResult:
        """Upcoming published events hosted by one gym."""

        location = await self.resolve_searcher_location()
        return await self.search_events(
            SearchFilters(gym_id=gym_id, status=EventStatus.PUBLISHED),
            location,
            searcher_id,
        )


__all__ = ["DiscoveryResult", "DiscoveryService"]
