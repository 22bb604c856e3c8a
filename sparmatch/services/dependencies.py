"""FastAPI dependency wiring for discovery services.

Separating dependency factories from the service modules keeps the latter
free of web-layer concerns, so tests and scripts can build the services from
in-memory stores directly.
"""

from __future__ import annotations

from datetime import date

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sparmatch.db.connection import get_db
from sparmatch.db.repositories import (
    SQLEventRepository,
    SQLFighterRepository,
    SQLGymRepository,
    SQLRequestRepository,
)
from sparmatch.services.catalog import CatalogReader, FallbackCatalogSource, LiveCatalogSource
from sparmatch.services.discovery_service import DiscoveryService
from sparmatch.services.enrichment import RequestStateEnricher
from sparmatch.services.gym_directory_service import GymDirectoryService
from sparmatch.services.location import LocationProvider, StaticLocationProvider
from sparmatch.services.recommendation import FighterProfileStore
from sparmatch.services.sample_catalog import SAMPLE_GYM_DIRECTORY, sample_catalog_starting
from sparmatch.settings import AppSettings, get_settings


def get_location_provider(
    lat: float | None = Query(None, ge=-90, le=90, description="Searcher latitude"),
    lng: float | None = Query(None, ge=-180, le=180, description="Searcher longitude"),
) -> LocationProvider:
    """Expose the caller-supplied position as a location provider.

    Sending only one of ``lat``/``lng`` is treated as an unknown location.
    """

    return StaticLocationProvider.from_parts(lat, lng)


def get_discovery_service(
    session: AsyncSession | None = Depends(get_db),
    location_provider: LocationProvider = Depends(get_location_provider),
    settings: AppSettings = Depends(get_settings),
) -> DiscoveryService:
    """Provide a fully-wired :class:`DiscoveryService` for one request."""

    reader = (
        CatalogReader(SQLEventRepository(session), SQLGymRepository(session))
        if session is not None
        else None
    )
    request_store = SQLRequestRepository(session) if session is not None else None
    fallback = (
        FallbackCatalogSource(sample_catalog_starting(date.today()))
        if settings.discovery_sample_fallback
        else None
    )

    return DiscoveryService(
        LiveCatalogSource(reader),
        RequestStateEnricher(request_store),
        fallback_source=fallback,
        location_provider=location_provider,
        location_timeout_seconds=settings.location_timeout_seconds,
        recommendation_radius_km=settings.recommendation_radius_km,
    )


def get_fighter_profile_store(
    session: AsyncSession | None = Depends(get_db),
) -> FighterProfileStore | None:
    return SQLFighterRepository(session) if session is not None else None


def get_gym_directory_service(
    session: AsyncSession | None = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
) -> GymDirectoryService:
    """Wire the gym directory against the database or the sample directory."""

    store = SQLGymRepository(session) if session is not None else None
    fallback = SAMPLE_GYM_DIRECTORY if settings.discovery_sample_fallback else None
    return GymDirectoryService(store, fallback_gyms=fallback)


__all__ = [
    "get_discovery_service",
    "get_fighter_profile_store",
    "get_gym_directory_service",
    "get_location_provider",
]
