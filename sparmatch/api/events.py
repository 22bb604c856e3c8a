from datetime import date

from fastapi import APIRouter, Depends, Query

from sparmatch.schemas.event import (
    EventIntensity,
    EventSearchResponse,
    EventStatus,
    EventType,
    ExperienceLevel,
    SearchFilters,
    WeightClass,
)
from sparmatch.services.dependencies import (
    get_discovery_service,
    get_fighter_profile_store,
)
from sparmatch.services.discovery_service import DiscoveryResult, DiscoveryService
from sparmatch.services.recommendation import FighterProfileStore, load_fighter_profile
from sparmatch.settings import AppSettings, get_settings

router = APIRouter()


def _to_response(result: DiscoveryResult) -> EventSearchResponse:
    return EventSearchResponse(
        events=result.events,
        total=len(result),
        ranked=result.ranked,
        location_available=result.location_available,
        source=result.source,
    )


@router.get("/search", response_model=EventSearchResponse)
async def search_events(
    event_types: list[EventType] | None = Query(None, alias="event_type"),
    intensities: list[EventIntensity] | None = Query(None, alias="intensity"),
    weight_classes: list[WeightClass] | None = Query(None, alias="weight_class"),
    experience_levels: list[ExperienceLevel] | None = Query(None, alias="experience_level"),
    date_from: date | None = Query(None, description="Earliest event date (default: today)"),
    date_to: date | None = Query(None, description="Latest event date, inclusive"),
    max_distance: float | None = Query(
        None, ge=0, description="Distance ceiling in km; ignored without a location"
    ),
    gym_id: str | None = Query(None),
    status: EventStatus | None = Query(None, description="Event status (default: published)"),
    searcher_id: str | None = Query(None, description="Fighter whose request state to attach"),
    service: DiscoveryService = Depends(get_discovery_service),
) -> EventSearchResponse:
    """Search upcoming events, nearest first when a location is supplied."""
    filters = SearchFilters(
        event_types=event_types,
        intensities=intensities,
        weight_classes=weight_classes,
        experience_levels=experience_levels,
        date_from=date_from,
        date_to=date_to,
        max_distance=max_distance,
        gym_id=gym_id,
        status=status,
    )
    location = await service.resolve_searcher_location()
    result = await service.search_events(filters, location, searcher_id)
    return _to_response(result)


@router.get("/nearby", response_model=EventSearchResponse)
async def nearby_events(
    max_distance: float | None = Query(None, ge=0, description="Radius in km"),
    searcher_id: str | None = Query(None),
    service: DiscoveryService = Depends(get_discovery_service),
    settings: AppSettings = Depends(get_settings),
) -> EventSearchResponse:
    """Events around the searcher; the whole catalog when the location is unknown."""
    radius = max_distance if max_distance is not None else settings.nearby_default_radius_km
    result = await service.get_nearby_events(radius, searcher_id)
    return _to_response(result)


@router.get("/recommended/{fighter_id}", response_model=EventSearchResponse)
async def recommended_events(
    fighter_id: str,
    weight_class: WeightClass | None = Query(
        None, description="Used only when no profile store is configured"
    ),
    experience_level: ExperienceLevel | None = Query(
        None, description="Used only when no profile store is configured"
    ),
    service: DiscoveryService = Depends(get_discovery_service),
    profile_store: FighterProfileStore | None = Depends(get_fighter_profile_store),
) -> EventSearchResponse:
    """Events matching the fighter's weight class, experience level and area."""
    fighter = await load_fighter_profile(
        profile_store,
        fighter_id,
        weight_class=weight_class,
        experience_level=experience_level,
    )
    result = await service.get_recommended_events(fighter)
    return _to_response(result)


@router.get("/gym/{gym_id}", response_model=EventSearchResponse)
async def gym_events(
    gym_id: str,
    searcher_id: str | None = Query(None),
    service: DiscoveryService = Depends(get_discovery_service),
) -> EventSearchResponse:
    """Upcoming published events hosted by one gym."""
    result = await service.get_gym_events(gym_id, searcher_id)
    return _to_response(result)
