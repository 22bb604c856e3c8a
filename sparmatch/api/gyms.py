from fastapi import APIRouter, Depends, Query

from sparmatch.schemas.gym import CombatSport, GymSearchParams, GymSearchResponse
from sparmatch.services.dependencies import get_gym_directory_service, get_location_provider
from sparmatch.services.gym_directory_service import GymDirectoryService
from sparmatch.services.location import LocationProvider, resolve_location
from sparmatch.settings import AppSettings, get_settings

router = APIRouter()


@router.get("/search", response_model=GymSearchResponse)
async def search_gyms(
    country_code: str | None = Query(None, min_length=2, max_length=2),
    city: str | None = Query(None),
    sport: CombatSport | None = Query(None),
    search_term: str | None = Query(None, alias="q", description="Match anywhere in the gym name"),
    claimed_only: bool | None = Query(None),
    max_distance: float | None = Query(None, ge=0, description="Distance ceiling in km"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    service: GymDirectoryService = Depends(get_gym_directory_service),
    location_provider: LocationProvider = Depends(get_location_provider),
    settings: AppSettings = Depends(get_settings),
) -> GymSearchResponse:
    """Search the gym directory, nearest first when a location is supplied."""
    params = GymSearchParams(
        country_code=country_code.upper() if country_code else None,
        city=city,
        sport=sport,
        search_term=search_term,
        claimed_only=claimed_only,
        max_distance=max_distance,
        limit=limit,
        offset=offset,
    )
    location = await resolve_location(
        location_provider, timeout_seconds=settings.location_timeout_seconds
    )
    return await service.search_gyms(params, location)
