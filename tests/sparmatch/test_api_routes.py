"""Integration-style tests that exercise FastAPI routes with in-memory stores."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from datetime import date, timedelta

import pytest
import pytest_asyncio
from fastapi import Depends
from httpx import ASGITransport, AsyncClient

from sparmatch.db.connection import get_db
from sparmatch.main import app
from sparmatch.schemas.event import (
    Event,
    ExperienceLevel,
    FighterQueryProfile,
    GymSummary,
    RequestStatus,
    WeightClass,
)
from sparmatch.services.catalog import CatalogReader, FallbackCatalogSource, LiveCatalogSource
from sparmatch.services.dependencies import (
    get_discovery_service,
    get_fighter_profile_store,
    get_gym_directory_service,
    get_location_provider,
)
from sparmatch.services.discovery_service import DiscoveryService
from sparmatch.services.enrichment import RequestStateEnricher
from sparmatch.services.gym_directory_service import GymDirectoryService
from sparmatch.services.location import LocationProvider
from sparmatch.services.sample_catalog import SAMPLE_CATALOG
from sparmatch.settings import AppSettings, get_settings
from tests.support.in_memory_stores import (
    SEARCHER_LATITUDE,
    SEARCHER_LONGITUDE,
    InMemoryEventStore,
    InMemoryGymDirectoryStore,
    InMemoryGymStore,
    InMemoryProfileStore,
    InMemoryRequestStore,
    make_directory_gym,
    make_event,
    request,
)

TODAY = date(2030, 1, 1)
LOCATION_PARAMS = {"lat": SEARCHER_LATITUDE, "lng": SEARCHER_LONGITUDE}


def _discovery_factory(
    events: list[Event],
    gyms: dict[str, GymSummary],
    *,
    fallback: bool = True,
    event_error: Exception | None = None,
) -> Callable[..., DiscoveryService]:
    requests = InMemoryRequestStore({"fighter-1": [request("evt-near", RequestStatus.PENDING)]})

    def factory(
        location_provider: LocationProvider = Depends(get_location_provider),
    ) -> DiscoveryService:
        reader = CatalogReader(
            InMemoryEventStore(events, error=event_error), InMemoryGymStore(gyms.values())
        )
        return DiscoveryService(
            LiveCatalogSource(reader, today=lambda: TODAY),
            RequestStateEnricher(requests),
            fallback_source=FallbackCatalogSource(SAMPLE_CATALOG) if fallback else None,
            location_provider=location_provider,
            location_timeout_seconds=1,
        )

    return factory


@pytest.fixture
def catalog_events() -> list[Event]:
    return [
        make_event("evt-far", gym_id="gym-far", event_date=TODAY),
        make_event(
            "evt-near",
            gym_id="gym-near",
            event_date=TODAY + timedelta(days=1),
            experience_levels=[ExperienceLevel.INTERMEDIATE, ExperienceLevel.ADVANCED],
        ),
        make_event(
            "evt-heavy",
            gym_id="gym-mid",
            event_date=TODAY + timedelta(days=2),
            weight_classes=[WeightClass.HEAVYWEIGHT],
        ),
    ]


async def _no_database() -> AsyncIterator[None]:
    yield None


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    app.dependency_overrides[get_db] = _no_database
    app.dependency_overrides[get_settings] = lambda: AppSettings(
        _env_file=None, nearby_default_radius_km=50
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health_endpoint(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_search_with_location_is_ranked(
    client: AsyncClient, catalog_events: list[Event], gyms: dict[str, GymSummary]
) -> None:
    app.dependency_overrides[get_discovery_service] = _discovery_factory(catalog_events, gyms)

    response = await client.get(
        "/events/search", params={**LOCATION_PARAMS, "searcher_id": "fighter-1"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert [event["event_id"] for event in payload["events"]] == ["evt-near", "evt-heavy", "evt-far"]
    assert payload["ranked"] is True
    assert payload["location_available"] is True
    assert payload["total"] == 3
    assert payload["source"] == "live"
    assert payload["events"][0]["request_status"] == "pending"
    assert payload["events"][0]["distance"] == pytest.approx(5.0, abs=0.1)


@pytest.mark.asyncio
async def test_search_accepts_repeated_list_filters(
    client: AsyncClient, catalog_events: list[Event], gyms: dict[str, GymSummary]
) -> None:
    app.dependency_overrides[get_discovery_service] = _discovery_factory(catalog_events, gyms)

    response = await client.get(
        "/events/search",
        params=[("weight_class", "heavyweight"), ("weight_class", "flyweight")],
    )

    assert response.status_code == 200
    payload = response.json()
    assert [event["event_id"] for event in payload["events"]] == ["evt-heavy"]
    assert payload["ranked"] is False


@pytest.mark.asyncio
async def test_search_rejects_out_of_range_latitude(client: AsyncClient) -> None:
    response = await client.get("/events/search", params={"lat": 91, "lng": 0})

    assert response.status_code == 422
    payload = response.json()
    assert payload["error_type"] == "validation_error"
    assert any(error["field"].endswith("lat") for error in payload["errors"])


@pytest.mark.asyncio
async def test_search_rejects_unknown_weight_class(client: AsyncClient) -> None:
    response = await client.get("/events/search", params={"weight_class": "cruiserweight"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_catalog_outage_without_fallback_returns_503(
    client: AsyncClient, gyms: dict[str, GymSummary]
) -> None:
    app.dependency_overrides[get_discovery_service] = _discovery_factory(
        [], gyms, fallback=False, event_error=OSError("connection refused")
    )

    response = await client.get("/events/search")

    assert response.status_code == 503
    payload = response.json()
    assert payload["error_type"] == "catalog_unavailable"
    assert payload["retry_after"] == 5
    assert payload["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_unconfigured_database_serves_sample_catalog(client: AsyncClient) -> None:
    response = await client.get("/events/search", params=LOCATION_PARAMS)

    assert response.status_code == 200
    payload = response.json()
    assert payload["source"] == "sample"
    assert payload["ranked"] is False
    assert [event["event_id"] for event in payload["events"]] == ["sample-1", "sample-2", "sample-3"]


@pytest.mark.asyncio
async def test_unconfigured_database_without_fallback_returns_503(client: AsyncClient) -> None:
    app.dependency_overrides[get_settings] = lambda: AppSettings(
        _env_file=None, discovery_sample_fallback=False
    )

    response = await client.get("/events/search")

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_nearby_uses_default_radius(
    client: AsyncClient, catalog_events: list[Event], gyms: dict[str, GymSummary]
) -> None:
    app.dependency_overrides[get_discovery_service] = _discovery_factory(catalog_events, gyms)

    response = await client.get("/events/nearby", params=LOCATION_PARAMS)

    assert response.status_code == 200
    assert [event["event_id"] for event in response.json()["events"]] == ["evt-near", "evt-heavy"]


@pytest.mark.asyncio
async def test_nearby_without_location_returns_catalog(
    client: AsyncClient, catalog_events: list[Event], gyms: dict[str, GymSummary]
) -> None:
    app.dependency_overrides[get_discovery_service] = _discovery_factory(catalog_events, gyms)

    response = await client.get("/events/nearby", params={"max_distance": 1, "lat": 54.0})

    assert response.status_code == 200
    payload = response.json()
    assert [event["event_id"] for event in payload["events"]] == ["evt-far", "evt-near", "evt-heavy"]
    assert payload["location_available"] is False


@pytest.mark.asyncio
async def test_recommended_events_for_known_fighter(
    client: AsyncClient, catalog_events: list[Event], gyms: dict[str, GymSummary]
) -> None:
    profile = FighterQueryProfile(
        fighter_id="fighter-1",
        weight_class=WeightClass.WELTERWEIGHT,
        experience_level=ExperienceLevel.ADVANCED,
    )
    app.dependency_overrides[get_discovery_service] = _discovery_factory(catalog_events, gyms)
    app.dependency_overrides[get_fighter_profile_store] = lambda: InMemoryProfileStore([profile])

    response = await client.get("/events/recommended/fighter-1", params=LOCATION_PARAMS)

    assert response.status_code == 200
    events = response.json()["events"]
    assert [event["event_id"] for event in events] == ["evt-near"]
    assert events[0]["request_status"] == "pending"


@pytest.mark.asyncio
async def test_recommended_events_for_unknown_fighter_is_404(
    client: AsyncClient, gyms: dict[str, GymSummary]
) -> None:
    app.dependency_overrides[get_discovery_service] = _discovery_factory([], gyms)
    app.dependency_overrides[get_fighter_profile_store] = lambda: InMemoryProfileStore([])

    response = await client.get("/events/recommended/ghost")

    assert response.status_code == 404
    payload = response.json()
    assert payload["error_type"] == "not_found"
    assert "ghost" in payload["detail"]


@pytest.mark.asyncio
async def test_recommended_events_without_database_serve_sample_catalog(
    client: AsyncClient,
) -> None:
    response = await client.get(
        "/events/recommended/fighter-1",
        params={"weight_class": "welterweight", **LOCATION_PARAMS},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["source"] == "sample"
    assert payload["ranked"] is False
    assert [event["event_id"] for event in payload["events"]] == ["sample-1", "sample-2", "sample-3"]


@pytest.mark.asyncio
async def test_recommended_events_without_database_or_fallback_returns_503(
    client: AsyncClient,
) -> None:
    app.dependency_overrides[get_settings] = lambda: AppSettings(
        _env_file=None, discovery_sample_fallback=False
    )

    response = await client.get("/events/recommended/fighter-1")

    assert response.status_code == 503
    assert response.json()["error_type"] == "catalog_unavailable"


@pytest.mark.asyncio
async def test_gym_events_route(
    client: AsyncClient, catalog_events: list[Event], gyms: dict[str, GymSummary]
) -> None:
    app.dependency_overrides[get_discovery_service] = _discovery_factory(catalog_events, gyms)

    response = await client.get("/events/gym/gym-mid")

    assert response.status_code == 200
    assert [event["event_id"] for event in response.json()["events"]] == ["evt-heavy"]


@pytest.mark.asyncio
async def test_gym_search_route(client: AsyncClient) -> None:
    store = InMemoryGymDirectoryStore(
        [
            make_directory_gym("gym-a", name="Alpha Boxing", latitude=54.8985, longitude=23.9036),
            make_directory_gym("gym-b", name="Bravo Boxing"),
        ]
    )
    app.dependency_overrides[get_gym_directory_service] = lambda: GymDirectoryService(store)

    response = await client.get(
        "/gyms/search", params={**LOCATION_PARAMS, "q": "boxing", "country_code": "lt"}
    )

    assert response.status_code == 200
    payload = response.json()
    assert [gym["gym_id"] for gym in payload["gyms"]] == ["gym-b", "gym-a"]
    assert payload["ranked"] is True
    assert payload["has_more"] is False
