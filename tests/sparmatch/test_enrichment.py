"""Tests for request-state and distance enrichment."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import OperationalError

from sparmatch.schemas.event import CatalogEntry, Coordinate, GymSummary, RequestStatus
from sparmatch.services.enrichment import (
    RequestStateEnricher,
    latest_status_by_event,
    to_enriched_event,
)
from sparmatch.services.errors import EnrichmentUnavailable
from tests.support.in_memory_stores import InMemoryRequestStore, make_event, request


def _entries(gyms: dict[str, GymSummary]) -> list[CatalogEntry]:
    return [
        CatalogEntry(event=make_event("evt-near", gym_id="gym-near"), gym=gyms["near"]),
        CatalogEntry(event=make_event("evt-unknown", gym_id="gym-unknown"), gym=gyms["unknown"]),
        CatalogEntry(event=make_event("evt-orphan", gym_id="gym-gone"), gym=None),
    ]


def test_to_enriched_event_flattens_gym_fields(gyms: dict[str, GymSummary]) -> None:
    entry = CatalogEntry(event=make_event("evt-1"), gym=gyms["near"])

    enriched = to_enriched_event(entry)

    assert enriched.event_id == "evt-1"
    assert enriched.gym_name == gyms["near"].name
    assert enriched.gym_latitude == gyms["near"].latitude
    assert enriched.distance is None
    assert enriched.request_status is None


def test_latest_status_prefers_most_recent_update() -> None:
    records = [
        request("evt-1", RequestStatus.PENDING, datetime(2030, 1, 1, tzinfo=UTC)),
        request("evt-1", RequestStatus.APPROVED, datetime(2030, 1, 3, tzinfo=UTC)),
        request("evt-1", RequestStatus.CANCELLED, datetime(2030, 1, 2, tzinfo=UTC)),
        request("evt-2", RequestStatus.REJECTED),
    ]

    assert latest_status_by_event(records) == {
        "evt-1": RequestStatus.APPROVED,
        "evt-2": RequestStatus.REJECTED,
    }


def test_latest_status_ties_go_to_the_later_record() -> None:
    stamp = datetime(2030, 1, 1, tzinfo=UTC)
    records = [
        request("evt-1", RequestStatus.PENDING, stamp),
        request("evt-1", RequestStatus.CANCELLED, stamp),
    ]

    assert latest_status_by_event(records) == {"evt-1": RequestStatus.CANCELLED}


def test_timestamped_request_beats_undated_one() -> None:
    records = [
        request("evt-1", RequestStatus.APPROVED, datetime(2030, 1, 1, tzinfo=UTC)),
        request("evt-1", RequestStatus.PENDING),
    ]

    assert latest_status_by_event(records) == {"evt-1": RequestStatus.APPROVED}


@pytest.mark.asyncio
async def test_enrich_attaches_distance_and_status(
    gyms: dict[str, GymSummary], searcher: Coordinate
) -> None:
    store = InMemoryRequestStore({"fighter-1": [request("evt-near", RequestStatus.PENDING)]})
    enricher = RequestStateEnricher(store)

    enriched = await enricher.enrich(_entries(gyms), "fighter-1", searcher)

    by_id = {event.event_id: event for event in enriched}
    assert by_id["evt-near"].distance == pytest.approx(5.0, abs=0.1)
    assert by_id["evt-near"].request_status == RequestStatus.PENDING
    assert by_id["evt-unknown"].distance is None
    assert by_id["evt-orphan"].distance is None
    assert by_id["evt-orphan"].gym_name is None
    assert by_id["evt-orphan"].request_status is None


@pytest.mark.asyncio
async def test_enrich_without_searcher_leaves_status_empty(gyms: dict[str, GymSummary]) -> None:
    store = InMemoryRequestStore({"fighter-1": [request("evt-near", RequestStatus.PENDING)]})

    enriched = await RequestStateEnricher(store).enrich(_entries(gyms))

    assert all(event.request_status is None for event in enriched)
    assert all(event.distance is None for event in enriched)


@pytest.mark.asyncio
async def test_enrich_is_idempotent(gyms: dict[str, GymSummary], searcher: Coordinate) -> None:
    store = InMemoryRequestStore({"fighter-1": [request("evt-near", RequestStatus.APPROVED)]})
    enricher = RequestStateEnricher(store)

    first = await enricher.enrich(_entries(gyms), "fighter-1", searcher)
    second = await enricher.enrich(_entries(gyms), "fighter-1", searcher)

    assert first == second


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        EnrichmentUnavailable("request store offline"),
        OperationalError("SELECT 1", {}, Exception("connection reset")),
        TimeoutError("read timed out"),
    ],
)
async def test_request_store_failure_degrades_to_no_status(
    gyms: dict[str, GymSummary], searcher: Coordinate, error: Exception
) -> None:
    """A failing request lookup never fails the search; distances still appear."""

    enricher = RequestStateEnricher(InMemoryRequestStore(error=error))

    enriched = await enricher.enrich(_entries(gyms), "fighter-1", searcher)

    assert len(enriched) == 3
    assert all(event.request_status is None for event in enriched)
    assert enriched[0].distance is not None


@pytest.mark.asyncio
async def test_missing_request_store_is_not_an_error(gyms: dict[str, GymSummary]) -> None:
    enriched = await RequestStateEnricher(None).enrich(_entries(gyms), "fighter-1")

    assert all(event.request_status is None for event in enriched)
