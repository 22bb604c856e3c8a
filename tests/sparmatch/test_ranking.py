"""Tests for nearest-first ranking."""

from __future__ import annotations

from sparmatch.schemas.event import Coordinate, EnrichedEvent
from sparmatch.services.ranking import rank_by_distance, rank_events
from tests.support.in_memory_stores import make_event


def _enriched(event_id: str, distance: float | None) -> EnrichedEvent:
    return EnrichedEvent(**make_event(event_id).model_dump(), distance=distance)


def test_ranks_nearest_first_with_unknown_last(searcher: Coordinate) -> None:
    events = [
        _enriched("unknown-1", None),
        _enriched("far", 80.0),
        _enriched("near", 2.5),
        _enriched("unknown-2", None),
        _enriched("mid", 20.0),
    ]

    ranked = rank_events(events, searcher)

    assert [event.event_id for event in ranked] == ["near", "mid", "far", "unknown-1", "unknown-2"]


def test_equal_distances_keep_input_order(searcher: Coordinate) -> None:
    events = [_enriched("first", 5.0), _enriched("second", 5.0), _enriched("third", 5.0)]

    ranked = rank_by_distance(events, searcher)

    assert [event.event_id for event in ranked] == ["first", "second", "third"]


def test_without_location_input_order_is_kept() -> None:
    events = [_enriched("b", 9.0), _enriched("a", 1.0)]

    ranked = rank_by_distance(events, None)

    assert [event.event_id for event in ranked] == ["b", "a"]
    assert ranked is not events


def test_ranking_is_a_permutation(searcher: Coordinate) -> None:
    events = [_enriched(str(index), float(10 - index)) for index in range(10)]

    ranked = rank_by_distance(events, searcher)

    assert sorted(event.event_id for event in ranked) == sorted(event.event_id for event in events)
    assert [event.distance for event in ranked] == sorted(event.distance for event in events)


def test_zero_coordinate_searcher_still_ranks() -> None:
    origin = Coordinate(latitude=0.0, longitude=0.0)
    events = [_enriched("far", 10.0), _enriched("here", 0.0)]

    assert [event.event_id for event in rank_by_distance(events, origin)] == ["here", "far"]
