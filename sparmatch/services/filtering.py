"""Fine-grained event predicates applied after enrichment.

Predicates run in a fixed order (weight class, experience level, distance
ceiling). Order does not change the result set; it is fixed so runs are
reproducible. Every predicate is skipped when its filter is absent, and an
empty list counts as absent.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from sparmatch.schemas.event import Coordinate, EnrichedEvent, SearchFilters

EventPredicate = Callable[[EnrichedEvent], bool]


def _intersects(event_values: Iterable[object], wanted: Iterable[object]) -> bool:
    """ANY-match: at least one wanted value appears on the event."""

    return not set(event_values).isdisjoint(wanted)


def weight_class_predicate(filters: SearchFilters) -> EventPredicate | None:
    if not filters.weight_classes:
        return None
    wanted = set(filters.weight_classes)
    return lambda event: _intersects(event.weight_classes, wanted)


def experience_level_predicate(filters: SearchFilters) -> EventPredicate | None:
    if not filters.experience_levels:
        return None
    wanted = set(filters.experience_levels)
    return lambda event: _intersects(event.experience_levels, wanted)


def distance_predicate(
    filters: SearchFilters, searcher_location: Coordinate | None
) -> EventPredicate | None:
    """Inclusive distance ceiling.

    Without a searcher location the ceiling is not enforced at all. With one,
    events whose distance is unknown are excluded.
    """

    ceiling = filters.max_distance
    if ceiling is None or searcher_location is None:
        return None
    return lambda event: event.distance is not None and event.distance <= ceiling


def build_predicates(
    filters: SearchFilters, searcher_location: Coordinate | None
) -> list[EventPredicate]:
    """Return the active predicates in evaluation order."""

    candidates = (
        weight_class_predicate(filters),
        experience_level_predicate(filters),
        distance_predicate(filters, searcher_location),
    )
    return [predicate for predicate in candidates if predicate is not None]


def filter_events(
    events: Sequence[EnrichedEvent],
    filters: SearchFilters,
    searcher_location: Coordinate | None = None,
) -> list[EnrichedEvent]:
    """Return a new list holding the events that satisfy every active predicate."""

    predicates = build_predicates(filters, searcher_location)
    return [event for event in events if all(predicate(event) for predicate in predicates)]


__all__ = [
    "EventPredicate",
    "build_predicates",
    "distance_predicate",
    "experience_level_predicate",
    "filter_events",
    "weight_class_predicate",
]
