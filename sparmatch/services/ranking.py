"""Ordering of filtered discovery results."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

from sparmatch.schemas.event import Coordinate


class HasDistance(Protocol):
    distance: float | None


RankedT = TypeVar("RankedT", bound=HasDistance)


def _distance_key(item: HasDistance) -> tuple[bool, float]:
    # Unknown distances sort after every known one.
    if item.distance is None:
        return (True, 0.0)
    return (False, item.distance)


def rank_by_distance(
    items: Sequence[RankedT], searcher_location: Coordinate | None
) -> list[RankedT]:
    """Nearest-first stable ordering when the searcher location is known.

    Without a location the input order (date ascending from the catalog) is
    returned unchanged; no other comparator is substituted.
    """

    if searcher_location is None:
        return list(items)
    # ``sorted`` is stable, so ties and unknown distances keep catalog order.
    return sorted(items, key=_distance_key)


rank_events = rank_by_distance

__all__ = ["rank_by_distance", "rank_events"]
