"""Attach searcher-specific fields to catalog entries."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError

from sparmatch.schemas.event import (
    CatalogEntry,
    Coordinate,
    EnrichedEvent,
    JoinRequestRecord,
    RequestStatus,
)
from sparmatch.services.errors import EnrichmentUnavailable
from sparmatch.utils.geo import optional_distance_km

logger = logging.getLogger(__name__)


@runtime_checkable
class RequestStatusStore(Protocol):
    """Read surface of the join-request store."""

    async def list_requests_for_fighter(self, fighter_id: str) -> Sequence[JoinRequestRecord]:
        """Return every join request filed by ``fighter_id``."""


def to_enriched_event(
    entry: CatalogEntry,
    *,
    searcher_location: Coordinate | None = None,
    request_status: RequestStatus | None = None,
) -> EnrichedEvent:
    """Flatten ``entry`` into an :class:`EnrichedEvent`."""

    gym = entry.gym
    return EnrichedEvent(
        **entry.event.model_dump(),
        gym_name=gym.name if gym else None,
        gym_city=gym.city if gym else None,
        gym_country=gym.country if gym else None,
        gym_latitude=gym.latitude if gym else None,
        gym_longitude=gym.longitude if gym else None,
        distance=(
            optional_distance_km(searcher_location, gym.latitude, gym.longitude)
            if gym
            else None
        ),
        request_status=request_status,
    )


def latest_status_by_event(
    requests: Sequence[JoinRequestRecord],
) -> dict[str, RequestStatus]:
    """Map each event id to the status of its most recent request.

    Requests without ``updated_at`` rank oldest; among equal timestamps the
    later record in ``requests`` wins.
    """

    latest: dict[str, tuple[datetime | None, RequestStatus]] = {}
    for record in requests:
        current = latest.get(record.event_id)
        if current is None or _is_newer_or_equal(record.updated_at, current[0]):
            latest[record.event_id] = (record.updated_at, record.status)
    return {event_id: status for event_id, (_, status) in latest.items()}


def _is_newer_or_equal(candidate: datetime | None, current: datetime | None) -> bool:
    if candidate is None:
        return current is None
    if current is None:
        return True
    return candidate >= current


class RequestStateEnricher:
    """Join a searcher's request state and distance onto catalog entries.

    Request status is a convenience for the searcher, not part of discovery
    correctness: a failing lookup leaves every status empty instead of
    failing the search.
    """

    def __init__(self, request_store: RequestStatusStore | None) -> None:
        self._request_store = request_store

    async def enrich(
        self,
        entries: Sequence[CatalogEntry],
        searcher_id: str | None = None,
        searcher_location: Coordinate | None = None,
    ) -> list[EnrichedEvent]:
        statuses: dict[str, RequestStatus] = {}
        if searcher_id:
            statuses = await self._load_statuses(searcher_id)

        return [
            to_enriched_event(
                entry,
                searcher_location=searcher_location,
                request_status=statuses.get(entry.event.event_id),
            )
            for entry in entries
        ]

    async def _load_statuses(self, searcher_id: str) -> dict[str, RequestStatus]:
        if self._request_store is None:
            return {}
        try:
            requests = await self._request_store.list_requests_for_fighter(searcher_id)
        except (EnrichmentUnavailable, SQLAlchemyError, OSError) as exc:
            logger.warning(
                "Request status lookup failed for searcher %s; continuing without it: %s",
                searcher_id,
                exc,
            )
            return {}
        return latest_status_by_event(requests)


__all__ = [
    "RequestStateEnricher",
    "RequestStatusStore",
    "latest_status_by_event",
    "to_enriched_event",
]
