"""Catalog reading: coarse, store-evaluated event selection.

The reader composes two independent stores: one for events and one for the
gyms that own them. Only predicates the store can evaluate cheaply live here
(status, date window, gym, event type, intensity). The fine-grained filters
run later in :mod:`sparmatch.services.filtering`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Literal, Protocol, runtime_checkable

from sqlalchemy.exc import SQLAlchemyError

from sparmatch.schemas.event import (
    CatalogEntry,
    Event,
    EventIntensity,
    EventStatus,
    EventType,
    GymSummary,
    SearchFilters,
)
from sparmatch.services.errors import CatalogUnavailable

logger = logging.getLogger(__name__)

CatalogSourceName = Literal["live", "sample"]


@runtime_checkable
class EventStore(Protocol):
    """Read surface of the event store used by :class:`CatalogReader`."""

    async def list_events(
        self,
        *,
        status: EventStatus,
        date_from: date,
        date_to: date | None = None,
        gym_id: str | None = None,
        event_types: Sequence[EventType] | None = None,
        intensities: Sequence[EventIntensity] | None = None,
    ) -> Sequence[Event]:
        """Return matching events ordered by date ascending."""


@runtime_checkable
class GymStore(Protocol):
    """Read surface of the gym store used to resolve event owners."""

    async def get_gyms(self, gym_ids: Sequence[str]) -> Mapping[str, GymSummary]:
        """Return summaries keyed by gym id. Unknown ids are simply absent."""


@dataclass(frozen=True)
class CatalogQuery:
    """Coarse predicates pushed down to the event store."""

    status: EventStatus | None = None
    date_from: date | None = None
    date_to: date | None = None
    gym_id: str | None = None
    event_types: tuple[EventType, ...] = ()
    intensities: tuple[EventIntensity, ...] = ()

    @classmethod
    def from_filters(cls, filters: SearchFilters) -> CatalogQuery:
        return cls(
            status=filters.status,
            date_from=filters.date_from,
            date_to=filters.date_to,
            gym_id=filters.gym_id,
            event_types=tuple(filters.event_types or ()),
            intensities=tuple(filters.intensities or ()),
        )


class CatalogReader:
    """Fetch events and join their gym summaries.

    ``today`` is always supplied by the caller; the reader never consults a
    clock. Events strictly before ``date_from`` (default ``today``) are not
    returned.
    """

    def __init__(self, event_store: EventStore, gym_store: GymStore) -> None:
        self._event_store = event_store
        self._gym_store = gym_store

    async def fetch(self, query: CatalogQuery, *, today: date) -> list[CatalogEntry]:
        """Return catalog entries for ``query`` in event date order.

        Raises:
            CatalogUnavailable: when either store errors or is unreachable.
        """

        try:
            events = await self._event_store.list_events(
                status=query.status or EventStatus.PUBLISHED,
                date_from=query.date_from or today,
                date_to=query.date_to,
                gym_id=query.gym_id,
                event_types=list(query.event_types) or None,
                intensities=list(query.intensities) or None,
            )
            gym_ids = list(dict.fromkeys(event.gym_id for event in events))
            gyms = await self._gym_store.get_gyms(gym_ids) if gym_ids else {}
        except (SQLAlchemyError, OSError) as exc:
            raise CatalogUnavailable(f"Event store query failed: {exc}") from exc

        entries = [CatalogEntry(event=event, gym=gyms.get(event.gym_id)) for event in events]
        # Store order is authoritative but not every adapter guarantees it.
        entries.sort(key=lambda entry: (entry.event.event_date, entry.event.event_id))
        logger.debug(
            "Catalog fetch returned %s events across %s gyms", len(entries), len(gyms)
        )
        return entries


class CatalogSource(Protocol):
    """Strategy the discovery facade reads its catalog from."""

    name: CatalogSourceName

    async def load(self, query: CatalogQuery) -> list[CatalogEntry]:
        ...


class LiveCatalogSource:
    """Catalog backed by the configured stores.

    ``reader`` is ``None`` when no database is configured, which is reported
    the same way as an unreachable store.
    """

    name: CatalogSourceName = "live"

    def __init__(
        self,
        reader: CatalogReader | None,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._reader = reader
        self._today = today

    async def load(self, query: CatalogQuery) -> list[CatalogEntry]:
        if self._reader is None:
            raise CatalogUnavailable("Event store is not configured")
        return await self._reader.fetch(query, today=self._today())


class FallbackCatalogSource:
    """Fixed catalog served when the live source is unavailable.

    The query is ignored on purpose: the sample is returned exactly as
    documented in :mod:`sparmatch.services.sample_catalog`.
    """

    name: CatalogSourceName = "sample"

    def __init__(self, entries: Sequence[CatalogEntry]) -> None:
        self._entries = list(entries)

    async def load(self, query: CatalogQuery) -> list[CatalogEntry]:
        return list(self._entries)


__all__ = [
    "CatalogQuery",
    "CatalogReader",
    "CatalogSource",
    "EventStore",
    "FallbackCatalogSource",
    "GymStore",
    "LiveCatalogSource",
]
