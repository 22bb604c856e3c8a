"""Event repository backed by the ``sparring_events`` table."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sparmatch.db.models import SparringEvent
from sparmatch.db.repositories.base import coerce_enum, coerce_enum_list
from sparmatch.schemas.event import (
    Event,
    EventIntensity,
    EventStatus,
    EventType,
    ExperienceLevel,
    WeightClass,
)


def _to_event(row: SparringEvent) -> Event:
    return Event(
        event_id=row.id,
        gym_id=row.gym_id,
        event_type=coerce_enum(EventType, row.event_type),
        intensity=coerce_enum(EventIntensity, row.intensity),
        title=row.title,
        description=row.description,
        event_date=row.event_date,
        start_time=row.start_time,
        end_time=row.end_time,
        weight_classes=coerce_enum_list(WeightClass, row.weight_classes),
        experience_levels=coerce_enum_list(ExperienceLevel, row.experience_levels),
        max_participants=row.max_participants,
        current_participants=row.current_participants,
        status=EventStatus(row.status),
    )


class SQLEventRepository:
    """Read access to sparring events using an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_events(
        self,
        *,
        status: EventStatus,
        date_from: date,
        date_to: date | None = None,
        gym_id: str | None = None,
        event_types: Sequence[EventType] | None = None,
        intensities: Sequence[EventIntensity] | None = None,
    ) -> list[Event]:
        """List events matching the coarse catalog predicates, soonest first."""
        query = (
            select(SparringEvent)
            .where(SparringEvent.status == status.value)
            .where(SparringEvent.event_date >= date_from)
            .order_by(SparringEvent.event_date, SparringEvent.id)
        )

        if date_to is not None:
            query = query.where(SparringEvent.event_date <= date_to)
        if gym_id:
            query = query.where(SparringEvent.gym_id == gym_id)
        if event_types:
            query = query.where(
                SparringEvent.event_type.in_([value.value for value in event_types])
            )
        if intensities:
            query = query.where(
                SparringEvent.intensity.in_([value.value for value in intensities])
            )

        result = await self._session.execute(query)
        return [_to_event(row) for row in result.scalars().all()]
