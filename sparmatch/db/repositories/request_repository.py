"""Join request repository backed by the ``event_requests`` table."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sparmatch.db.models import EventRequest
from sparmatch.db.repositories.base import coerce_enum
from sparmatch.schemas.event import JoinRequestRecord, RequestStatus


class SQLRequestRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_requests_for_fighter(self, fighter_id: str) -> list[JoinRequestRecord]:
        query = (
            select(EventRequest)
            .where(EventRequest.fighter_id == fighter_id)
            .order_by(EventRequest.created_at, EventRequest.id)
        )
        result = await self._session.execute(query)

        records: list[JoinRequestRecord] = []
        for row in result.scalars().all():
            status = coerce_enum(RequestStatus, row.status)
            if status is None:
                continue
            records.append(
                JoinRequestRecord(
                    event_id=row.event_id,
                    status=status,
                    updated_at=row.updated_at or row.created_at,
                )
            )
        return records
