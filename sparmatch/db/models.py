from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    pass


class Gym(Base):
    __tablename__ = "gyms"
    __table_args__ = (Index("ix_gyms_country_city", "country_code", "city"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    city: Mapped[str] = mapped_column(String, nullable=False)
    country: Mapped[str] = mapped_column(String, nullable=False)
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)
    address: Mapped[str | None]
    # Coordinates are nullable; a missing value means "unknown", never 0.0.
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    sports: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_claimed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    events: Mapped[list[SparringEvent]] = relationship(
        "SparringEvent", back_populates="gym"
    )


class SparringEvent(Base):
    __tablename__ = "sparring_events"
    __table_args__ = (
        Index("ix_sparring_events_status_date", "status", "event_date"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True)
    gym_id: Mapped[str] = mapped_column(
        String, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    intensity: Mapped[str | None] = mapped_column(String(20), nullable=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    weight_classes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    experience_levels: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    current_participants: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    gym: Mapped[Gym] = relationship("Gym", back_populates="events")


class EventRequest(Base):
    __tablename__ = "event_requests"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("sparring_events.id", ondelete="CASCADE"), nullable=False
    )
    fighter_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class Fighter(Base):
    __tablename__ = "fighters"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    weight_class: Mapped[str | None] = mapped_column(String(30), nullable=True)
    experience_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    city: Mapped[str | None]
    country: Mapped[str | None]

