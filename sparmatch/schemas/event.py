from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    """Kinds of gatherings a gym can publish."""

    SPARRING = "sparring"
    TRYOUT = "tryout"
    FIGHT = "fight"
    TRAINING = "training"


class EventIntensity(str, Enum):
    TECHNICAL = "technical"
    MODERATE = "moderate"
    HARD = "hard"


class WeightClass(str, Enum):
    """Weight divisions ordered from lightest to heaviest."""

    FLYWEIGHT = "flyweight"  # up to 52kg
    BANTAMWEIGHT = "bantamweight"  # up to 54kg
    FEATHERWEIGHT = "featherweight"  # up to 57kg
    LIGHTWEIGHT = "lightweight"  # up to 60kg
    LIGHT_WELTERWEIGHT = "light_welterweight"  # up to 64kg
    WELTERWEIGHT = "welterweight"  # up to 69kg
    LIGHT_MIDDLEWEIGHT = "light_middleweight"  # up to 75kg
    MIDDLEWEIGHT = "middleweight"  # up to 81kg
    LIGHT_HEAVYWEIGHT = "light_heavyweight"  # up to 91kg
    HEAVYWEIGHT = "heavyweight"  # 91kg+
    SUPER_HEAVYWEIGHT = "super_heavyweight"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PRO = "pro"


class EventStatus(str, Enum):
    """Lifecycle states of an event. Discovery only surfaces ``published``."""

    DRAFT = "draft"
    PUBLISHED = "published"
    FULL = "full"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class RequestStatus(str, Enum):
    """State of a fighter's request to join an event."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class Coordinate(BaseModel):
    """A latitude/longitude pair in decimal degrees.

    Unknown positions are modelled as ``None`` at the call site, never as
    ``Coordinate(latitude=0, longitude=0)``.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class GymSummary(BaseModel):
    """Minimal gym fields joined onto an event."""

    gym_id: str
    name: str
    city: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    @property
    def coordinate(self) -> Coordinate | None:
        """Return the gym position only when both parts are recorded."""

        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)


class Event(BaseModel):
    """Snapshot of a published sparring/training event as read from the store."""

    event_id: str
    gym_id: str
    event_type: EventType | None = None
    intensity: EventIntensity | None = None
    title: str
    description: str | None = None
    event_date: date
    start_time: str
    end_time: str | None = None
    weight_classes: list[WeightClass] = Field(default_factory=list)
    experience_levels: list[ExperienceLevel] = Field(default_factory=list)
    max_participants: int = Field(..., ge=0)
    current_participants: int = Field(0, ge=0)
    status: EventStatus = EventStatus.PUBLISHED


class CatalogEntry(BaseModel):
    """An event paired with its owning gym, when that gym resolves."""

    event: Event
    gym: GymSummary | None = None


class EnrichedEvent(Event):
    """Event annotated with searcher-specific and derived fields.

    Built fresh for every search call and discarded afterwards.
    """

    gym_name: str | None = None
    gym_city: str | None = None
    gym_country: str | None = None
    gym_latitude: float | None = None
    gym_longitude: float | None = None
    distance: float | None = Field(
        None, description="Kilometres from the searcher, when both positions are known"
    )
    request_status: RequestStatus | None = None


class SearchFilters(BaseModel):
    """Optional, conjunctive constraints for an event search.

    A missing list and an empty list mean the same thing: no constraint on
    that attribute. There is deliberately no way to ask for "match nothing".
    """

    event_types: list[EventType] | None = None
    intensities: list[EventIntensity] | None = None
    weight_classes: list[WeightClass] | None = None
    experience_levels: list[ExperienceLevel] | None = None
    date_from: date | None = None
    date_to: date | None = None
    max_distance: float | None = Field(None, ge=0, description="Inclusive ceiling in km")
    gym_id: str | None = None
    status: EventStatus | None = None


class FighterQueryProfile(BaseModel):
    """Profile fields the recommendation flow reads for a fighter."""

    fighter_id: str
    weight_class: WeightClass | None = None
    experience_level: ExperienceLevel | None = None


class JoinRequestRecord(BaseModel):
    """A single join request a fighter filed against an event."""

    event_id: str
    status: RequestStatus
    updated_at: datetime | None = None


class EventSearchResponse(BaseModel):
    """Envelope returned by the discovery endpoints."""

    events: list[EnrichedEvent]
    total: int
    ranked: bool = Field(
        ..., description="True when results are ordered nearest-first"
    )
    location_available: bool
    source: Literal["live", "sample"] = "live"
