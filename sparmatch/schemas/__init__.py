"""Pydantic schemas shared by the API and the discovery services."""

from sparmatch.schemas.event import (
    CatalogEntry,
    Coordinate,
    EnrichedEvent,
    Event,
    EventIntensity,
    EventSearchResponse,
    EventStatus,
    EventType,
    ExperienceLevel,
    FighterQueryProfile,
    GymSummary,
    JoinRequestRecord,
    RequestStatus,
    SearchFilters,
    WeightClass,
)
from sparmatch.schemas.gym import (
    CombatSport,
    DirectoryGym,
    GymSearchParams,
    GymSearchResponse,
    GymWithDistance,
)

__all__ = [
    "CatalogEntry",
    "CombatSport",
    "Coordinate",
    "DirectoryGym",
    "EnrichedEvent",
    "Event",
    "EventIntensity",
    "EventSearchResponse",
    "EventStatus",
    "EventType",
    "ExperienceLevel",
    "FighterQueryProfile",
    "GymSearchParams",
    "GymSearchResponse",
    "GymSummary",
    "GymWithDistance",
    "JoinRequestRecord",
    "RequestStatus",
    "SearchFilters",
    "WeightClass",
]
