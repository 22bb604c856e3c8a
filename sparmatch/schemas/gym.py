from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class CombatSport(str, Enum):
    BOXING = "boxing"
    MMA = "mma"
    MUAY_THAI = "muay_thai"
    KICKBOXING = "kickboxing"


class DirectoryGym(BaseModel):
    """Gym directory listing"""

    gym_id: str
    name: str
    slug: str
    country_code: str
    country_name: str
    city: str
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    sports: list[CombatSport] = Field(default_factory=list)
    is_claimed: bool = False
    verified: bool = False


class GymWithDistance(DirectoryGym):
    """Directory listing annotated with the searcher distance in km"""

    distance: float | None = None


class GymSearchParams(BaseModel):
    """Directory search parameters. Every field is optional."""

    country_code: str | None = None
    city: str | None = None
    sport: CombatSport | None = None
    search_term: str | None = None
    claimed_only: bool | None = None
    max_distance: float | None = Field(None, ge=0)
    limit: int = Field(50, ge=1, le=200)
    offset: int = Field(0, ge=0)


class GymSearchResponse(BaseModel):
    """Paginated list of gyms"""

    gyms: list[GymWithDistance]
    total: int
    limit: int
    offset: int
    has_more: bool
    ranked: bool
    source: Literal["live", "sample"] = "live"
