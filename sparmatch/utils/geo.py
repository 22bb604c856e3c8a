"""Great-circle distance helpers."""

from __future__ import annotations

import math
from typing import Final

from sparmatch.schemas.event import Coordinate

EARTH_RADIUS_KM: Final[float] = 6371.0


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Return the haversine distance between ``a`` and ``b`` in kilometres.

    The function is total for valid coordinates: identical points yield
    ``0.0`` and antipodal points roughly ``20015`` km.
    """

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push ``h`` a hair outside [0, 1] for antipodal inputs.
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def optional_distance_km(
    origin: Coordinate | None,
    latitude: float | None,
    longitude: float | None,
) -> float | None:
    """Distance from ``origin`` to a possibly unknown point, or ``None``."""

    if origin is None or latitude is None or longitude is None:
        return None
    return distance_km(origin, Coordinate(latitude=latitude, longitude=longitude))


__all__ = ["EARTH_RADIUS_KM", "distance_km", "optional_distance_km"]
