"""Searcher location providers and bounded resolution."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, runtime_checkable

from sparmatch.schemas.event import Coordinate
from sparmatch.services.errors import LocationUnavailable

logger = logging.getLogger(__name__)


@runtime_checkable
class LocationProvider(Protocol):
    """Source of the searcher's current position.

    Implementations report "unavailable" by returning ``None`` (or raising
    :class:`LocationUnavailable`); permission denial, provider failure and
    timeouts all look the same to the engine.
    """

    async def current_location(self) -> Coordinate | None:
        ...


class StaticLocationProvider:
    """Provider wrapping a position already known to the caller.

    The HTTP layer builds one from the ``lat``/``lng`` query parameters; a
    request missing either half yields an unknown location.
    """

    def __init__(self, coordinate: Coordinate | None = None) -> None:
        self._coordinate = coordinate

    @classmethod
    def from_parts(
        cls, latitude: float | None, longitude: float | None
    ) -> StaticLocationProvider:
        if latitude is None or longitude is None:
            return cls(None)
        return cls(Coordinate(latitude=latitude, longitude=longitude))

    async def current_location(self) -> Coordinate | None:
        return self._coordinate


class UnavailableLocationProvider:
    """Provider that never knows where the searcher is."""

    async def current_location(self) -> Coordinate | None:
        return None


async def resolve_location(
    provider: LocationProvider | None, *, timeout_seconds: float
) -> Coordinate | None:
    """Resolve ``provider`` within ``timeout_seconds``.

    Returns ``None`` when there is no provider, the provider reports no
    position, raises :class:`LocationUnavailable`, or runs past the timeout.
    """

    if provider is None:
        return None
    try:
        return await asyncio.wait_for(provider.current_location(), timeout=timeout_seconds)
    except TimeoutError:
        logger.info("Location resolution timed out after %.1fs", timeout_seconds)
    except LocationUnavailable as exc:
        logger.info("Location unavailable: %s", exc)
    return None


__all__ = [
    "LocationProvider",
    "StaticLocationProvider",
    "UnavailableLocationProvider",
    "resolve_location",
]
