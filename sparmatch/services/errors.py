"""Failure types raised inside the discovery engine.

Most of them never reach an API caller: enrichment and location failures are
absorbed where they happen, and a missing catalog is replaced by the sample
catalog at the facade. ``CatalogUnavailable`` only escapes when no fallback is
configured.
"""

from __future__ import annotations


class DiscoveryError(Exception):
    """Base class for discovery failures."""


class CatalogUnavailable(DiscoveryError):
    """The event store is unreachable, errored, or not configured."""


class EnrichmentUnavailable(DiscoveryError):
    """The searcher's join requests could not be loaded."""


class LocationUnavailable(DiscoveryError):
    """Searcher position is unknown: permission denied, provider error or timeout."""


class InvalidFilterCombination(DiscoveryError):
    """Reserved for required filter fields supplied empty.

    No documented filter is required today; empty lists are read as "no
    constraint" and this is never raised.
    """


class ProfileNotFound(DiscoveryError):
    """No fighter profile exists for the requested identifier."""

    def __init__(self, fighter_id: str) -> None:
        super().__init__(f"Fighter profile not found: {fighter_id}")
        self.fighter_id = fighter_id


__all__ = [
    "CatalogUnavailable",
    "DiscoveryError",
    "EnrichmentUnavailable",
    "InvalidFilterCombination",
    "LocationUnavailable",
    "ProfileNotFound",
]
