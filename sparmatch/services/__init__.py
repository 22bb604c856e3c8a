"""Discovery engine services.

Each module owns one step of the discovery pipeline and can be exercised on
its own with in-memory stores.
"""

from sparmatch.services.discovery_service import DiscoveryResult, DiscoveryService
from sparmatch.services.gym_directory_service import GymDirectoryService

__all__ = ["DiscoveryResult", "DiscoveryService", "GymDirectoryService"]
