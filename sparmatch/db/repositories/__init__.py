"""SQLAlchemy-backed implementations of the discovery store protocols."""

from sparmatch.db.repositories.event_repository import SQLEventRepository
from sparmatch.db.repositories.fighter_repository import SQLFighterRepository
from sparmatch.db.repositories.gym_repository import SQLGymRepository
from sparmatch.db.repositories.request_repository import SQLRequestRepository

__all__ = [
    "SQLEventRepository",
    "SQLFighterRepository",
    "SQLGymRepository",
    "SQLRequestRepository",
]
