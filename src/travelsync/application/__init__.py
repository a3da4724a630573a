"""
Application layer package.

Contains the repository, read cache, sync coordinator and the caller-facing
planner, plus the container that wires them.
"""

from travelsync.application.planner import TravelPlanner
from travelsync.application.repository import TravelRepository
from travelsync.application.sync_coordinator import SyncCoordinator, SyncOutcome

__all__ = [
    "SyncCoordinator",
    "SyncOutcome",
    "TravelPlanner",
    "TravelRepository",
]
