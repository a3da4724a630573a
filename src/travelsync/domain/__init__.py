"""
Domain layer for TravelSync.

Pure entities, error types and business rules with no I/O.
"""

from travelsync.domain.models import (
    Activity,
    Destination,
    Entity,
    EntityKind,
    Expense,
    MAX_ID,
    Trip,
    UNSAVED_ID,
)

__all__ = [
    "Activity",
    "Destination",
    "Entity",
    "EntityKind",
    "Expense",
    "MAX_ID",
    "Trip",
    "UNSAVED_ID",
]
