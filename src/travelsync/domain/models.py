"""
Domain models for TravelSync.

This module contains the core business entities of the travel planner:
- Destinations (city/country with optional image and description)
- Trips to a destination
- Activities and expenses recorded against a trip

These models are pure data structures with no I/O dependencies.
They are serialized to/from SQLite via the infrastructure layer.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Union

# Identity 0 means "not yet persisted"
UNSAVED_ID = 0

# Largest id SQLite can store (signed 64-bit INTEGER)
MAX_ID = 2**63 - 1


# ============================================================================
# Entity Models
# ============================================================================

@dataclass
class Destination:
    """
    A place the user travels to.

    Attributes:
        id: Store-assigned identity (0 until first persisted)
        city: City name (search field)
        country: Country name (immutable after creation)
        image_data: Opaque image bytes, if any
        description: Free-form description
    """
    id: int = UNSAVED_ID
    city: str = ""
    country: str = ""
    image_data: bytes | None = None
    description: str | None = None


@dataclass
class Trip:
    """
    A dated trip to a destination.

    Attributes:
        id: Store-assigned identity
        destination_id: Owning destination (immutable after creation)
        title: Trip title (search field)
        start_date: ISO date string (YYYY-MM-DD)
        end_date: ISO date string, not before start_date
    """
    id: int = UNSAVED_ID
    destination_id: int = 0
    title: str = ""
    start_date: str = ""
    end_date: str = ""


@dataclass
class Activity:
    """
    A scheduled activity during a trip.

    Attributes:
        id: Store-assigned identity
        trip_id: Owning trip (immutable after creation)
        name: Activity name (search field)
        date: ISO date string (YYYY-MM-DD)
        time: Time of day (HH:MM)
        location: Where it happens
    """
    id: int = UNSAVED_ID
    trip_id: int = 0
    name: str = ""
    date: str = ""
    time: str = ""
    location: str = ""


@dataclass
class Expense:
    """
    Money spent during a trip.

    Attributes:
        id: Store-assigned identity
        trip_id: Owning trip (immutable after creation)
        title: Expense title (search field)
        amount: Positive amount
        date: ISO date string (YYYY-MM-DD)
    """
    id: int = UNSAVED_ID
    trip_id: int = 0
    title: str = ""
    amount: float = 0.0
    date: str = ""


Entity = Union[Destination, Trip, Activity, Expense]


# ============================================================================
# Entity Kinds
# ============================================================================

class EntityKind(Enum):
    """
    The four entity kinds and their table metadata.

    Each value is (table, model class, owner column, search column,
    columns frozen after creation).
    """
    DESTINATION = ("destinations", Destination, None, "city", ("country",))
    TRIP = ("trips", Trip, "destination_id", "title", ("destination_id",))
    ACTIVITY = ("activities", Activity, "trip_id", "name", ("trip_id",))
    EXPENSE = ("expenses", Expense, "trip_id", "title", ("trip_id",))

    def __init__(self, table, model, owner_column, search_column, immutable_columns):
        self.table = table
        self.model = model
        self.owner_column = owner_column
        self.search_column = search_column
        self.immutable_columns = immutable_columns

    @property
    def label(self) -> str:
        """Lower-case singular name for log and error messages."""
        return self.name.lower()

    @property
    def owner_kind(self) -> "EntityKind | None":
        """Kind referenced by the owner column, if any."""
        return _OWNER_KINDS.get(self)

    @property
    def columns(self) -> tuple[str, ...]:
        """All column names, id first."""
        return tuple(f.name for f in fields(self.model))

    @property
    def data_columns(self) -> tuple[str, ...]:
        """Columns other than id."""
        return self.columns[1:]

    @property
    def mutable_columns(self) -> tuple[str, ...]:
        """Columns an update may overwrite."""
        return tuple(c for c in self.data_columns if c not in self.immutable_columns)

    @classmethod
    def of(cls, entity: Entity) -> "EntityKind":
        """Resolve the kind of an entity instance."""
        for kind in cls:
            if isinstance(entity, kind.model):
                return kind
        raise TypeError(f"Not a travel entity: {type(entity).__name__}")


_OWNER_KINDS = {
    EntityKind.TRIP: EntityKind.DESTINATION,
    EntityKind.ACTIVITY: EntityKind.TRIP,
    EntityKind.EXPENSE: EntityKind.TRIP,
}


def entity_to_row(entity: Entity) -> dict[str, Any]:
    """Flatten an entity to a column -> value mapping."""
    return {f.name: getattr(entity, f.name) for f in fields(entity)}
