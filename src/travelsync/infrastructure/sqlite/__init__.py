"""
SQLite infrastructure package.

Provides durable storage for destinations, trips, activities and expenses.
"""

from travelsync.infrastructure.sqlite.store import TravelStore
from travelsync.infrastructure.sqlite.schema import (
    SCHEMA_TABLES,
    initialize_schema,
)

__all__ = [
    "TravelStore",
    "SCHEMA_TABLES",
    "initialize_schema",
]
