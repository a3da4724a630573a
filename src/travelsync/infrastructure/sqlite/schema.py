"""
SQLite schema for the travel planner.

Four tables with AUTOINCREMENT identities so ids are never reused:
- destinations
- trips        (destination_id -> destinations.id)
- activities   (trip_id -> trips.id)
- expenses     (trip_id -> trips.id)

Foreign keys are declared but not enforced by SQLite: rows merged from the
remote API may reference owners that do not exist locally yet. Locally
created rows are checked by the repository instead.
"""

from __future__ import annotations

import logging
import sqlite3

logger = logging.getLogger(__name__)

# Schema version - increment when making breaking changes
SCHEMA_VERSION = 1

SCHEMA_TABLES = """
CREATE TABLE IF NOT EXISTS destinations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    city TEXT NOT NULL,
    country TEXT NOT NULL,
    image_data BLOB,
    description TEXT
);

CREATE TABLE IF NOT EXISTS trips (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    destination_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    FOREIGN KEY (destination_id) REFERENCES destinations (id)
);

CREATE TABLE IF NOT EXISTS activities (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    trip_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    date TEXT NOT NULL,
    time TEXT NOT NULL,
    location TEXT NOT NULL,
    FOREIGN KEY (trip_id) REFERENCES trips (id)
);

CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    trip_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    amount REAL NOT NULL,
    date TEXT NOT NULL,
    FOREIGN KEY (trip_id) REFERENCES trips (id)
);

CREATE INDEX IF NOT EXISTS idx_trips_destination ON trips(destination_id);
CREATE INDEX IF NOT EXISTS idx_activities_trip ON activities(trip_id);
CREATE INDEX IF NOT EXISTS idx_expenses_trip ON expenses(trip_id);

CREATE TABLE IF NOT EXISTS schema_meta (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


def initialize_schema(connection: sqlite3.Connection) -> None:
    """
    Create tables if they don't exist.

    Safe to call multiple times - uses CREATE TABLE IF NOT EXISTS.
    """
    connection.executescript(SCHEMA_TABLES)
    connection.execute(
        "INSERT OR REPLACE INTO schema_meta (key, value) VALUES ('version', ?)",
        (str(SCHEMA_VERSION),),
    )
    connection.commit()
    logger.info("Database schema initialized (version %d)", SCHEMA_VERSION)
