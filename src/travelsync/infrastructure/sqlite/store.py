"""
SQLite-backed store for travel planner data.

Provides keyed CRUD for the four entity tables:
- Destinations
- Trips
- Activities
- Expenses

Uses stdlib sqlite3 with no ORM. The store is the only owner of durable
state; callers get fresh entity objects, never references into it.
"""

from __future__ import annotations

import logging
import shutil
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from travelsync.domain.errors import StorageError
from travelsync.domain.models import (
    Activity,
    Destination,
    Entity,
    EntityKind,
    Expense,
    Trip,
    UNSAVED_ID,
    entity_to_row,
)
from travelsync.infrastructure.sqlite.schema import initialize_schema
from travelsync.infrastructure.sqlite.seed import (
    SAMPLE_ACTIVITIES,
    SAMPLE_DESTINATIONS,
    SAMPLE_EXPENSES,
    SAMPLE_TRIPS,
)

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


def _casefold(value: str | None) -> str | None:
    """SQL function for Unicode-aware case-insensitive search."""
    return value.casefold() if isinstance(value, str) else value


class TravelStore:
    """
    SQLite-backed storage for destinations, trips, activities and expenses.

    Usage:
        store = TravelStore(Path("data/TravelPlanner.sqlite"))
        store.open()

        paris_id = store.insert_or_update(Destination(city="Paris", country="France"))
        trips = store.get_all(EntityKind.TRIP)
        store.count_referencing(EntityKind.TRIP, "destination_id", paris_id)
        store.close()

    Every write runs in its own transaction under a single re-entrant lock,
    so concurrent callers are serialized at this boundary.
    """

    def __init__(
        self,
        db_path: Path | str,
        template_path: Path | str | None = None,
        seed_sample_data: bool = True,
    ) -> None:
        """
        Initialize the store.

        Args:
            db_path: SQLite database file (created if not exists) or ':memory:'
            template_path: Database copied to db_path on first run, if present
            seed_sample_data: Insert sample rows when every table is empty
        """
        self.db_path = db_path if str(db_path) == MEMORY_PATH else Path(db_path)
        self.template_path = Path(template_path) if template_path else None
        self.seed_sample_data_on_open = seed_sample_data
        self._connection: sqlite3.Connection | None = None
        self._lock = threading.RLock()
        logger.info("TravelStore initialized: %s", self.db_path)

    # ========================================================================
    # Connection Management
    # ========================================================================

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection (tables created on first open)."""
        with self._lock:
            if self._connection is None:
                if isinstance(self.db_path, Path):
                    self.db_path.parent.mkdir(parents=True, exist_ok=True)
                    if not self.db_path.exists():
                        self._copy_template()

                try:
                    connection = sqlite3.connect(
                        str(self.db_path), check_same_thread=False
                    )
                    connection.row_factory = sqlite3.Row
                    connection.create_function(
                        "casefold", 1, _casefold, deterministic=True
                    )
                    initialize_schema(connection)
                except sqlite3.Error as e:
                    raise StorageError(f"Cannot open database {self.db_path}: {e}") from e

                self._connection = connection
                logger.debug("Database connection established")

                if self.seed_sample_data_on_open:
                    self.seed_sample_data()
            return self._connection

    def _copy_template(self) -> None:
        """Copy the bundled template database into place, if there is one."""
        if self.template_path is None or not self.template_path.exists():
            logger.info("No template database, creating new database at %s", self.db_path)
            return
        try:
            shutil.copyfile(self.template_path, self.db_path)
            logger.info("Database copied from template %s", self.template_path)
        except OSError as e:
            logger.error("Error copying template database: %s", e)

    @property
    def lock(self) -> threading.RLock:
        """Store-wide lock; hold it to make a read-then-write sequence atomic."""
        return self._lock

    def open(self) -> "TravelStore":
        """Open the database eagerly and return self."""
        self._get_connection()
        return self

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._connection:
                self._connection.close()
                self._connection = None
                logger.debug("Database connection closed")

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a unit of work under the store lock; commit or roll back."""
        with self._lock:
            conn = self._get_connection()
            try:
                yield conn
                conn.commit()
            except (sqlite3.Error, OverflowError) as e:
                conn.rollback()
                logger.error("Storage failure, transaction rolled back: %s", e)
                raise StorageError(str(e)) from e
            except Exception:
                conn.rollback()
                raise

    def _query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        with self._lock:
            try:
                return self._get_connection().execute(sql, params).fetchall()
            except (sqlite3.Error, OverflowError) as e:
                raise StorageError(str(e)) from e

    # ========================================================================
    # Writes
    # ========================================================================

    def insert_or_update(self, entity: Entity) -> int:
        """
        Persist an entity.

        id 0 inserts a new row and returns the assigned id. A non-zero id
        overwrites the mutable columns of the existing row, or inserts the
        row under that id if it does not exist yet (remote merge).

        Returns:
            The entity's durable id
        """
        kind = EntityKind.of(entity)
        if entity.id < 0:
            raise ValueError(f"Invalid {kind.label} id: {entity.id}")
        row = entity_to_row(entity)

        with self._transaction() as conn:
            if entity.id == UNSAVED_ID:
                entity_id = self._insert(conn, kind, row, with_id=False)
                logger.debug("Inserted %s id=%d", kind.label, entity_id)
                return entity_id

            exists = conn.execute(
                f"SELECT 1 FROM {kind.table} WHERE id = ?", (entity.id,)
            ).fetchone()
            if exists is None:
                self._insert(conn, kind, row, with_id=True)
                logger.debug("Inserted %s under explicit id=%d", kind.label, entity.id)
                return entity.id

            assignments = ", ".join(f"{c} = ?" for c in kind.mutable_columns)
            conn.execute(
                f"UPDATE {kind.table} SET {assignments} WHERE id = ?",
                (*(row[c] for c in kind.mutable_columns), entity.id),
            )
            logger.debug("Updated %s id=%d", kind.label, entity.id)
            return entity.id

    @staticmethod
    def _insert(
        conn: sqlite3.Connection, kind: EntityKind, row: dict, with_id: bool
    ) -> int:
        columns = kind.columns if with_id else kind.data_columns
        placeholders = ", ".join("?" for _ in columns)
        cursor = conn.execute(
            f"INSERT INTO {kind.table} ({', '.join(columns)}) VALUES ({placeholders})",
            tuple(row[c] for c in columns),
        )
        return cursor.lastrowid

    def delete(self, kind: EntityKind, entity_id: int) -> bool:
        """
        Delete a row by id.

        Returns:
            True if a row was removed
        """
        with self._transaction() as conn:
            cursor = conn.execute(f"DELETE FROM {kind.table} WHERE id = ?", (entity_id,))
            deleted = cursor.rowcount > 0
        logger.debug("Delete %s id=%d removed=%s", kind.label, entity_id, deleted)
        return deleted

    # ========================================================================
    # Reads
    # ========================================================================

    def get_all(self, kind: EntityKind) -> list[Entity]:
        """All rows of a kind, ordered by id."""
        rows = self._query(
            f"SELECT {', '.join(kind.columns)} FROM {kind.table} ORDER BY id"
        )
        return [self._to_entity(kind, row) for row in rows]

    def get_by_id(self, kind: EntityKind, entity_id: int) -> Entity | None:
        """A single row by id, or None."""
        rows = self._query(
            f"SELECT {', '.join(kind.columns)} FROM {kind.table} WHERE id = ?",
            (entity_id,),
        )
        return self._to_entity(kind, rows[0]) if rows else None

    def count(self, kind: EntityKind) -> int:
        """Number of rows of a kind."""
        return self._query(f"SELECT COUNT(*) FROM {kind.table}")[0][0]

    def is_empty(self) -> bool:
        """True if every entity table is empty."""
        return all(self.count(kind) == 0 for kind in EntityKind)

    def count_referencing(self, kind: EntityKind, foreign_key: str, value: int) -> int:
        """
        Count rows of `kind` whose `foreign_key` column equals `value`.

        Example:
            store.count_referencing(EntityKind.TRIP, "destination_id", 1)
        """
        self._check_column(kind, foreign_key)
        return self._query(
            f"SELECT COUNT(*) FROM {kind.table} WHERE {foreign_key} = ?", (value,)
        )[0][0]

    def search_by_field(self, kind: EntityKind, field: str, substring: str) -> list[Entity]:
        """Rows whose `field` contains `substring`, ignoring case, ordered by id."""
        self._check_column(kind, field)
        rows = self._query(
            f"SELECT {', '.join(kind.columns)} FROM {kind.table} "
            f"WHERE instr(casefold({field}), ?) > 0 ORDER BY id",
            (substring.casefold(),),
        )
        return [self._to_entity(kind, row) for row in rows]

    @staticmethod
    def _check_column(kind: EntityKind, column: str) -> None:
        # Column names are interpolated into SQL, so only known ones pass
        if column not in kind.columns:
            raise ValueError(f"Unknown {kind.label} column: {column!r}")

    @staticmethod
    def _to_entity(kind: EntityKind, row: sqlite3.Row) -> Entity:
        values = {c: row[c] for c in kind.columns}
        if kind is EntityKind.DESTINATION and values["image_data"] is not None:
            values["image_data"] = bytes(values["image_data"])
        if kind is EntityKind.EXPENSE:
            values["amount"] = float(values["amount"])
        return kind.model(**values)

    # ========================================================================
    # Sample Data
    # ========================================================================

    def seed_sample_data(self) -> bool:
        """
        Insert the sample data set if every table is empty.

        Returns:
            True if sample data was inserted
        """
        with self._transaction() as conn:
            if not self.is_empty():
                logger.debug("Store already has data, skipping sample data")
                return False

            destination_ids = [
                self._insert_new(conn, Destination(city=city, country=country))
                for city, country in SAMPLE_DESTINATIONS
            ]
            trip_ids = [
                self._insert_new(
                    conn,
                    Trip(
                        destination_id=destination_ids[dest],
                        title=title,
                        start_date=start,
                        end_date=end,
                    ),
                )
                for dest, title, start, end in SAMPLE_TRIPS
            ]
            for trip, name, day, time, location in SAMPLE_ACTIVITIES:
                self._insert_new(
                    conn,
                    Activity(
                        trip_id=trip_ids[trip], name=name, date=day, time=time, location=location
                    ),
                )
            for trip, title, amount, day in SAMPLE_EXPENSES:
                self._insert_new(
                    conn, Expense(trip_id=trip_ids[trip], title=title, amount=amount, date=day)
                )

        logger.info(
            "Sample data inserted: %d destinations, %d trips, %d activities, %d expenses",
            len(SAMPLE_DESTINATIONS),
            len(SAMPLE_TRIPS),
            len(SAMPLE_ACTIVITIES),
            len(SAMPLE_EXPENSES),
        )
        return True

    def _insert_new(self, conn: sqlite3.Connection, entity: Entity) -> int:
        return self._insert(conn, EntityKind.of(entity), entity_to_row(entity), with_id=False)
