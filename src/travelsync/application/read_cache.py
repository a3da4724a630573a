"""
In-memory mirror of the store for repeated reads.

Invalidation is coarse on purpose: every reload replaces all four
collections. Readers always receive copies.
"""

from __future__ import annotations

import copy
import logging
import threading

from travelsync.domain.models import Entity, EntityKind
from travelsync.infrastructure.sqlite.store import TravelStore

logger = logging.getLogger(__name__)


class ReadCache:
    """Snapshot of every entity collection, refreshed by `reload()`."""

    def __init__(self, store: TravelStore):
        self.store = store
        self._lock = threading.RLock()
        self._collections: dict[EntityKind, list[Entity]] = {kind: [] for kind in EntityKind}
        self.loaded = False

    def reload(self) -> None:
        """Replace every collection with the store's current rows."""
        # Held across read and swap so an older snapshot never replaces a newer one
        with self._lock:
            self._collections = {kind: self.store.get_all(kind) for kind in EntityKind}
            self.loaded = True
        logger.debug(
            "Cache reloaded: %s",
            ", ".join(f"{len(rows)} {kind.table}" for kind, rows in self._collections.items()),
        )

    def get_all(self, kind: EntityKind) -> list[Entity]:
        with self._lock:
            return [copy.copy(entity) for entity in self._collections[kind]]

    def get_by_id(self, kind: EntityKind, entity_id: int) -> Entity | None:
        with self._lock:
            for entity in self._collections[kind]:
                if entity.id == entity_id:
                    return copy.copy(entity)
        return None

    def list_by_owner(self, kind: EntityKind, owner_id: int) -> list[Entity]:
        """Entities of `kind` whose owner column equals `owner_id`."""
        if kind.owner_column is None:
            raise ValueError(f"{kind.label} has no owner")
        with self._lock:
            return [
                copy.copy(entity)
                for entity in self._collections[kind]
                if getattr(entity, kind.owner_column) == owner_id
            ]

    def count(self, kind: EntityKind) -> int:
        with self._lock:
            return len(self._collections[kind])
