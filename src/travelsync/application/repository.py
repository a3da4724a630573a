"""
Integrity-aware repository over the travel store.

Each entity kind gets CRUD with its business invariants:
- Destinations cannot be deleted while trips reference them
- Trips cannot be deleted while activities or expenses reference them
- Past activities and expenses older than 30 days cannot be deleted

Refused deletes return False (the reason is kept in `last_violation`); they
never raise. Reads are served from the ReadCache, which is reloaded through
the injected `on_changed` hook after every successful mutation.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import replace
from datetime import date
from typing import Any, Callable, ClassVar

from travelsync.domain.errors import ConstraintViolation, InvalidEntityError
from travelsync.domain.models import (
    Activity,
    Destination,
    Entity,
    EntityKind,
    Expense,
    Trip,
)
from travelsync.domain.rules import (
    EXPENSE_LOCK_DAYS,
    is_activity_in_past,
    is_expense_too_old,
    is_valid_amount,
    is_valid_date_range,
)
from travelsync.application.read_cache import ReadCache
from travelsync.infrastructure.remote.gateway import PushResult, RemoteGateway
from travelsync.infrastructure.sqlite.store import TravelStore

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


class EntityRepository:
    """
    Shared CRUD for one entity kind.

    Subclasses set `kind`, list the text fields that may not be blank,
    and implement `_delete_blocker` and (optionally) `_validate`.
    """

    kind: ClassVar[EntityKind]
    required_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(
        self,
        store: TravelStore,
        cache: ReadCache,
        on_changed: Callable[[], None],
        today: Clock = date.today,
    ):
        self.store = store
        self.cache = cache
        self.on_changed = on_changed
        self.today = today
        self.last_violation: ConstraintViolation | None = None

    # ========================================================================
    # Queries
    # ========================================================================

    def get_all(self) -> list[Entity]:
        return self.cache.get_all(self.kind)

    def get_by_id(self, entity_id: int) -> Entity | None:
        return self.cache.get_by_id(self.kind, entity_id)

    def list_by_owner(self, owner_id: int) -> list[Entity]:
        return self.cache.list_by_owner(self.kind, owner_id)

    def search(self, term: str) -> list[Entity]:
        """
        Case-insensitive substring search on the kind's search field.

        An empty term returns nothing rather than everything.
        """
        if not term:
            return []
        return self.store.search_by_field(self.kind, self.kind.search_column, term)

    # ========================================================================
    # Commands
    # ========================================================================

    def _add(self, entity: Entity) -> int:
        self._validate(entity)
        with self.store.lock:
            self._check_owner(entity)
            entity_id = self.store.insert_or_update(entity)
        entity.id = entity_id
        logger.info("Added %s %d", self.kind.label, entity_id)
        self.on_changed()
        return entity_id

    def update(self, entity_id: int, **fields: Any) -> bool:
        """
        Overwrite mutable fields of an existing entity.

        Returns:
            False if no entity has that id (nothing is written)

        Raises:
            TypeError: For a field the kind does not have
            InvalidEntityError: For immutable fields or invalid values
        """
        unknown = set(fields) - set(self.kind.data_columns)
        if unknown:
            raise TypeError(f"Unknown {self.kind.label} field(s): {', '.join(sorted(unknown))}")
        frozen = set(fields) & set(self.kind.immutable_columns)
        if frozen:
            raise InvalidEntityError(
                f"Cannot change {', '.join(sorted(frozen))} of an existing {self.kind.label}"
            )

        with self.store.lock:
            current = self.store.get_by_id(self.kind, entity_id)
            if current is None:
                logger.debug("Update of unknown %s %d ignored", self.kind.label, entity_id)
                return False
            updated = replace(current, **fields)
            self._validate(updated)
            self.store.insert_or_update(updated)

        logger.info("Updated %s %d", self.kind.label, entity_id)
        self.on_changed()
        self._after_update(updated)
        return True

    def delete(self, entity_id: int) -> bool:
        """
        Delete unless an invariant forbids it.

        Returns:
            False if the delete was refused, True otherwise
        """
        with self.store.lock:
            entity = self.store.get_by_id(self.kind, entity_id)
            if entity is not None:
                reason = self._delete_blocker(entity)
                if reason:
                    self.last_violation = ConstraintViolation(self.kind.label, entity_id, reason)
                    logger.info("%s", self.last_violation)
                    return False
                self.store.delete(self.kind, entity_id)

        self.last_violation = None
        logger.info("Deleted %s %d", self.kind.label, entity_id)
        self.on_changed()
        return True

    # ========================================================================
    # Hooks
    # ========================================================================

    def _delete_blocker(self, entity: Entity) -> str | None:
        """Reason the entity may not be deleted, or None."""
        raise NotImplementedError

    def _validate(self, entity: Entity) -> None:
        for name in self.required_fields:
            value = getattr(entity, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidEntityError(f"{self.kind.label} {name} must not be empty")

    def _after_update(self, entity: Entity) -> None:
        """Called after a successful update."""

    def _check_owner(self, entity: Entity) -> None:
        owner_kind = self.kind.owner_kind
        if owner_kind is None:
            return
        owner_id = getattr(entity, self.kind.owner_column)
        if self.store.get_by_id(owner_kind, owner_id) is None:
            raise InvalidEntityError(
                f"{self.kind.label} refers to unknown {owner_kind.label} {owner_id}"
            )


class DestinationRepository(EntityRepository):
    """Destinations, with opportunistic pushes to the remote API."""

    kind = EntityKind.DESTINATION
    required_fields = ("city", "country")

    def __init__(
        self,
        store: TravelStore,
        cache: ReadCache,
        on_changed: Callable[[], None],
        today: Clock = date.today,
        gateway: RemoteGateway | None = None,
        push_updates: bool = False,
    ):
        super().__init__(store, cache, on_changed, today)
        self.gateway = gateway
        self.push_updates = push_updates

    def add(
        self,
        city: str,
        country: str,
        image_data: bytes | None = None,
        description: str | None = None,
    ) -> int:
        """Save locally, then push to the API in the background."""
        destination = Destination(
            city=city, country=country, image_data=image_data, description=description
        )
        entity_id = self._add(destination)
        self._push(self.gateway.push_new_destination if self.gateway else None, destination)
        return entity_id

    def _after_update(self, entity: Destination) -> None:
        if self.push_updates:
            self._push(self.gateway.push_destination_update if self.gateway else None, entity)

    def _push(
        self, operation: Callable[[Destination], PushResult] | None, destination: Destination
    ) -> Future | None:
        """Fire-and-forget remote write; failures are only logged."""
        if operation is None:
            return None
        future = self.gateway.submit(operation, replace(destination))
        future.add_done_callback(_log_push_outcome)
        return future

    def _delete_blocker(self, entity: Destination) -> str | None:
        trips = self.store.count_referencing(EntityKind.TRIP, "destination_id", entity.id)
        if trips:
            return f"{trips} trip(s) still reference it"
        return None


def _log_push_outcome(future: "Future[PushResult]") -> None:
    error = future.exception()
    if error is not None:
        logger.error("Destination push crashed: %s", error)
    elif not future.result().success:
        logger.warning("Failed to sync destination to API: %s", future.result().error)


class TripRepository(EntityRepository):
    kind = EntityKind.TRIP
    required_fields = ("title",)

    def add(self, destination_id: int, title: str, start_date: str, end_date: str) -> int:
        return self._add(
            Trip(destination_id=destination_id, title=title, start_date=start_date, end_date=end_date)
        )

    def _validate(self, entity: Trip) -> None:
        super()._validate(entity)
        if not is_valid_date_range(entity.start_date, entity.end_date):
            raise InvalidEntityError(
                f"trip dates must be YYYY-MM-DD with start <= end "
                f"(got {entity.start_date!r} .. {entity.end_date!r})"
            )

    def _delete_blocker(self, entity: Trip) -> str | None:
        activities = self.store.count_referencing(EntityKind.ACTIVITY, "trip_id", entity.id)
        expenses = self.store.count_referencing(EntityKind.EXPENSE, "trip_id", entity.id)
        if activities or expenses:
            return f"{activities} activity(ies) and {expenses} expense(s) still reference it"
        return None


class ActivityRepository(EntityRepository):
    kind = EntityKind.ACTIVITY
    required_fields = ("name", "date", "time", "location")

    def add(self, trip_id: int, name: str, date: str, time: str, location: str) -> int:
        return self._add(Activity(trip_id=trip_id, name=name, date=date, time=time, location=location))

    def _delete_blocker(self, entity: Activity) -> str | None:
        if is_activity_in_past(entity.date, self.today()):
            return f"activity date {entity.date} is in the past"
        return None


class ExpenseRepository(EntityRepository):
    kind = EntityKind.EXPENSE
    required_fields = ("title", "date")

    def add(self, trip_id: int, title: str, amount: float, date: str) -> int:
        return self._add(Expense(trip_id=trip_id, title=title, amount=amount, date=date))

    def _validate(self, entity: Expense) -> None:
        super()._validate(entity)
        if not is_valid_amount(entity.amount):
            raise InvalidEntityError(f"expense amount must be a positive number (got {entity.amount!r})")
        entity.amount = float(entity.amount)

    def _delete_blocker(self, entity: Expense) -> str | None:
        if is_expense_too_old(entity.date, self.today()):
            return f"expense date {entity.date} is more than {EXPENSE_LOCK_DAYS} days ago"
        return None


class TravelRepository:
    """
    Entry point bundling the four entity repositories.

    Usage:
        repo = TravelRepository(store, cache, gateway=gateway)
        paris = repo.destinations.add("Paris", "France")
        trip = repo.trips.add(paris, "Summer", "2025-06-01", "2025-06-10")
        repo.destinations.delete(paris)   # False: a trip references it
    """

    def __init__(
        self,
        store: TravelStore,
        cache: ReadCache,
        gateway: RemoteGateway | None = None,
        on_changed: Callable[[], None] | None = None,
        today: Clock = date.today,
        push_destination_updates: bool = False,
    ):
        self.store = store
        self.cache = cache
        on_changed = on_changed or cache.reload

        self.destinations = DestinationRepository(
            store, cache, on_changed, today, gateway=gateway, push_updates=push_destination_updates
        )
        self.trips = TripRepository(store, cache, on_changed, today)
        self.activities = ActivityRepository(store, cache, on_changed, today)
        self.expenses = ExpenseRepository(store, cache, on_changed, today)
