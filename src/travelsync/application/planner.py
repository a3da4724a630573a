"""
Caller-facing surface of the travel planner.

TravelPlanner is what a UI (or the CLI) talks to: read accessors served from
the cache, commands that report failure through a single `error_message`
slot instead of raising, background refresh/sync, and the small helpers a
view needs (trip duration, whether a row may be deleted, ...).
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from datetime import date
from typing import Callable

from travelsync.domain import rules
from travelsync.domain.errors import TravelSyncError
from travelsync.domain.models import Activity, Destination, Expense, Trip
from travelsync.application.repository import EntityRepository, TravelRepository
from travelsync.application.sync_coordinator import OnComplete, SyncCoordinator, SyncOutcome

logger = logging.getLogger(__name__)

UNKNOWN_CITY = "Unknown"


class TravelPlanner:
    """
    Facade over the repository and the sync coordinator.

    Usage:
        planner = container.planner
        paris = planner.add_destination("Paris", "France")
        if not planner.delete_destination(paris):
            print(planner.error_message)

        planner.refresh(on_complete=lambda outcome: print(outcome.success))
    """

    def __init__(
        self,
        repository: TravelRepository,
        coordinator: SyncCoordinator,
        today: Callable[[], date] = date.today,
    ):
        self.repository = repository
        self.coordinator = coordinator
        self.today = today
        self.error_message: str | None = None
        self._loading = 0
        self._loading_lock = threading.Lock()

    @property
    def is_loading(self) -> bool:
        """True while a refresh or sync is in flight."""
        with self._loading_lock:
            return self._loading > 0

    # ========================================================================
    # Reads
    # ========================================================================

    def get_all_destinations(self) -> list[Destination]:
        return self.repository.destinations.get_all()

    def get_all_trips(self) -> list[Trip]:
        return self.repository.trips.get_all()

    def get_all_activities(self) -> list[Activity]:
        return self.repository.activities.get_all()

    def get_all_expenses(self) -> list[Expense]:
        return self.repository.expenses.get_all()

    def get_destination(self, destination_id: int) -> Destination | None:
        return self.repository.destinations.get_by_id(destination_id)

    def get_trip(self, trip_id: int) -> Trip | None:
        return self.repository.trips.get_by_id(trip_id)

    def get_activity(self, activity_id: int) -> Activity | None:
        return self.repository.activities.get_by_id(activity_id)

    def get_expense(self, expense_id: int) -> Expense | None:
        return self.repository.expenses.get_by_id(expense_id)

    def get_trips_for_destination(self, destination_id: int) -> list[Trip]:
        return self.repository.trips.list_by_owner(destination_id)

    def get_activities_for_trip(self, trip_id: int) -> list[Activity]:
        return self.repository.activities.list_by_owner(trip_id)

    def get_expenses_for_trip(self, trip_id: int) -> list[Expense]:
        return self.repository.expenses.list_by_owner(trip_id)

    def search_destinations(self, term: str) -> list[Destination]:
        return self.repository.destinations.search(term)

    def search_trips(self, term: str) -> list[Trip]:
        return self.repository.trips.search(term)

    def search_activities(self, term: str) -> list[Activity]:
        return self.repository.activities.search(term)

    def search_expenses(self, term: str) -> list[Expense]:
        return self.repository.expenses.search(term)

    # ========================================================================
    # Commands
    # ========================================================================

    def add_destination(
        self,
        city: str,
        country: str,
        image_data: bytes | None = None,
        description: str | None = None,
    ) -> int | None:
        return self._run(
            self.repository.destinations.add, city, country, image_data, description
        )

    def add_trip(self, destination_id: int, title: str, start_date: str, end_date: str) -> int | None:
        return self._run(self.repository.trips.add, destination_id, title, start_date, end_date)

    def add_activity(
        self, trip_id: int, name: str, date: str, time: str, location: str
    ) -> int | None:
        return self._run(self.repository.activities.add, trip_id, name, date, time, location)

    def add_expense(self, trip_id: int, title: str, amount: float, date: str) -> int | None:
        return self._run(self.repository.expenses.add, trip_id, title, amount, date)

    def update_destination(self, destination_id: int, **fields) -> bool:
        return self._update(self.repository.destinations, destination_id, fields)

    def update_trip(self, trip_id: int, **fields) -> bool:
        return self._update(self.repository.trips, trip_id, fields)

    def update_activity(self, activity_id: int, **fields) -> bool:
        return self._update(self.repository.activities, activity_id, fields)

    def update_expense(self, expense_id: int, **fields) -> bool:
        return self._update(self.repository.expenses, expense_id, fields)

    def delete_destination(self, destination_id: int) -> bool:
        return self._delete(self.repository.destinations, destination_id)

    def delete_trip(self, trip_id: int) -> bool:
        return self._delete(self.repository.trips, trip_id)

    def delete_activity(self, activity_id: int) -> bool:
        return self._delete(self.repository.activities, activity_id)

    def delete_expense(self, expense_id: int) -> bool:
        return self._delete(self.repository.expenses, expense_id)

    def _run(self, operation, *args):
        self.error_message = None
        try:
            return operation(*args)
        except TravelSyncError as e:
            logger.warning("Operation failed: %s", e)
            self.error_message = str(e)
            return None

    def _update(self, repository: EntityRepository, entity_id: int, fields: dict) -> bool:
        self.error_message = None
        try:
            return repository.update(entity_id, **fields)
        except (TravelSyncError, TypeError) as e:
            logger.warning("Update of %s %d failed: %s", repository.kind.label, entity_id, e)
            self.error_message = str(e)
            return False

    def _delete(self, repository: EntityRepository, entity_id: int) -> bool:
        self.error_message = None
        try:
            deleted = repository.delete(entity_id)
        except TravelSyncError as e:
            self.error_message = str(e)
            return False
        if not deleted and repository.last_violation is not None:
            self.error_message = str(repository.last_violation)
        return deleted

    # ========================================================================
    # Remote
    # ========================================================================

    def refresh(self, on_complete: OnComplete | None = None) -> "Future[SyncOutcome]":
        """Force-refresh from the API in the background (destinations, then trips)."""
        return self._start(self.coordinator.force_refresh_async, on_complete)

    def sync(self, on_complete: OnComplete | None = None) -> "Future[SyncOutcome]":
        """Fetch destinations and trips concurrently in the background."""
        return self._start(self.coordinator.sync_all_async, on_complete)

    def _start(self, launch, on_complete: OnComplete | None) -> "Future[SyncOutcome]":
        with self._loading_lock:
            self._loading += 1
        self.error_message = None

        stopped = threading.Event()

        def finished(outcome: SyncOutcome) -> None:
            self.error_message = outcome.error_message
            stopped.set()
            self._stop_loading()
            if on_complete is not None:
                on_complete(outcome)

        def crashed(future: Future) -> None:
            if future.exception() is not None and not stopped.is_set():
                logger.error("Sync crashed: %s", future.exception())
                self.error_message = str(future.exception())
                self._stop_loading()

        future = launch(finished)
        future.add_done_callback(crashed)
        return future

    def _stop_loading(self) -> None:
        with self._loading_lock:
            self._loading -= 1

    # ========================================================================
    # View Helpers
    # ========================================================================

    def trip_duration_days(self, trip: Trip) -> int:
        return rules.trip_duration_days(trip.start_date, trip.end_date)

    def destination_city(self, destination_id: int) -> str:
        destination = self.get_destination(destination_id)
        return destination.city if destination else UNKNOWN_CITY

    def has_linked_trips(self, destination_id: int) -> bool:
        return bool(self.get_trips_for_destination(destination_id))

    def can_delete_trip(self, trip_id: int) -> bool:
        """A trip is deletable once it has no activities and no expenses."""
        return not self.get_activities_for_trip(trip_id) and not self.get_expenses_for_trip(trip_id)

    def is_activity_in_past(self, activity: Activity) -> bool:
        return rules.is_activity_in_past(activity.date, self.today())

    def is_expense_too_old(self, expense: Expense) -> bool:
        return rules.is_expense_too_old(expense.date, self.today())
