"""
Tests for the integrity-aware repository.
"""

from concurrent.futures import Future
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from travelsync.application.repository import TravelRepository
from travelsync.domain.errors import ConstraintViolation, InvalidEntityError
from travelsync.domain.models import Destination, Trip

from conftest import TODAY, fixed_today


def _days_from_today(days: int) -> str:
    return (TODAY + timedelta(days=days)).isoformat()


@pytest.fixture
def trip_id(repository):
    paris = repository.destinations.add("Paris", "France")
    return repository.trips.add(paris, "Summer", "2025-06-01", "2025-06-10")


class TestAddAndRead:
    """Test cases for add/get/search."""

    def test_add_then_get_returns_input_with_id(self, repository):
        destination_id = repository.destinations.add("Paris", "France", b"img", "City of light")

        assert repository.destinations.get_by_id(destination_id) == Destination(
            id=destination_id, city="Paris", country="France", image_data=b"img", description="City of light"
        )

    def test_add_refreshes_cached_reads(self, repository, trip_id):
        assert [t.id for t in repository.trips.get_all()] == [trip_id]
        assert repository.trips.get_by_id(trip_id) == Trip(
            id=trip_id, destination_id=1, title="Summer", start_date="2025-06-01", end_date="2025-06-10"
        )

    def test_list_by_owner(self, repository, trip_id):
        repository.activities.add(trip_id, "Louvre", "2025-06-03", "14:00", "Louvre Museum")
        repository.expenses.add(trip_id, "Hotel", 1200, "2025-06-01")

        assert [a.name for a in repository.activities.list_by_owner(trip_id)] == ["Louvre"]
        assert [e.title for e in repository.expenses.list_by_owner(trip_id)] == ["Hotel"]
        assert [t.id for t in repository.trips.list_by_owner(1)] == [trip_id]

    def test_search_empty_term_returns_nothing(self, repository):
        repository.destinations.add("Paris", "France")

        assert repository.destinations.search("") == []

    def test_search_matches_case_insensitive_substring(self, repository, trip_id):
        repository.destinations.add("Tokyo", "Japan")
        repository.activities.add(trip_id, "Eiffel Tower Tour", "2025-06-02", "10:00", "Eiffel Tower")
        repository.expenses.add(trip_id, "Dinner at Restaurant", 150, "2025-06-02")

        assert [d.city for d in repository.destinations.search("pAr")] == ["Paris"]
        assert [t.title for t in repository.trips.search("SUMM")] == ["Summer"]
        assert [a.name for a in repository.activities.search("tower")] == ["Eiffel Tower Tour"]
        assert [e.title for e in repository.expenses.search("restaurant")] == ["Dinner at Restaurant"]

    def test_trip_requires_existing_destination(self, repository):
        with pytest.raises(InvalidEntityError):
            repository.trips.add(99, "Nowhere", "2025-06-01", "2025-06-02")

    def test_activity_requires_existing_trip(self, repository):
        with pytest.raises(InvalidEntityError):
            repository.activities.add(99, "Walk", "2025-06-01", "10:00", "Park")

    def test_trip_dates_must_be_ordered(self, repository):
        paris = repository.destinations.add("Paris", "France")

        with pytest.raises(InvalidEntityError):
            repository.trips.add(paris, "Backwards", "2025-06-10", "2025-06-01")
        assert repository.trips.get_all() == []

    def test_expense_amount_must_be_positive(self, repository, trip_id):
        with pytest.raises(InvalidEntityError):
            repository.expenses.add(trip_id, "Free", 0, "2025-06-01")
        with pytest.raises(InvalidEntityError):
            repository.expenses.add(trip_id, "Refund", -5.0, "2025-06-01")

    @pytest.mark.parametrize("amount", [True, float("nan"), float("inf")])
    def test_expense_amount_must_be_a_finite_number(self, repository, trip_id, amount):
        with pytest.raises(InvalidEntityError):
            repository.expenses.add(trip_id, "Odd", amount, "2025-06-01")
        assert repository.expenses.get_all() == []

    def test_blank_required_field_rejected(self, repository):
        with pytest.raises(InvalidEntityError):
            repository.destinations.add("  ", "France")


class TestUpdate:
    """Test cases for update."""

    def test_update_mutable_fields(self, repository, trip_id):
        assert repository.trips.update(trip_id, title="Long Summer", end_date="2025-06-20") is True

        trip = repository.trips.get_by_id(trip_id)
        assert trip.title == "Long Summer"
        assert trip.end_date == "2025-06-20"

    def test_update_missing_id_is_silent_no_op(self, repository):
        assert repository.destinations.update(42, city="Ghost") is False
        assert repository.destinations.get_all() == []

    def test_update_immutable_field_rejected(self, repository, trip_id):
        with pytest.raises(InvalidEntityError):
            repository.trips.update(trip_id, destination_id=2)
        with pytest.raises(InvalidEntityError):
            repository.destinations.update(1, country="Spain")

    def test_update_unknown_field_rejected(self, repository, trip_id):
        with pytest.raises(TypeError):
            repository.trips.update(trip_id, colour="blue")

    def test_update_validates_result(self, repository, trip_id):
        with pytest.raises(InvalidEntityError):
            repository.trips.update(trip_id, end_date="2025-05-01")
        assert repository.trips.get_by_id(trip_id).end_date == "2025-06-10"


class TestDeleteConstraints:
    """Test cases for invariant-guarded deletes."""

    def test_paris_scenario(self, repository):
        paris = repository.destinations.add("Paris", "France")
        assert paris == 1
        trip = repository.trips.add(paris, "Summer", "2025-06-01", "2025-06-10")
        assert trip == 1

        assert repository.destinations.delete(paris) is False
        assert repository.destinations.get_by_id(paris) is not None

        assert repository.trips.delete(trip) is True
        assert repository.trips.get_by_id(trip) is None

        assert repository.destinations.delete(paris) is True
        assert repository.destinations.get_all() == []

    def test_refused_delete_records_violation(self, repository, trip_id):
        assert repository.destinations.delete(1) is False

        violation = repository.destinations.last_violation
        assert isinstance(violation, ConstraintViolation)
        assert violation.entity_id == 1
        assert "trip" in violation.reason

    def test_trip_with_activity_cannot_be_deleted(self, repository, trip_id):
        repository.activities.add(trip_id, "Walk", _days_from_today(5), "10:00", "Park")

        assert repository.trips.delete(trip_id) is False
        assert repository.trips.get_by_id(trip_id) is not None

    def test_trip_with_expense_cannot_be_deleted(self, repository, trip_id):
        repository.expenses.add(trip_id, "Hotel", 100, _days_from_today(0))

        assert repository.trips.delete(trip_id) is False

    def test_activity_date_boundary(self, repository, trip_id):
        yesterday = repository.activities.add(trip_id, "Past", _days_from_today(-1), "10:00", "Park")
        today = repository.activities.add(trip_id, "Now", _days_from_today(0), "10:00", "Park")
        tomorrow = repository.activities.add(trip_id, "Soon", _days_from_today(1), "10:00", "Park")

        assert repository.activities.delete(yesterday) is False
        assert repository.activities.delete(today) is True
        assert repository.activities.delete(tomorrow) is True

    def test_expense_date_boundary(self, repository, trip_id):
        old = repository.expenses.add(trip_id, "Old", 10, _days_from_today(-31))
        edge = repository.expenses.add(trip_id, "Edge", 10, _days_from_today(-30))

        assert repository.expenses.delete(old) is False
        assert repository.expenses.delete(edge) is True

    def test_unparseable_dates_are_deletable(self, repository, trip_id):
        activity = repository.activities.add(trip_id, "Someday", "TBD", "10:00", "Park")
        expense = repository.expenses.add(trip_id, "Unknown", 10, "unknown")

        assert repository.activities.delete(activity) is True
        assert repository.expenses.delete(expense) is True

    def test_delete_missing_id_succeeds(self, repository):
        assert repository.expenses.delete(123) is True

    def test_successful_delete_clears_violation(self, repository, trip_id):
        repository.destinations.delete(1)
        repository.trips.delete(trip_id)
        repository.destinations.delete(1)

        assert repository.destinations.last_violation is None


class TestDestinationPush:
    """Test cases for opportunistic pushes of destinations."""

    def _repository(self, store, cache, push_updates=False):
        gateway = MagicMock()
        gateway.submit.return_value = Future()
        repo = TravelRepository(
            store, cache, gateway=gateway, today=fixed_today, push_destination_updates=push_updates
        )
        return repo, gateway

    def test_add_schedules_push(self, store, cache):
        repo, gateway = self._repository(store, cache)

        destination_id = repo.destinations.add("Paris", "France")

        operation, pushed = gateway.submit.call_args.args
        assert operation is gateway.push_new_destination
        assert pushed == Destination(id=destination_id, city="Paris", country="France")

    def test_update_not_pushed_by_default(self, store, cache):
        repo, gateway = self._repository(store, cache)
        destination_id = repo.destinations.add("Paris", "France")
        gateway.submit.reset_mock()

        repo.destinations.update(destination_id, description="Updated")

        gateway.submit.assert_not_called()

    def test_update_pushed_when_enabled(self, store, cache):
        repo, gateway = self._repository(store, cache, push_updates=True)
        destination_id = repo.destinations.add("Paris", "France")
        gateway.submit.reset_mock()

        repo.destinations.update(destination_id, description="Updated")

        operation, pushed = gateway.submit.call_args.args
        assert operation is gateway.push_destination_update
        assert pushed.description == "Updated"

    def test_local_add_survives_push_failure(self, store, cache):
        repo, gateway = self._repository(store, cache)
        failed = Future()
        failed.set_exception(RuntimeError("boom"))
        gateway.submit.return_value = failed

        destination_id = repo.destinations.add("Paris", "France")

        assert repo.destinations.get_by_id(destination_id) is not None
