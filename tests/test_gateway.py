"""
Tests for the remote gateway.

The HTTP session is a MagicMock; responses are routed by URL.
"""

import pytest
import requests

from travelsync.domain.config import RemoteSettings
from travelsync.domain.errors import (
    DecodingError,
    NetworkUnavailableError,
    RemoteError,
    StorageError,
    TransportError,
)
from travelsync.domain.models import Destination, EntityKind
from travelsync.infrastructure.remote.gateway import RemoteGateway

from conftest import make_response

BASE_URL = "https://api.example.test/TravelPlanner"
DESTINATIONS_URL = f"{BASE_URL}/destinations"
TRIPS_URL = f"{BASE_URL}/trips"


class TestGateway:
    """Shared setup for gateway tests."""

    def setup_method(self):
        self.reachable = True
        self.routes = {}
        self.images = {}

    def _gateway(self, store, session):
        session.request.side_effect = self._route
        session.get.side_effect = self._image
        self.session = session
        self.gateway = RemoteGateway(
            RemoteSettings(base_url=BASE_URL), store, lambda: self.reachable, session
        )
        return self.gateway

    def teardown_method(self):
        if getattr(self, "gateway", None) is not None:
            self.gateway.close()

    def _route(self, method, url, json=None, timeout=None):
        handler = self.routes[(method, url)]
        if isinstance(handler, Exception):
            raise handler
        return handler

    def _image(self, url, timeout=None):
        handler = self.images[url]
        if isinstance(handler, Exception):
            raise handler
        return handler


class TestReachability(TestGateway):

    def test_unreachable_issues_no_request(self, store, session):
        gateway = self._gateway(store, session)
        self.reachable = False

        result = gateway.fetch_destinations()

        assert isinstance(result.error, NetworkUnavailableError)
        assert str(result.error) == "No internet connection"
        assert result.items == []
        session.request.assert_not_called()
        session.get.assert_not_called()

    def test_unreachable_trips_and_pushes(self, store, session):
        gateway = self._gateway(store, session)
        self.reachable = False

        assert isinstance(gateway.fetch_trips().error, NetworkUnavailableError)
        push = gateway.push_new_destination(Destination(city="Paris", country="France"))
        assert push.success is False
        assert isinstance(push.error, NetworkUnavailableError)
        session.request.assert_not_called()


class TestFetchDestinations(TestGateway):

    def test_destinations_persisted(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data=[
            {"id": "1", "city": "Paris", "country": "France", "description": "Lights"},
            {"id": 2, "city": "Tokyo", "country": "Japan"},
        ])

        result = gateway.fetch_destinations()

        assert result.ok
        assert [d.city for d in result.items] == ["Paris", "Tokyo"]
        stored = store.get_all(EntityKind.DESTINATION)
        assert [(d.id, d.city, d.description) for d in stored] == [
            (1, "Paris", "Lights"),
            (2, "Tokyo", None),
        ]

    def test_image_downloaded_from_either_field(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data=[
            {"id": "1", "city": "Paris", "country": "France", "imageURL": "https://img.test/paris"},
            {"id": "2", "city": "Tokyo", "country": "Japan", "imageUrl": "https://img.test/tokyo"},
        ])
        self.images["https://img.test/paris"] = make_response(content=b"paris-bytes")
        self.images["https://img.test/tokyo"] = make_response(content=b"tokyo-bytes")

        result = gateway.fetch_destinations()

        assert [d.image_data for d in result.items] == [b"paris-bytes", b"tokyo-bytes"]
        assert store.get_by_id(EntityKind.DESTINATION, 2).image_data == b"tokyo-bytes"

    def test_image_404_keeps_destination(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data=[
            {"id": "7", "city": "Rome", "country": "Italy", "imageUrl": "https://img.test/missing"},
        ])
        self.images["https://img.test/missing"] = make_response(status_code=404)

        result = gateway.fetch_destinations()

        assert result.ok
        stored = store.get_by_id(EntityKind.DESTINATION, 7)
        assert stored.city == "Rome"
        assert stored.image_data is None

    def test_image_transport_error_and_empty_body(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data=[
            {"id": "1", "city": "Paris", "country": "France", "imageUrl": "https://img.test/down"},
            {"id": "2", "city": "Tokyo", "country": "Japan", "imageUrl": "https://img.test/empty"},
        ])
        self.images["https://img.test/down"] = requests.ConnectionError("refused")
        self.images["https://img.test/empty"] = make_response(content=b"")

        result = gateway.fetch_destinations()

        assert result.ok
        assert [d.image_data for d in result.items] == [None, None]
        assert store.count(EntityKind.DESTINATION) == 2

    def test_incomplete_items_skipped(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data=[
            {"id": "1", "city": "Paris"},
            {"id": "abc", "city": "Oslo", "country": "Norway"},
            {"city": "Lima", "country": "Peru"},
            "garbage",
            {"id": "4", "city": "Tokyo", "country": "Japan"},
        ])

        result = gateway.fetch_destinations()

        assert result.ok
        assert [d.id for d in result.items] == [4]
        assert [d.city for d in store.get_all(EntityKind.DESTINATION)] == ["Tokyo"]

    def test_out_of_range_ids_skipped(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data=[
            {"id": -3, "city": "Oslo", "country": "Norway"},
            {"id": 0, "city": "Lima", "country": "Peru"},
            {"id": 2**70, "city": "Cairo", "country": "Egypt"},
            {"id": 7, "city": "Rome", "country": "Italy"},
        ])

        result = gateway.fetch_destinations()

        assert result.ok
        assert [d.id for d in result.items] == [7]
        assert [d.city for d in store.get_all(EntityKind.DESTINATION)] == ["Rome"]

    def test_save_failure_reported_and_other_items_kept(self, store, session, monkeypatch):
        gateway = self._gateway(store, session)
        save = store.insert_or_update

        def failing_save(entity):
            if entity.city == "Oslo":
                raise StorageError("disk I/O error")
            return save(entity)

        monkeypatch.setattr(store, "insert_or_update", failing_save)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data=[
            {"id": 1, "city": "Oslo", "country": "Norway"},
            {"id": 2, "city": "Rome", "country": "Italy", "imageURL": "https://img.test/rome"},
            {"id": 3, "city": "Lima", "country": "Peru"},
        ])
        self.images["https://img.test/rome"] = make_response(content=b"png")

        result = gateway.fetch_destinations()

        assert isinstance(result.error, StorageError)
        assert [d.id for d in result.items] == [2, 3]
        assert [d.city for d in store.get_all(EntityKind.DESTINATION)] == ["Rome", "Lima"]

    def test_non_array_is_decoding_error(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data={"city": "Paris"})

        result = gateway.fetch_destinations()

        assert isinstance(result.error, DecodingError)
        assert store.is_empty()

    def test_malformed_json_is_decoding_error(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_error=True)

        assert isinstance(gateway.fetch_destinations().error, DecodingError)

    def test_server_error_status(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(status_code=503)

        error = gateway.fetch_destinations().error

        assert isinstance(error, RemoteError)
        assert error.status_code == 503

    @pytest.mark.parametrize("failure", [requests.Timeout("slow"), requests.ConnectionError("reset")])
    def test_transport_failures(self, store, session, failure):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = failure

        assert isinstance(gateway.fetch_destinations().error, TransportError)

    def test_request_uses_configured_timeout(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", DESTINATIONS_URL)] = make_response(json_data=[])

        gateway.fetch_destinations()

        assert session.request.call_args.kwargs["timeout"] == 30


class TestFetchTrips(TestGateway):

    def test_trips_persisted(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", TRIPS_URL)] = make_response(json_data=[
            {"id": "1", "destinationId": 1, "title": "Summer", "startDate": "2025-06-01", "endDate": "2025-06-10"},
            {"id": 2, "destinationId": "3", "title": "Winter", "startDate": "2025-12-20", "endDate": "2025-12-30"},
        ])

        result = gateway.fetch_trips()

        assert result.ok
        trips = store.get_all(EntityKind.TRIP)
        assert [(t.id, t.destination_id, t.title) for t in trips] == [(1, 1, "Summer"), (2, 3, "Winter")]

    def test_one_invalid_trip_fails_whole_fetch(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", TRIPS_URL)] = make_response(json_data=[
            {"id": "1", "destinationId": 1, "title": "Summer", "startDate": "2025-06-01", "endDate": "2025-06-10"},
            {"id": "2", "title": "No destination", "startDate": "2025-12-20", "endDate": "2025-12-30"},
        ])

        result = gateway.fetch_trips()

        assert isinstance(result.error, DecodingError)
        assert result.items == []
        assert store.count(EntityKind.TRIP) == 0

    @pytest.mark.parametrize("bad", [{"id": -1}, {"id": 0}, {"id": 2**70}, {"destinationId": -2}])
    def test_out_of_range_trip_ids_fail_fetch(self, store, session, bad):
        gateway = self._gateway(store, session)
        trip = {"id": 1, "destinationId": 1, "title": "Summer", "startDate": "2025-06-01", "endDate": "2025-06-10"}
        self.routes[("GET", TRIPS_URL)] = make_response(json_data=[{**trip, **bad}])

        result = gateway.fetch_trips()

        assert isinstance(result.error, DecodingError)
        assert store.count(EntityKind.TRIP) == 0

    def test_remote_trips_merge_over_local_rows(self, store, session):
        gateway = self._gateway(store, session)
        store.insert_or_update(Destination(city="Paris", country="France"))
        self.routes[("GET", TRIPS_URL)] = make_response(json_data=[
            {"id": "1", "destinationId": 1, "title": "Remote title", "startDate": "2025-06-01", "endDate": "2025-06-10"},
        ])

        gateway.fetch_trips()
        gateway.fetch_trips()

        assert [t.title for t in store.get_all(EntityKind.TRIP)] == ["Remote title"]


class TestPush(TestGateway):

    def test_push_new_destination_payload(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("POST", DESTINATIONS_URL)] = make_response(status_code=201)

        result = gateway.push_new_destination(Destination(id=3, city="Paris", country="France"))

        assert result.success is True
        session.request.assert_called_once_with(
            "POST",
            DESTINATIONS_URL,
            json={
                "city": "Paris",
                "country": "France",
                "description": "",
                "imageUrl": "https://picsum.photos/200",
            },
            timeout=30,
        )

    def test_push_update_payload(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("PUT", f"{DESTINATIONS_URL}/3")] = make_response()

        without_image = gateway.push_destination_update(Destination(id=3, city="Paris", country="France"))
        assert without_image.success is True
        assert session.request.call_args.kwargs["json"] == {"city": "Paris", "country": "France"}

        gateway.push_destination_update(
            Destination(id=3, city="Paris", country="France", image_data=b"x", description="Lights")
        )
        assert session.request.call_args.kwargs["json"] == {
            "city": "Paris",
            "country": "France",
            "description": "Lights",
            "imageUrl": "https://picsum.photos/200",
        }

    def test_push_failure_reported(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("POST", DESTINATIONS_URL)] = make_response(status_code=500)

        result = gateway.push_new_destination(Destination(city="Paris", country="France"))

        assert result.success is False
        assert isinstance(result.error, RemoteError)

    def test_submit_runs_on_worker_pool(self, store, session):
        gateway = self._gateway(store, session)
        self.routes[("GET", TRIPS_URL)] = make_response(json_data=[])

        future = gateway.submit(gateway.fetch_trips)

        assert future.result(timeout=5).ok
