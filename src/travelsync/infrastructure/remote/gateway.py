"""
Remote gateway for the travel planner REST API.

Fetches destinations and trips, merges every parsed entity straight into the
local store, and pushes locally created or edited destinations back.

Failures are never raised to the caller: every operation returns a result
object carrying either data or a RemoteFailure. No retries are attempted.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

import requests
from pydantic import ValidationError

from travelsync.domain.config import RemoteSettings
from travelsync.domain.errors import (
    DecodingError,
    NetworkUnavailableError,
    RemoteError,
    RemoteFailure,
    TransportError,
    TravelSyncError,
)
from travelsync.domain.models import MAX_ID, Destination, Entity, Trip
from travelsync.infrastructure.remote.dtos import TRIP_LIST, DestinationPayload
from travelsync.infrastructure.remote.reachability import Reachability
from travelsync.infrastructure.sqlite.store import TravelStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Remote field names that may carry a destination's image URL, in priority order
IMAGE_URL_FIELDS = ("imageURL", "imageUrl")


@dataclass
class FetchResult(Generic[T]):
    """Entities fetched (and persisted) by one call, or the error that stopped it."""

    items: list[T] = field(default_factory=list)
    error: TravelSyncError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class PushResult:
    """Outcome of a POST/PUT."""

    success: bool
    error: RemoteFailure | None = None


class RemoteGateway:
    """
    HTTP access to the `destinations` and `trips` collections.

    Usage:
        gateway = RemoteGateway(settings.remote, store, SocketReachability(url))
        result = gateway.fetch_destinations()
        if not result.ok:
            print(result.error)

        future = gateway.submit(gateway.fetch_trips)
    """

    def __init__(
        self,
        settings: RemoteSettings,
        store: TravelStore,
        reachability: Reachability,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize the gateway.

        Args:
            settings: Base URL, timeout and pool sizes
            store: Store that fetched entities are merged into
            reachability: Predicate consulted before every call
            session: HTTP session (a new one if not given)
        """
        self.settings = settings
        self.store = store
        self.reachability = reachability
        self.session = session or requests.Session()
        self._executor = ThreadPoolExecutor(
            max_workers=settings.max_workers, thread_name_prefix="remote"
        )
        # Separate pool so a fetch waiting on its downloads never starves itself
        self._image_executor = ThreadPoolExecutor(
            max_workers=settings.image_download_workers, thread_name_prefix="image"
        )

    def submit(self, operation: Callable[..., T], *args: Any) -> "Future[T]":
        """Run a gateway operation on the worker pool."""
        return self._executor.submit(operation, *args)

    def close(self) -> None:
        """Wait for in-flight work, then release threads and the HTTP session."""
        self._executor.shutdown(wait=True)
        self._image_executor.shutdown(wait=True)
        self.session.close()

    # ========================================================================
    # HTTP Helpers
    # ========================================================================

    def _url(self, *parts: Any) -> str:
        return "/".join([self.settings.base_url, *(str(p) for p in parts)])

    def _request(self, method: str, url: str, payload: dict | None = None) -> requests.Response:
        """
        Issue one request after the reachability check.

        Raises:
            NetworkUnavailableError, TransportError, RemoteError
        """
        if not self.reachability():
            raise NetworkUnavailableError()

        try:
            response = self.session.request(
                method, url, json=payload, timeout=self.settings.request_timeout
            )
        except requests.Timeout as e:
            raise TransportError(f"{method} {url} timed out") from e
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.info("%s %s -> %d", method, url, response.status_code)
        if not 200 <= response.status_code <= 299:
            raise RemoteError(response.status_code)
        return response

    @staticmethod
    def _decode_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodingError(f"Malformed JSON: {e}") from e

    def _persist(self, entity: Entity) -> None:
        self.store.insert_or_update(entity)

    # ========================================================================
    # Destinations
    # ========================================================================

    def fetch_destinations(self) -> FetchResult[Destination]:
        """
        Fetch all destinations, downloading their images.

        Items are persisted one by one as they become ready, so a bad item
        or a failed image download does not lose the others. Returns only
        after every image download has finished.
        """
        try:
            response = self._request("GET", self._url("destinations"))
            payload = self._decode_json(response)
            if not isinstance(payload, list):
                raise DecodingError("Could not parse JSON as array")
        except RemoteFailure as e:
            logger.warning("Destination fetch failed: %s", e)
            return FetchResult(error=e)

        slots: list[Destination | Future] = []
        errors: list[TravelSyncError] = []
        for item in payload:
            destination, image_url = self._parse_destination(item)
            if destination is None:
                continue
            if image_url:
                logger.debug("Found image URL for %s: %s", destination.city, image_url)
                slots.append(
                    self._image_executor.submit(self._complete_destination, destination, image_url)
                )
                continue
            try:
                self._persist(destination)
            except TravelSyncError as e:
                logger.error("Failed to save destination %d: %s", destination.id, e)
                errors.append(e)
                continue
            slots.append(destination)

        pending = [slot for slot in slots if isinstance(slot, Future)]
        wait(pending)

        destinations: list[Destination] = []
        for slot in slots:
            if isinstance(slot, Future):
                try:
                    slot = slot.result()
                except TravelSyncError as e:
                    logger.error("Failed to save downloaded destination: %s", e)
                    errors.append(e)
                    continue
            destinations.append(slot)

        logger.info("Fetched %d destinations (%d with image URLs)", len(destinations), len(pending))
        # Saved items are kept; the first storage failure is still reported
        return FetchResult(items=destinations, error=errors[0] if errors else None)

    @staticmethod
    def _parse_destination(item: Any) -> tuple[Destination | None, str | None]:
        """Lenient parse of one destination; (None, None) if unusable."""
        if not isinstance(item, dict):
            logger.warning("Skipping non-object destination item: %r", item)
            return None, None

        raw_id = item.get("id")
        if isinstance(raw_id, int) and not isinstance(raw_id, bool):
            entity_id = raw_id
        elif isinstance(raw_id, str) and raw_id.strip().isdigit():
            entity_id = int(raw_id)
        else:
            logger.warning("Skipping destination without usable id: %r", raw_id)
            return None, None
        if not 1 <= entity_id <= MAX_ID:
            logger.warning("Skipping destination with out-of-range id: %d", entity_id)
            return None, None

        city, country = item.get("city"), item.get("country")
        if not isinstance(city, str) or not isinstance(country, str):
            logger.warning("Skipping destination %d without city/country", entity_id)
            return None, None

        description = item.get("description")
        image_url = next(
            (item[key] for key in IMAGE_URL_FIELDS if isinstance(item.get(key), str) and item[key].strip()),
            None,
        )
        destination = Destination(
            id=entity_id,
            city=city,
            country=country,
            description=description if isinstance(description, str) else None,
        )
        return destination, image_url

    def _complete_destination(self, destination: Destination, image_url: str) -> Destination:
        destination.image_data = self._download_image(image_url)
        if destination.image_data is None:
            logger.warning("Failed to get image data for %s", destination.city)
        self._persist(destination)
        return destination

    def _download_image(self, url: str) -> bytes | None:
        """Download image bytes; None on any failure."""
        try:
            response = self.session.get(url, timeout=self.settings.request_timeout)
        except requests.RequestException as e:
            logger.warning("Error downloading image %s: %s", url, e)
            return None

        if not 200 <= response.status_code <= 299:
            logger.warning("Server error %d when downloading image %s", response.status_code, url)
            return None
        if not response.content:
            logger.warning("Image data from %s is empty", url)
            return None

        logger.debug("Downloaded %d image bytes from %s", len(response.content), url)
        return response.content

    def push_new_destination(self, destination: Destination) -> PushResult:
        """POST a destination to the API."""
        payload = DestinationPayload.for_create(destination, self.settings.placeholder_image_url)
        try:
            self._request("POST", self._url("destinations"), payload.to_json())
        except RemoteFailure as e:
            logger.warning("Failed to push destination %s: %s", destination.city, e)
            return PushResult(success=False, error=e)
        return PushResult(success=True)

    def push_destination_update(self, destination: Destination) -> PushResult:
        """PUT a destination's current fields to the API."""
        payload = DestinationPayload.for_update(destination, self.settings.placeholder_image_url)
        try:
            self._request("PUT", self._url("destinations", destination.id), payload.to_json())
        except RemoteFailure as e:
            logger.warning("Failed to update destination %d remotely: %s", destination.id, e)
            return PushResult(success=False, error=e)
        return PushResult(success=True)

    # ========================================================================
    # Trips
    # ========================================================================

    def fetch_trips(self) -> FetchResult[Trip]:
        """
        Fetch all trips.

        Decoding is all-or-nothing: one invalid trip fails the whole fetch
        and nothing is persisted.
        """
        try:
            response = self._request("GET", self._url("trips"))
            payload = self._decode_json(response)
            try:
                dtos = TRIP_LIST.validate_python(payload)
            except ValidationError as e:
                raise DecodingError(f"Invalid trip payload: {e.error_count()} error(s)") from e
        except RemoteFailure as e:
            logger.warning("Trip fetch failed: %s", e)
            return FetchResult(error=e)

        trips = [dto.to_entity() for dto in dtos]
        for trip in trips:
            self._persist(trip)
        logger.info("Fetched %d trips", len(trips))
        return FetchResult(items=trips)
