"""
Sync coordinator.

Orchestrates the remote fetches and reports one aggregated outcome:
- sync_all: destinations and trips concurrently, joined when both finish
- force_refresh: destinations, then trips only if destinations succeeded

Both reload the read cache and invoke the completion callback exactly once,
on the apply context. Remote, storage and cache reload failures are
reported in the outcome, never raised; a failing callback is only logged.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Callable

from travelsync.domain.errors import TravelSyncError
from travelsync.domain.models import EntityKind
from travelsync.application.apply_context import ApplyContext
from travelsync.application.read_cache import ReadCache
from travelsync.infrastructure.remote.gateway import FetchResult, RemoteGateway

logger = logging.getLogger(__name__)


@dataclass
class KindOutcome:
    """Result of fetching one entity kind."""

    kind: EntityKind
    attempted: bool = True
    count: int = 0
    error: TravelSyncError | None = None

    @property
    def succeeded(self) -> bool:
        return self.attempted and self.error is None

    @classmethod
    def from_result(cls, kind: EntityKind, result: FetchResult) -> "KindOutcome":
        return cls(kind=kind, count=len(result.items), error=result.error)


@dataclass
class SyncOutcome:
    """Aggregated outcome of a sync or refresh."""

    destinations: KindOutcome = field(
        default_factory=lambda: KindOutcome(EntityKind.DESTINATION, attempted=False)
    )
    trips: KindOutcome = field(
        default_factory=lambda: KindOutcome(EntityKind.TRIP, attempted=False)
    )
    reload_error: TravelSyncError | None = None

    @property
    def success(self) -> bool:
        return self.destinations.succeeded and self.trips.succeeded and self.reload_error is None

    @property
    def errors(self) -> list[TravelSyncError]:
        errors = [o.error for o in (self.destinations, self.trips) if o.error is not None]
        if self.reload_error is not None:
            errors.append(self.reload_error)
        return errors

    @property
    def error_message(self) -> str | None:
        """Human-readable summary of what failed, or None."""
        messages = []
        if self.destinations.error is not None:
            messages.append(f"Failed to fetch destinations: {self.destinations.error}")
        if self.trips.error is not None:
            messages.append(f"Failed to fetch trips: {self.trips.error}")
        if self.reload_error is not None:
            messages.append(f"Failed to reload local data: {self.reload_error}")
        return "\n".join(messages) if messages else None


OnComplete = Callable[[SyncOutcome], None]


class SyncCoordinator:
    """
    Runs fetches through the gateway and applies their completion.

    Usage:
        coordinator = SyncCoordinator(gateway, cache, apply_context)
        outcome = coordinator.sync_all()
        if not outcome.success:
            print(outcome.error_message)

        future = coordinator.force_refresh_async(on_complete=show)
    """

    def __init__(self, gateway: RemoteGateway, cache: ReadCache, apply_context: ApplyContext):
        self.gateway = gateway
        self.cache = cache
        self.apply = apply_context
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="sync")

    def sync_all(self, on_complete: OnComplete | None = None) -> SyncOutcome:
        """Fetch destinations and trips concurrently; wait for both."""
        logger.info("Sync started")
        destinations = self.gateway.submit(self.gateway.fetch_destinations)
        trips = self.gateway.submit(self.gateway.fetch_trips)
        wait([destinations, trips])

        outcome = SyncOutcome(
            destinations=self._collect(EntityKind.DESTINATION, destinations),
            trips=self._collect(EntityKind.TRIP, trips),
        )
        return self._complete(outcome, on_complete)

    def force_refresh(self, on_complete: OnComplete | None = None) -> SyncOutcome:
        """Fetch destinations, then trips; stop if destinations fail."""
        logger.info("Force refresh started")
        outcome = SyncOutcome()
        outcome.destinations = self._collect(
            EntityKind.DESTINATION, self.gateway.submit(self.gateway.fetch_destinations)
        )
        if outcome.destinations.succeeded:
            outcome.trips = self._collect(
                EntityKind.TRIP, self.gateway.submit(self.gateway.fetch_trips)
            )
        else:
            logger.warning("Destination fetch failed, skipping trips")
        return self._complete(outcome, on_complete)

    def sync_all_async(self, on_complete: OnComplete | None = None) -> "Future[SyncOutcome]":
        return self._executor.submit(self.sync_all, on_complete)

    def force_refresh_async(self, on_complete: OnComplete | None = None) -> "Future[SyncOutcome]":
        return self._executor.submit(self.force_refresh, on_complete)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    @staticmethod
    def _collect(kind: EntityKind, future: Future) -> KindOutcome:
        try:
            return KindOutcome.from_result(kind, future.result())
        except TravelSyncError as e:
            # Storage failures while merging fetched rows
            logger.error("%s fetch failed: %s", kind.label.capitalize(), e)
            return KindOutcome(kind=kind, error=e)

    def _complete(self, outcome: SyncOutcome, on_complete: OnComplete | None) -> SyncOutcome:
        def apply() -> None:
            try:
                self.cache.reload()
            except TravelSyncError as e:
                logger.error("Cache reload after sync failed: %s", e)
                outcome.reload_error = e
            if on_complete is not None:
                try:
                    on_complete(outcome)
                except Exception as e:
                    logger.exception("Sync completion callback failed: %s", e)

        self.apply.call(apply)
        if outcome.success:
            logger.info(
                "Sync finished: %d destinations, %d trips",
                outcome.destinations.count,
                outcome.trips.count,
            )
        else:
            logger.warning("Sync finished with errors: %s", outcome.error_message)
        return outcome
