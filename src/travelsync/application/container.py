"""
Dependency injection container for the application.

This module provides a centralized way to create and manage application dependencies.
Components are built lazily on first access and shared afterwards.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional

import requests

from ..domain.config.settings import TravelSettings
from ..infrastructure.config.repository import SettingsRepository
from ..infrastructure.remote.gateway import RemoteGateway
from ..infrastructure.remote.reachability import Reachability, SocketReachability
from ..infrastructure.sqlite.store import TravelStore
from .apply_context import ApplyContext
from .planner import TravelPlanner
from .read_cache import ReadCache
from .repository import TravelRepository
from .sync_coordinator import SyncCoordinator

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    Manages the creation and lifecycle of the store, gateway, cache and services.
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        settings: Optional[TravelSettings] = None,
        reachability: Optional[Reachability] = None,
        session: Optional[requests.Session] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize the container.

        Args:
            config_dir: Directory holding travel_settings.json
            settings: Settings to use instead of the config file
            reachability: Connectivity predicate (defaults to a TCP probe of the API host)
            session: HTTP session for the gateway
            today: Clock for the temporal delete rules
        """
        self.config_dir = Path(config_dir) if config_dir else Path.cwd() / "config"
        self._settings = settings
        self._reachability = reachability
        self._session = session
        self.today = today or date.today

        self._settings_repository: Optional[SettingsRepository] = None
        self._store: Optional[TravelStore] = None
        self._gateway: Optional[RemoteGateway] = None
        self._read_cache: Optional[ReadCache] = None
        self._apply_context: Optional[ApplyContext] = None
        self._repository: Optional[TravelRepository] = None
        self._coordinator: Optional[SyncCoordinator] = None
        self._planner: Optional[TravelPlanner] = None

    @property
    def settings_repository(self) -> SettingsRepository:
        """Get the settings repository."""
        if self._settings_repository is None:
            self._settings_repository = SettingsRepository(self.config_dir)
        return self._settings_repository

    @property
    def settings(self) -> TravelSettings:
        """Get the effective settings (loaded from the config file if not given)."""
        if self._settings is None:
            self._settings = self.settings_repository.load_settings()
        return self._settings

    @property
    def store(self) -> TravelStore:
        """Get the SQLite store."""
        if self._store is None:
            storage = self.settings.storage
            self._store = TravelStore(
                storage.db_path,
                template_path=storage.template_path,
                seed_sample_data=storage.seed_sample_data,
            ).open()
        return self._store

    @property
    def gateway(self) -> RemoteGateway:
        """Get the remote gateway."""
        if self._gateway is None:
            remote = self.settings.remote
            reachability = self._reachability or SocketReachability(remote.base_url)
            self._gateway = RemoteGateway(remote, self.store, reachability, self._session)
        return self._gateway

    @property
    def read_cache(self) -> ReadCache:
        """Get the read cache, loaded from the store."""
        if self._read_cache is None:
            self._read_cache = ReadCache(self.store)
            self._read_cache.reload()
        return self._read_cache

    @property
    def apply_context(self) -> ApplyContext:
        """Get the apply context."""
        if self._apply_context is None:
            self._apply_context = ApplyContext()
        return self._apply_context

    @property
    def repository(self) -> TravelRepository:
        """Get the integrity-aware repository."""
        if self._repository is None:
            self._repository = TravelRepository(
                self.store,
                self.read_cache,
                gateway=self.gateway,
                today=self.today,
                push_destination_updates=self.settings.remote.push_destination_updates,
            )
        return self._repository

    @property
    def coordinator(self) -> SyncCoordinator:
        """Get the sync coordinator."""
        if self._coordinator is None:
            self._coordinator = SyncCoordinator(self.gateway, self.read_cache, self.apply_context)
        return self._coordinator

    @property
    def planner(self) -> TravelPlanner:
        """Get the caller-facing planner."""
        if self._planner is None:
            self._planner = TravelPlanner(self.repository, self.coordinator, today=self.today)
        return self._planner

    def close(self) -> None:
        """Stop worker threads, then close the HTTP session and the store."""
        if self._coordinator is not None:
            self._coordinator.close()
        if self._gateway is not None:
            self._gateway.close()
        if self._apply_context is not None:
            self._apply_context.shutdown()
        if self._store is not None:
            self._store.close()

        self._store = None
        self._gateway = None
        self._read_cache = None
        self._apply_context = None
        self._repository = None
        self._coordinator = None
        self._planner = None
        logger.info("Container closed")
