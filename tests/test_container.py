"""
Tests for the dependency injection container.
"""

import json

from travelsync.application.container import Container
from travelsync.domain.models import EntityKind


def _write_settings(config_dir, db_path, seed=True):
    (config_dir / "travel_settings.json").write_text(json.dumps({
        "storage": {"db_path": str(db_path), "seed_sample_data": seed},
        "remote": {"push_destination_updates": True},
    }))


def test_settings_loaded_from_config_dir(tmp_path):
    _write_settings(tmp_path, tmp_path / "app.sqlite")
    container = Container(config_dir=tmp_path, reachability=lambda: False)

    assert container.settings.remote.push_destination_updates is True
    assert container.repository.destinations.push_updates is True
    container.close()


def test_components_are_shared(tmp_path):
    _write_settings(tmp_path, tmp_path / "app.sqlite")
    container = Container(config_dir=tmp_path, reachability=lambda: False)

    assert container.store is container.store
    assert container.planner.repository is container.repository
    assert container.coordinator.cache is container.read_cache
    assert container.repository.cache is container.read_cache
    container.close()


def test_read_cache_starts_loaded(tmp_path):
    _write_settings(tmp_path, tmp_path / "app.sqlite", seed=True)
    container = Container(config_dir=tmp_path, reachability=lambda: False)

    assert container.read_cache.count(EntityKind.TRIP) == 6
    container.close()


def test_close_then_reopen(tmp_path):
    db_path = tmp_path / "app.sqlite"
    _write_settings(tmp_path, db_path, seed=False)
    container = Container(config_dir=tmp_path, reachability=lambda: False)
    container.planner.add_destination("Paris", "France")
    container.close()

    reopened = Container(config_dir=tmp_path, reachability=lambda: False)
    assert [d.city for d in reopened.planner.get_all_destinations()] == ["Paris"]
    reopened.close()
