"""
Tests for the typer CLI.
"""

import json
import logging

import pytest
from typer.testing import CliRunner

from travelsync import __version__
from travelsync.application.container import Container
from travelsync.interface.cli import orchestrator
from travelsync.interface.cli.orchestrator import app

runner = CliRunner(env={"COLUMNS": "200"})


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the console handler each invocation installs on the runner's stream."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.fixture
def config_dir(tmp_path):
    """Config directory whose settings point at a seeded database under tmp_path."""
    config = tmp_path / "config"
    config.mkdir()
    (config / "travel_settings.json").write_text(json.dumps({
        "storage": {"db_path": str(tmp_path / "TravelPlanner.sqlite"), "seed_sample_data": True},
        "log_level": "ERROR",
    }))
    return config


@pytest.fixture
def offline(monkeypatch):
    """Build containers that never reach the network."""
    def build(config_dir=None):
        return Container(config_dir=config_dir, reachability=lambda: False)

    monkeypatch.setattr(orchestrator, "Container", build)


def _invoke(config_dir, *args):
    return runner.invoke(app, ["--config-dir", str(config_dir), *args])


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_list_destinations(config_dir, offline):
    result = _invoke(config_dir, "destinations", "list")

    assert result.exit_code == 0
    assert "Paris" in result.output
    assert "Tokyo" in result.output


def test_search_trips(config_dir, offline):
    result = _invoke(config_dir, "trips", "search", "cherry")

    assert result.exit_code == 0
    assert "Cherry Blossom" in result.output


def test_search_without_match(config_dir, offline):
    result = _invoke(config_dir, "expenses", "search", "zeppelin")

    assert result.exit_code == 0
    assert "No matching records" in result.output


def test_add_and_delete_destination(config_dir, offline):
    added = _invoke(config_dir, "destinations", "add", "Lisbon", "Portugal")
    assert added.exit_code == 0
    assert "Added destination 4" in added.output

    deleted = _invoke(config_dir, "destinations", "delete", "4")
    assert deleted.exit_code == 0
    assert "Deleted destination 4" in deleted.output


def test_delete_destination_with_trips_refused(config_dir, offline):
    result = _invoke(config_dir, "destinations", "delete", "1")

    assert result.exit_code == 1
    assert "Cannot delete destination 1" in result.output


def test_add_trip_to_unknown_destination(config_dir, offline):
    result = _invoke(config_dir, "trips", "add", "99", "Lost", "2025-06-01", "2025-06-02")

    assert result.exit_code == 1
    assert "unknown destination 99" in result.output


def test_update_destination_description(config_dir, offline):
    result = _invoke(config_dir, "destinations", "update", "1", "--description", "City of light")

    assert result.exit_code == 0
    assert "Updated destination 1" in result.output


def test_update_trip_title(config_dir, offline):
    result = _invoke(config_dir, "trips", "update", "1", "--title", "Midsummer")

    assert result.exit_code == 0
    assert "Updated trip 1" in result.output
    assert "Midsummer" in _invoke(config_dir, "trips", "search", "midsummer").output


def test_update_trip_with_backwards_dates_refused(config_dir, offline):
    result = _invoke(config_dir, "trips", "update", "1", "--end", "2025-05-01")

    assert result.exit_code == 1
    assert "start <= end" in result.output


def test_update_expense_amount(config_dir, offline):
    result = _invoke(config_dir, "expenses", "update", "2", "--amount", "175.5")

    assert result.exit_code == 0
    assert "Updated expense 2" in result.output


def test_update_missing_expense(config_dir, offline):
    result = _invoke(config_dir, "expenses", "update", "999", "--title", "Ghost")

    assert result.exit_code == 1
    assert "Expense 999 not found" in result.output


def test_update_activity_without_options(config_dir, offline):
    result = _invoke(config_dir, "activities", "update", "1")

    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_sync_offline_fails(config_dir, offline):
    result = _invoke(config_dir, "sync")

    assert result.exit_code == 1
    assert "No internet connection" in result.output


def test_refresh_offline_skips_trips(config_dir, offline):
    result = _invoke(config_dir, "refresh")

    assert result.exit_code == 1
    assert "Skipped" in result.output


def test_settings_shows_effective_values(config_dir, offline):
    result = _invoke(config_dir, "settings")

    assert result.exit_code == 0
    assert "Remote API" in result.output
    assert "ERROR" in result.output


def test_invalid_settings_file(tmp_path):
    (tmp_path / "travel_settings.json").write_text("{broken")

    result = runner.invoke(app, ["--config-dir", str(tmp_path), "destinations", "list"])

    assert result.exit_code == 1
    assert "Invalid JSON" in result.output
