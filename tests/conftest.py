"""
Shared fixtures for the TravelSync test suite.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from travelsync.application.read_cache import ReadCache
from travelsync.application.repository import TravelRepository
from travelsync.infrastructure.sqlite.store import TravelStore

# Fixed "today" for every temporal rule
TODAY = date(2025, 6, 15)


def fixed_today() -> date:
    return TODAY


def make_response(status_code=200, json_data=None, content=b"", json_error=False):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def store():
    """Empty in-memory store."""
    travel_store = TravelStore(":memory:", seed_sample_data=False).open()
    yield travel_store
    travel_store.close()


@pytest.fixture
def cache(store):
    read_cache = ReadCache(store)
    read_cache.reload()
    return read_cache


@pytest.fixture
def repository(store, cache):
    return TravelRepository(store, cache, today=fixed_today)


@pytest.fixture
def session():
    """Mock HTTP session; tests set request/get behaviour."""
    return MagicMock()
