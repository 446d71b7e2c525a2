"""
Pytest configuration and shared fixtures.

- store: a fresh in-memory entity store
- storage: the storage facade over that store
- client: a TestClient for an app bound to ``storage`` (no demo data)
- base_time: a fixed, timezone-aware reference instant
- sample_location: insertable data for a coffee shop
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from crowd_check_api.app.core.store import MemoryEntityStore
from crowd_check_api.app.main import create_app
from crowd_check_api.app.services.storage import CrowdStorage


@pytest.fixture
def store() -> MemoryEntityStore:
    """Fresh store for each test."""
    return MemoryEntityStore()


@pytest.fixture
def storage(store) -> CrowdStorage:
    return CrowdStorage(store)


@pytest.fixture
def client(storage):
    app = create_app(storage=storage, seed=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def base_time() -> datetime:
    return datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_location() -> dict:
    """Return insertable data for a sample location."""
    return {
        "name": "Skyline Café",
        "category": "Coffee shop",
        "address": "123 Coffee Street, Cityville",
        "latitude": 40.7128,
        "longitude": -74.0060,
        "icon": "fa-coffee",
    }
