"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite store with all migrations
applied, so tests never touch the configured database file.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from waste_collection_api.app.core.db import MEMORY_DATABASE
from waste_collection_api.app.core.store import EntityStore
from waste_collection_api.app.main import create_app


@pytest.fixture
def store():
    """Open an in-memory store and close it after the test."""
    entity_store = EntityStore.open(MEMORY_DATABASE)
    yield entity_store
    entity_store.close()


@pytest.fixture
def client_row(store):
    return store.create(
        "clients",
        {"name": "Hotel Miramar", "type": "HOTEL", "address": "Av. del Puerto 12", "rate_per_m3": Decimal("5.50")},
    )


@pytest.fixture
def vehicle_row(store):
    return store.create(
        "vehicles",
        {"plate": "4821-KLM", "max_capacity_m3": Decimal("20"), "fuel_consumption": Decimal("0.35")},
    )


@pytest.fixture
def worker_row(store):
    return store.create(
        "workers",
        {"name": "Lucía Torres", "role": "driver", "base_salary": Decimal("1450.00")},
    )


@pytest.fixture
def api():
    """Test client running the full application against an in-memory database."""
    application = create_app(MEMORY_DATABASE)
    with TestClient(application) as test_client:
        yield test_client
