from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from compound_access.api.dependencies import get_db_connection
from compound_access.database import DatabaseManager
from compound_access.main import app
from compound_access.models.schemas import ResidentCreateRequest
from compound_access.services.seed_service import SeedService


@pytest.fixture
def db(tmp_path) -> DatabaseManager:
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'compound.db'}")
    manager.ensure_schema()
    yield manager
    manager.dispose()


@pytest.fixture
def conn(db):
    with db.get_connection() as connection:
        yield connection


@pytest.fixture
def seeded_db(db) -> DatabaseManager:
    with db.get_connection() as connection:
        SeedService().seed_if_empty(connection)
    return db


@pytest.fixture
def client(seeded_db):
    def _connection():
        with seeded_db.get_connection() as connection:
            yield connection

    app.dependency_overrides[get_db_connection] = _connection
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_resident():
    def _make(first: str, last: str, unit: str, building: str = "Building A", **extra) -> ResidentCreateRequest:
        data = {
            "firstName": first,
            "lastName": last,
            "email": f"{first.lower()}.{last.lower()}@email.com",
            "phone": "+1-555-0000",
            "unitNumber": unit,
            "building": building,
            "emergencyContact": {"name": "Contact", "phone": "+1-555-9999", "relationship": "Friend"},
        }
        data.update(extra)
        return ResidentCreateRequest(**data)

    return _make
