import pytest
from fastapi.testclient import TestClient

from decisions_api.app.db.in_memory import InMemoryDatabaseProvider
from decisions_api.app.db.provider import get_database_provider
from decisions_api.app.main import app
from tests.fixtures import seed_all


@pytest.fixture
def provider():
    provider = InMemoryDatabaseProvider()
    yield provider
    provider.reset()


@pytest.fixture
def db(provider):
    return provider.get_db()


@pytest.fixture
def seeded_provider(provider):
    seed_all(provider)
    return provider


@pytest.fixture
def client(seeded_provider):
    app.dependency_overrides[get_database_provider] = lambda: seeded_provider
    yield TestClient(app)
    app.dependency_overrides.clear()
