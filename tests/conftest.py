import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_database_service
from app.main import app
from tests.utils import FakeDatabaseService, create_test_profiles


@pytest.fixture
def db_service() -> FakeDatabaseService:
    """Create an empty in-memory database service for each test."""
    return FakeDatabaseService()


@pytest.fixture
def players(db_service):
    """Four players rated 1500 in every sport."""
    return create_test_profiles(db_service, 4)


@pytest.fixture
def test_client(db_service):
    """Create a test client with overridden database dependency."""
    app.dependency_overrides[get_database_service] = lambda: db_service

    client = TestClient(app)
    yield client

    # Clean up the override after the test
    app.dependency_overrides.clear()
