# tests/conftest.py
import os

# Deployment settings have no defaults; tests run against local SQLite.
os.environ.setdefault("ENV", "local")
os.environ.setdefault("DATABASE_URL_PROD", "sqlite:///./admin_service_prod.db")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from starlette.testclient import TestClient
from sqlalchemy_utils import create_database, database_exists, drop_database
from unittest.mock import MagicMock

from app.main import app
from app.api import deps
from app.db.gateway import PersistenceGateway


# --- E2E Test Database Setup ---
@pytest.fixture(scope="session")
def database_url(tmp_path_factory):
    return f"sqlite:///{tmp_path_factory.mktemp('db') / 'admin_service_test.db'}"


@pytest.fixture(scope="session")
def session_gateway(database_url):
    if database_exists(database_url):
        drop_database(database_url)
    create_database(database_url)
    gateway = PersistenceGateway(database_url).open()
    yield gateway
    gateway.close()
    drop_database(database_url)


@pytest.fixture(scope="function")
def gateway(session_gateway):
    """An open gateway on an empty schema."""
    session_gateway.drop_all()
    session_gateway.create_all()
    yield session_gateway


# --- Mock Dependencies Setup ---
class MockTokenPayload:
    def __init__(self, sub="admin_123", role="admin"):
        self.sub = sub
        self.role = role


def override_get_current_user():
    return MockTokenPayload()


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def test_client():
    """
    Provides a TestClient where the gateway and authentication are mocked.
    This is for INTEGRATION tests.
    """
    app.dependency_overrides[deps.get_gateway] = lambda: MagicMock()
    app.dependency_overrides[deps.get_current_user] = override_get_current_user

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_client_e2e(gateway):
    """
    Provides a TestClient that uses the LIVE test database and mocks auth.
    This is for E2E tests.
    """
    app.dependency_overrides[deps.get_gateway] = lambda: gateway
    app.dependency_overrides[deps.get_current_user] = override_get_current_user

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
