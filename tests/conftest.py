"""
pytest Fixtures for Book Review API Tests

Every test gets its own application from create_app(), and with it a fresh
catalog, user directory and session store. Nothing leaks between tests.

The TestClient keeps cookies between requests, so a client that has
logged in carries its session cookie into later calls, just like a
browser would.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting and sets a test secret key
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["SIMULATED_DELAY_MS"] = "0"
os.environ["SIMULATED_FAILURE_RATE"] = "0"

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bookreview.main import create_app
from bookreview.services.security import TokenService
from bookreview.stores import CatalogStore, UserDirectory

TEST_SECRET_KEY = os.environ["SECRET_KEY"]


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================
@pytest.fixture
def app() -> FastAPI:
    """A freshly built application with empty user and session stores."""
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Test client bound to the per-test application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def catalog(app: FastAPI) -> CatalogStore:
    return app.state.catalog


@pytest.fixture
def users(app: FastAPI) -> UserDirectory:
    return app.state.users


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret_key=TEST_SECRET_KEY)


# =============================================================================
# USER FIXTURES
# =============================================================================
@pytest.fixture
def registered_user(users: UserDirectory) -> dict:
    """Register alice directly in the directory and return her credentials."""
    users.register("alice", "pw1")
    return {"username": "alice", "password": "pw1"}


@pytest.fixture
def logged_in_client(client: TestClient, registered_user: dict) -> TestClient:
    """A client whose session already holds a valid credential for alice."""
    response = client.post("/customer/login", json=registered_user)
    assert response.status_code == 200
    return client
