"""
Tests for rate limiting

The suite runs with limiting switched off (see conftest.py). These tests
switch the shared limiter back on, with empty counters, for their own
duration only.
"""

from collections.abc import Generator

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from bookreview.config import get_settings
from bookreview.services.rate_limiter import limiter

WRITE_LIMIT = int(get_settings().rate_limit_write.split("/")[0])


@pytest.fixture
def rate_limited() -> Generator[None, None, None]:
    limiter.reset()
    limiter.enabled = True
    yield
    limiter.enabled = False
    limiter.reset()


@pytest.mark.usefixtures("rate_limited")
class TestWriteTier:
    def test_register_is_limited(self, client: TestClient):
        statuses = [
            client.post(
                "/register", json={"username": f"user{i}", "password": "pw"}
            ).status_code
            for i in range(WRITE_LIMIT)
        ]

        response = client.post("/register", json={"username": "late", "password": "pw"})

        assert statuses == [status.HTTP_200_OK] * WRITE_LIMIT
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json()["message"] == "Too many requests. Please slow down."
        assert response.headers["Retry-After"] == "60"

    def test_login_is_limited(self, client: TestClient):
        bad_login = {"username": "nobody", "password": "wrong"}
        for _ in range(WRITE_LIMIT):
            assert client.post("/customer/login", json=bad_login).status_code == (
                status.HTTP_404_NOT_FOUND
            )

        response = client.post("/customer/login", json=bad_login)

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert "Retry-After" in response.headers

    def test_limit_is_per_client_ip(self, client: TestClient):
        for i in range(WRITE_LIMIT + 1):
            client.post("/register", json={"username": f"user{i}", "password": "pw"})

        response = client.post(
            "/register",
            json={"username": "elsewhere", "password": "pw"},
            headers={"X-Forwarded-For": "203.0.113.7"},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_reads_use_the_default_tier(self, client: TestClient):
        for i in range(WRITE_LIMIT + 1):
            client.post("/register", json={"username": f"user{i}", "password": "pw"})

        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
