"""
Tests for simulated store latency

With failures switched on, catalog reads answer 500 with the cause in
"error"; nothing is retried.
"""

import asyncio
import random

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from bookreview.config import get_settings
from bookreview.exceptions import StoreUnavailableError
from bookreview.main import create_app
from bookreview.services.latency import LatencySimulator


class TestLatencySimulator:
    def test_disabled_by_default(self):
        simulator = LatencySimulator()

        assert simulator.enabled is False
        asyncio.run(simulator.simulate("reading"))

    def test_always_fails_at_rate_one(self):
        simulator = LatencySimulator(failure_rate=1.0)

        with pytest.raises(StoreUnavailableError) as exc_info:
            asyncio.run(simulator.simulate("retrieving books"))

        assert exc_info.value.message == "Error retrieving books"
        assert exc_info.value.status_code == 500

    def test_seeded_rng_is_deterministic(self):
        def outcomes(seed: int) -> list[bool]:
            simulator = LatencySimulator(failure_rate=0.5, rng=random.Random(seed))
            results = []
            for _ in range(20):
                try:
                    asyncio.run(simulator.simulate("x"))
                    results.append(True)
                except StoreUnavailableError:
                    results.append(False)
            return results

        assert outcomes(7) == outcomes(7)
        assert True in outcomes(7) and False in outcomes(7)

    def test_delay_does_not_block_other_tasks(self):
        """Two delayed calls run concurrently, not back to back."""
        simulator = LatencySimulator(delay_ms=100)

        async def run_both() -> float:
            loop = asyncio.get_running_loop()
            started = loop.time()
            await asyncio.gather(simulator.simulate("a"), simulator.simulate("b"))
            return loop.time() - started

        assert asyncio.run(run_both()) < 0.19

    @pytest.mark.parametrize("kwargs", [{"delay_ms": -1}, {"failure_rate": 1.5}])
    def test_invalid_arguments(self, kwargs: dict):
        with pytest.raises(ValueError):
            LatencySimulator(**kwargs)


class TestSimulatedFailuresOverHttp:
    @pytest.fixture
    def flaky_client(self):
        settings = get_settings().model_copy(update={"simulated_failure_rate": 1.0})
        with TestClient(create_app(settings)) as test_client:
            yield test_client

    @pytest.mark.parametrize("path", ["/", "/isbn/1", "/author/austen", "/title/pride"])
    def test_catalog_reads_fail_with_500(self, flaky_client: TestClient, path: str):
        response = flaky_client.get(path)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        data = response.json()
        assert data["message"].startswith("Error ")
        assert data["error"] == "Simulated database connection error"

    def test_review_reads_are_not_simulated(self, flaky_client: TestClient):
        response = flaky_client.get("/review/1")

        assert response.status_code == status.HTTP_200_OK
