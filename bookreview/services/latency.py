"""
Simulated Store Latency

Catalog reads can be made slow and occasionally failing, to see how
clients cope with a remote database. With the default settings (no delay,
no failures) this is a no-op.

The delay is an asyncio sleep, so a slow request never holds up others.
"""

import asyncio
import logging
import random

from bookreview.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class LatencySimulator:
    def __init__(
        self,
        delay_ms: int = 0,
        failure_rate: float = 0.0,
        rng: random.Random | None = None,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self.delay_ms = delay_ms
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()

    @property
    def enabled(self) -> bool:
        return self.delay_ms > 0 or self.failure_rate > 0

    async def simulate(self, operation: str) -> None:
        """
        Wait out the configured delay, then maybe fail.

        Raises:
            StoreUnavailableError: With probability `failure_rate`
        """
        if self.delay_ms:
            await asyncio.sleep(self.delay_ms / 1000)

        if self.failure_rate and self._rng.random() < self.failure_rate:
            logger.error(f"Simulated store failure while {operation}")
            raise StoreUnavailableError(
                f"Error {operation}",
                error="Simulated database connection error",
            )
