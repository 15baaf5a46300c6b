from typing import List

import pytest

from hawkrest_core.config import RetryConfig
from hawkrest_core.credentials import Credentials


class FakeClock:
    """Monotonic clock that only moves when the code under test sleeps."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def credentials() -> Credentials:
    return Credentials("clientId", "accessToken-0123456789")


@pytest.fixture()
def retry_config() -> RetryConfig:
    return RetryConfig(initial_delay=0.5, multiplier=1.5, jitter=0.5, max_elapsed=5.0)
