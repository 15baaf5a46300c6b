"""
Retry Backoff
=============
Exponential backoff bounded by a maximum elapsed time.
"""

import random
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..config import RetryConfig


@dataclass
class BackoffState:
    """Mutable state of one call's backoff; never shared between calls."""
    elapsed: float
    next_delay: float
    max_elapsed: float


class ExponentialBackoff:
    """
    Randomized exponential backoff.

    Each delay is ``current * (1 +/- jitter)``; ``current`` grows by
    ``multiplier`` up to ``max_delay``. ``next_backoff`` returns None once
    sleeping for the next delay would overrun ``max_elapsed``.
    """

    def __init__(
        self,
        config: RetryConfig,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self._clock = clock
        self._rng = rng or random.Random()
        self._started_at = clock()
        self.state = BackoffState(
            elapsed=0.0,
            next_delay=config.initial_delay,
            max_elapsed=config.max_elapsed,
        )

    def _randomized(self, interval: float) -> float:
        spread = self.config.jitter * interval
        return interval - spread + self._rng.random() * (2 * spread)

    def next_backoff(self) -> Optional[float]:
        """
        Get the delay before the next attempt.

        Returns:
            Delay in seconds, or None if the retry budget is exhausted
        """
        state = self.state
        state.elapsed = self._clock() - self._started_at

        delay = self._randomized(state.next_delay)
        if state.elapsed + delay > state.max_elapsed:
            return None

        state.next_delay = min(state.next_delay * self.config.multiplier, self.config.max_delay)
        return delay
