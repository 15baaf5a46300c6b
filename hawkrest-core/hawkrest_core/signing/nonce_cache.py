"""
Nonce Cache
===========
In-memory nonce cache for replay protection.
"""

import time
from typing import Callable, Dict, Tuple

import structlog

logger = structlog.get_logger(__name__)


class NonceCache:
    """
    In-memory nonce cache for replay protection.

    Entries live for ``ttl_seconds``, which should match the verifier's
    clock-skew window; older requests are rejected on their timestamp.
    """

    def __init__(self, ttl_seconds: int = 120, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: Dict[Tuple[str, int, str], float] = {}

    def check_and_store(self, client_id: str, timestamp: int, nonce: str) -> bool:
        """
        Check if nonce is fresh and store it.

        Args:
            client_id: Id the request was signed with
            timestamp: Hawk timestamp of the request
            nonce: The nonce to check

        Returns:
            True if nonce is fresh (not seen before)
        """
        self._cleanup()

        key = (client_id, timestamp, nonce)
        if key in self._cache:
            logger.warning("Replay detected", client_id=client_id, nonce=nonce[:8])
            return False

        self._cache[key] = self._clock()
        return True

    def __len__(self) -> int:
        return len(self._cache)

    def _cleanup(self) -> None:
        """Remove expired nonces."""
        current_time = self._clock()
        expired = [
            key for key, ts in self._cache.items()
            if current_time - ts > self.ttl_seconds
        ]
        for key in expired:
            del self._cache[key]
