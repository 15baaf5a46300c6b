"""
Client Configuration
====================
Immutable configuration shared by every request issued from one client.
"""

import os
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlsplit

from .credentials import Credentials
from .exceptions import ConfigurationError

DEFAULT_USER_AGENT = "hawkrest-core/0.1.0"


@dataclass(frozen=True)
class RetryConfig:
    """Backoff tunables for the retry loop."""
    initial_delay: float = float(os.environ.get("HAWKREST_RETRY_INITIAL_DELAY", "0.5"))
    multiplier: float = 1.5
    jitter: float = 0.5                # randomization factor, delay * (1 +/- jitter)
    max_delay: float = 60.0
    max_elapsed: float = float(os.environ.get("HAWKREST_RETRY_MAX_ELAPSED", "5.0"))

    def __post_init__(self):
        if self.initial_delay <= 0:
            raise ConfigurationError(f"initial_delay must be positive, got {self.initial_delay}")
        if self.max_elapsed <= 0:
            raise ConfigurationError(f"max_elapsed must be positive, got {self.max_elapsed}")
        if self.multiplier < 1:
            raise ConfigurationError(f"multiplier must be at least 1, got {self.multiplier}")
        if not 0 <= self.jitter <= 1:
            raise ConfigurationError(f"jitter must be within [0, 1], got {self.jitter}")


def build_base_url(root_url: str, service_name: str, version: str) -> str:
    """
    Compose ``<root>/api/<service>/<version>/`` from a deployment root URL.

    Trailing slashes on the root are ignored; a path prefix is kept.
    """
    parts = urlsplit(root_url)
    if not parts.scheme or not parts.netloc:
        raise ConfigurationError(f"Root URL {root_url!r} is not an absolute URL")
    if parts.query or parts.fragment:
        raise ConfigurationError(f"Root URL {root_url!r} must not carry a query or fragment")
    return f"{root_url.rstrip('/')}/api/{service_name}/{version}/"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for one service client."""
    base_url: str
    credentials: Optional[Credentials] = None
    timeout: float = float(os.environ.get("HAWKREST_HTTP_TIMEOUT", "30.0"))
    user_agent: str = DEFAULT_USER_AGENT
    retry: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self):
        if not self.base_url.endswith("/"):
            raise ConfigurationError(f"Base URL {self.base_url!r} must end with '/'")

    @classmethod
    def for_service(
        cls,
        root_url: str,
        service_name: str,
        version: str,
        credentials: Optional[Credentials] = None,
        **overrides,
    ) -> "ClientConfig":
        return cls(
            base_url=build_base_url(root_url, service_name, version),
            credentials=credentials,
            **overrides,
        )
