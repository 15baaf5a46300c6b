"""
Retry Models
============
Outcome variants and executor states.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import httpx

from ..exceptions import HawkRestError, RetryableError


class ExecutorState(str, Enum):
    """States of one logical call's retry loop."""
    START = "start"
    ATTEMPT = "attempt"
    BACKOFF = "backoff"
    DONE = "done"


@dataclass(frozen=True)
class Success:
    response: httpx.Response


@dataclass(frozen=True)
class RetryableFailure:
    error: RetryableError


@dataclass(frozen=True)
class TerminalFailure:
    error: HawkRestError


Outcome = Union[Success, RetryableFailure, TerminalFailure]


@dataclass(frozen=True)
class TransportResult:
    """What came back from the transport for one attempt: a response or an error."""
    method: str
    url: str
    response: Optional[httpx.Response] = None
    error: Optional[Exception] = None
