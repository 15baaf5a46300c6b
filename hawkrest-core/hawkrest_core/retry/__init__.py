"""
Retry Logic with Exponential Backoff
====================================
Bounded retry loop and response classification.
"""

from .models import (
    ExecutorState,
    Outcome,
    RetryableFailure,
    Success,
    TerminalFailure,
    TransportResult,
)
from .backoff import BackoffState, ExponentialBackoff
from .classifier import classify, response_text
from .executor import RequestExecutor

__all__ = [
    # Models
    "ExecutorState",
    "Outcome",
    "RetryableFailure",
    "Success",
    "TerminalFailure",
    "TransportResult",
    # Backoff
    "BackoffState",
    "ExponentialBackoff",
    # Classification
    "classify",
    "response_text",
    # Executor
    "RequestExecutor",
]
