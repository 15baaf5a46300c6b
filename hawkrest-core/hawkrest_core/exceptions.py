"""
Exceptions
==========
Error taxonomy for the request pipeline.

Fatal conditions (``MalformedPath``, ``SigningError``, ``ClientError``) are
surfaced on the first attempt. ``TransportError`` and ``ServerError`` are
retried until the time budget runs out, after which the caller receives
``RetryBudgetExhausted`` wrapping the last one observed.
"""

from typing import Any, Optional


class HawkRestError(Exception):
    """Base exception for every failure the pipeline reports."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        details: Any = None,
    ):
        self.message = message
        self.method = method
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.details = details
        super().__init__(self._render())

    def _render(self) -> str:
        lines = [self.message]
        if self.method:
            lines.append(f"method: {self.method}")
        if self.url:
            lines.append(f"url: {self.url}")
        if self.status_code is not None:
            lines.append(f"status: {self.reason or 'Unknown error'}({self.status_code})")
        if self.details is not None:
            lines.append(f'response: "{self.details}"')
        return "\n".join(lines)


class ConfigurationError(HawkRestError, ValueError):
    """Raised when a client is constructed from an unusable root URL or tunables."""
    pass


class MalformedPath(HawkRestError, ValueError):
    """Raised when a relative path cannot be resolved under the service base URL."""
    pass


class SigningError(HawkRestError):
    """Raised when a request cannot be signed (no host, no port, streaming body)."""
    pass


class RetryableError(HawkRestError):
    """Common base for failures that may succeed on a later attempt."""
    pass


class TransportError(RetryableError):
    """Raised on connection, TLS or timeout failures."""
    pass


class ServerError(RetryableError):
    """Raised when the service answers with a 5xx status."""
    pass


class ClientError(HawkRestError):
    """Raised for 4xx and any other non-2xx, non-5xx status."""
    pass


class AuthenticationError(ClientError):
    """Raised when the service rejects the credentials (401/403)."""
    pass


class NotFoundError(ClientError):
    """Raised when the requested resource does not exist (404)."""
    pass


class RetryBudgetExhausted(HawkRestError):
    """Raised when retryable failures persist past the maximum elapsed time."""

    def __init__(self, last_error: RetryableError, attempts: int, elapsed: float):
        self.last_error = last_error
        self.attempts = attempts
        self.elapsed = elapsed
        super().__init__(
            f"Giving up after {attempts} attempts in {elapsed:.2f}s: {last_error.message}",
            method=last_error.method,
            url=last_error.url,
            status_code=last_error.status_code,
            reason=last_error.reason,
            details=last_error.details,
        )
