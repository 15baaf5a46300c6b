"""
Response Classifier
===================
Maps a transport result onto an Outcome. Pure: no I/O is performed, the
response body is only read if the transport already buffered it.
"""

import httpx

from ..exceptions import (
    AuthenticationError,
    ClientError,
    NotFoundError,
    ServerError,
    TransportError,
)
from .models import Outcome, RetryableFailure, Success, TerminalFailure, TransportResult

TERMINAL_REQUEST_ERRORS = (
    httpx.UnsupportedProtocol,
    httpx.DecodingError,
    httpx.TooManyRedirects,
)


def response_text(response: httpx.Response) -> str:
    """Body text for diagnostics, or a placeholder when it cannot be read."""
    try:
        return response.text
    except (httpx.ResponseNotRead, httpx.StreamError, UnicodeDecodeError, LookupError) as e:
        return f"<unable to read response body: {type(e).__name__}>"


def classify(result: TransportResult) -> Outcome:
    """
    Classify one attempt.

    - transport error -> RetryableFailure(TransportError)
    - unsupported scheme, undecodable body or redirect loop ->
      TerminalFailure(TransportError); repeating the request cannot help
    - 2xx -> Success
    - 5xx -> RetryableFailure(ServerError)
    - anything else -> TerminalFailure(ClientError)
    """
    if result.error is not None:
        error = TransportError(
            f"Error executing request: {type(result.error).__name__}: {result.error}",
            method=result.method,
            url=result.url,
        )
        if isinstance(result.error, TERMINAL_REQUEST_ERRORS):
            return TerminalFailure(error)
        return RetryableFailure(error)

    response = result.response
    status = response.status_code
    if response.is_success:
        return Success(response)

    kwargs = dict(
        method=result.method,
        url=result.url,
        status_code=status,
        reason=response.reason_phrase or None,
        details=response_text(response),
    )
    if status >= 500:
        return RetryableFailure(ServerError("Server error executing request", **kwargs))
    if status in (401, 403):
        return TerminalFailure(AuthenticationError("Request was not authorized", **kwargs))
    if status == 404:
        return TerminalFailure(NotFoundError("Resource not found", **kwargs))
    return TerminalFailure(ClientError("Error executing request", **kwargs))
