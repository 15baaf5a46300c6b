"""
Unit Tests for Backoff and Classification
=========================================
"""

import random

import httpx
import pytest

from hawkrest_core.config import RetryConfig
from hawkrest_core.exceptions import (
    AuthenticationError,
    ClientError,
    ConfigurationError,
    NotFoundError,
    ServerError,
    TransportError,
)
from hawkrest_core.retry import (
    ExponentialBackoff,
    RetryableFailure,
    Success,
    TerminalFailure,
    TransportResult,
    classify,
)

URL = "https://tc.example.com/api/queue/v1/ping"


def result_for(response=None, error=None):
    return TransportResult("GET", URL, response=response, error=error)


class TestBackoff:
    """Tests for the exponential backoff policy."""

    def test_delays_grow_exponentially(self, clock):
        config = RetryConfig(initial_delay=0.5, multiplier=2.0, jitter=0.0, max_delay=1.5, max_elapsed=100)
        backoff = ExponentialBackoff(config, clock=clock)

        assert [backoff.next_backoff() for _ in range(4)] == [0.5, 1.0, 1.5, 1.5]

    def test_jitter_bounds(self, clock):
        config = RetryConfig(initial_delay=1.0, multiplier=1.0, jitter=0.5, max_elapsed=100)
        backoff = ExponentialBackoff(config, clock=clock, rng=random.Random(7))

        delays = [backoff.next_backoff() for _ in range(50)]

        assert all(0.5 <= d <= 1.5 for d in delays)
        assert len(set(delays)) > 1

    def test_exhausted_when_delay_overruns_budget(self, clock):
        """No delay is handed out that would pass max_elapsed."""
        config = RetryConfig(initial_delay=0.5, multiplier=1.0, jitter=0.0, max_elapsed=1.0)
        backoff = ExponentialBackoff(config, clock=clock)

        assert backoff.next_backoff() == 0.5
        clock.now = 0.6
        assert backoff.next_backoff() is None
        assert backoff.state.elapsed == pytest.approx(0.6)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial_delay": 0},
            {"max_elapsed": -1},
            {"multiplier": 0.5},
            {"jitter": 1.5},
        ],
    )
    def test_invalid_config(self, kwargs):
        with pytest.raises(ConfigurationError):
            RetryConfig(**kwargs)


class TestClassifier:
    """Tests for mapping transport results to outcomes."""

    @pytest.mark.parametrize("status", [200, 201, 204])
    def test_success(self, status):
        outcome = classify(result_for(httpx.Response(status)))

        assert isinstance(outcome, Success)

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_error_retryable(self, status):
        outcome = classify(result_for(httpx.Response(status, text="overloaded")))

        assert isinstance(outcome, RetryableFailure)
        assert isinstance(outcome.error, ServerError)
        assert outcome.error.status_code == status
        assert outcome.error.details == "overloaded"

    def test_error_message_is_actionable(self):
        """Message names method, URL, status and body."""
        outcome = classify(result_for(httpx.Response(503, text="try later")))
        message = str(outcome.error)

        assert "method: GET" in message
        assert f"url: {URL}" in message
        assert "status: Service Unavailable(503)" in message
        assert 'response: "try later"' in message

    @pytest.mark.parametrize(
        "status,error_type",
        [
            (400, ClientError),
            (401, AuthenticationError),
            (403, AuthenticationError),
            (404, NotFoundError),
            (409, ClientError),
            (302, ClientError),
        ],
    )
    def test_other_statuses_terminal(self, status, error_type):
        outcome = classify(result_for(httpx.Response(status, json={"message": "nope"})))

        assert isinstance(outcome, TerminalFailure)
        assert type(outcome.error) is error_type
        assert outcome.error.status_code == status

    def test_transport_error_retryable(self):
        request = httpx.Request("GET", URL)
        outcome = classify(result_for(error=httpx.ConnectError("connection refused", request=request)))

        assert isinstance(outcome, RetryableFailure)
        assert isinstance(outcome.error, TransportError)
        assert "connection refused" in outcome.error.message

    def test_timeout_retryable(self):
        request = httpx.Request("GET", URL)
        outcome = classify(result_for(error=httpx.ReadTimeout("timed out", request=request)))

        assert isinstance(outcome, RetryableFailure)

    def test_unsupported_protocol_terminal(self):
        request = httpx.Request("GET", URL)
        outcome = classify(result_for(error=httpx.UnsupportedProtocol("gopher", request=request)))

        assert isinstance(outcome, TerminalFailure)
        assert isinstance(outcome.error, TransportError)

    @pytest.mark.parametrize("error_type", [httpx.DecodingError, httpx.TooManyRedirects])
    def test_undecodable_or_looping_terminal(self, error_type):
        request = httpx.Request("GET", URL)
        outcome = classify(result_for(error=error_type("broken", request=request)))

        assert isinstance(outcome, TerminalFailure)
        assert isinstance(outcome.error, TransportError)
        assert error_type.__name__ in outcome.error.message

    def test_unreadable_body_degrades_to_placeholder(self):
        """A body that cannot be read doesn't hide the status error."""
        response = httpx.Response(500, content=iter([b"never read"]))

        outcome = classify(result_for(response))

        assert isinstance(outcome.error, ServerError)
        assert outcome.error.status_code == 500
        assert outcome.error.details.startswith("<unable to read response body")
