"""
Retry Executor
==============
Runs one logical call: compose, sign, send, classify, back off, repeat.
"""

import asyncio
import time
import uuid
from typing import Awaitable, Callable, Optional

import httpx
import structlog

from ..config import RetryConfig
from ..exceptions import MalformedPath, RetryBudgetExhausted, SigningError
from ..request.composer import compose
from ..request.models import RequestDescriptor
from ..signing.signer import RequestSigner
from .backoff import ExponentialBackoff
from .classifier import classify
from .models import (
    ExecutorState,
    Outcome,
    RetryableFailure,
    Success,
    TerminalFailure,
    TransportResult,
)

logger = structlog.get_logger(__name__)


class RequestExecutor:
    """
    Drives the START -> ATTEMPT -> BACKOFF -> DONE loop for each call.

    The executor holds no per-call state; every ``execute`` owns its own
    backoff, so one executor serves any number of concurrent calls.

    Example:
        executor = RequestExecutor(base_url, http_client, signer, RetryConfig())
        outcome = await executor.execute(RequestDescriptor.create("GET", "ping"))
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.AsyncClient,
        signer: Optional[RequestSigner] = None,
        retry: Optional[RetryConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.base_url = base_url
        self._http = http_client
        self._signer = signer
        self.retry = retry or RetryConfig()
        self._sleep = sleep
        self._clock = clock

    async def _attempt(self, descriptor: RequestDescriptor) -> Outcome:
        # Signing embeds a nonce and timestamp, so each attempt is rebuilt.
        try:
            composed = compose(self.base_url, descriptor)
            if self._signer is not None:
                composed = self._signer.sign(composed)
        except (MalformedPath, SigningError) as e:
            return TerminalFailure(e)

        try:
            response = await self._http.send(composed.to_httpx())
        except httpx.RequestError as e:
            return classify(TransportResult(composed.method, composed.url, error=e))
        return classify(TransportResult(composed.method, composed.url, response=response))

    async def execute(self, descriptor: RequestDescriptor) -> Outcome:
        """
        Execute a request with bounded retry.

        Returns:
            Success, or TerminalFailure carrying the error to surface
        """
        state = ExecutorState.START
        backoff = None
        outcome: Optional[Outcome] = None
        attempts = 0

        with structlog.contextvars.bound_contextvars(
            call_id=uuid.uuid4().hex[:12],
            method=descriptor.method,
            path=descriptor.path,
        ):
            while state is not ExecutorState.DONE:
                if state is ExecutorState.START:
                    backoff = ExponentialBackoff(self.retry, clock=self._clock)
                    state = ExecutorState.ATTEMPT

                elif state is ExecutorState.ATTEMPT:
                    attempts += 1
                    outcome = await self._attempt(descriptor)
                    if isinstance(outcome, RetryableFailure):
                        state = ExecutorState.BACKOFF
                    else:
                        state = ExecutorState.DONE

                elif state is ExecutorState.BACKOFF:
                    delay = backoff.next_backoff()
                    if delay is None:
                        exhausted = RetryBudgetExhausted(outcome.error, attempts, backoff.state.elapsed)
                        logger.error(
                            "request.exhausted",
                            attempts=attempts,
                            elapsed=round(backoff.state.elapsed, 3),
                            error=outcome.error.message,
                            status=outcome.error.status_code,
                        )
                        outcome = TerminalFailure(exhausted)
                        state = ExecutorState.DONE
                    else:
                        logger.warning(
                            "request.retry",
                            attempt=attempts,
                            delay=round(delay, 3),
                            error=outcome.error.message,
                            status=outcome.error.status_code,
                        )
                        await self._sleep(delay)
                        state = ExecutorState.ATTEMPT

            if isinstance(outcome, Success):
                logger.debug("request.succeeded", attempts=attempts, status=outcome.response.status_code)
            elif not isinstance(outcome.error, RetryBudgetExhausted):
                logger.info(
                    "request.failed",
                    attempts=attempts,
                    error=type(outcome.error).__name__,
                    status=outcome.error.status_code,
                )
        return outcome
