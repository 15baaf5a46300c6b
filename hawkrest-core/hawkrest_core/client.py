"""
Service Client
==============
Entry point for calling one service of a deployment.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel

from .config import ClientConfig, RetryConfig
from .credentials import Credentials
from .exceptions import HawkRestError
from .request.models import QueryPairs, RequestDescriptor
from .retry.executor import RequestExecutor
from .retry.models import Outcome, Success
from .signing.signer import RequestSigner

# Generic type for Pydantic models
T = TypeVar("T", bound=BaseModel)


class Client:
    """
    Async client for ``<root_url>/api/<service_name>/<version>/``.

    Features:
    - Hawk signing when credentials are given, plain requests otherwise.
    - Automatic retries on network errors and 5xx responses, bounded by
      ``RetryConfig.max_elapsed``.
    - Connection pooling (via httpx.AsyncClient), safe for concurrent calls.
    - Typed exceptions for every failure.

    Example:
        async with Client("https://tc.example.com", "queue", "v1", creds) as client:
            response = await client.request("GET", "ping")
    """

    def __init__(
        self,
        root_url: str,
        service_name: str,
        version: str,
        credentials: Optional[Credentials] = None,
        *,
        retry: Optional[RetryConfig] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        overrides = {}
        if retry is not None:
            overrides["retry"] = retry
        if timeout is not None:
            overrides["timeout"] = timeout
        self.config = ClientConfig.for_service(root_url, service_name, version, credentials, **overrides)
        self.service_name = service_name

        self._http = httpx.AsyncClient(
            timeout=self.config.timeout,
            headers={
                "User-Agent": self.config.user_agent,
                "Accept": "application/json",
            },
            transport=transport,
        )
        # Checked once here; the executor signs only when a signer exists.
        signer = RequestSigner(credentials) if credentials is not None else None
        self._executor = RequestExecutor(
            self.config.base_url,
            self._http,
            signer=signer,
            retry=self.config.retry,
            sleep=sleep,
            clock=clock,
        )

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def credentials(self) -> Optional[Credentials]:
        return self.config.credentials

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def execute(
        self,
        method: str,
        path: str,
        query: Optional[QueryPairs] = None,
        body: Any = None,
    ) -> Outcome:
        """Run the request and return its Outcome without raising."""
        return await self._executor.execute(RequestDescriptor.create(method, path, query, body))

    async def request(
        self,
        method: str,
        path: str,
        query: Optional[QueryPairs] = None,
        body: Any = None,
    ) -> httpx.Response:
        """
        Make a request to the service.

        The ``path`` argument is relative to the service base URL and must
        not begin with "/".

        Raises:
            HawkRestError: The terminal error of the call
        """
        outcome = await self.execute(method, path, query, body)
        if isinstance(outcome, Success):
            return outcome.response
        raise outcome.error

    async def request_json(
        self,
        method: str,
        path: str,
        query: Optional[QueryPairs] = None,
        body: Any = None,
        response_model: Optional[Type[T]] = None,
    ) -> Union[T, Any]:
        """Make a request and decode its JSON body (None for an empty body)."""
        response = await self.request(method, path, query, body)
        if not response.content:
            return None
        try:
            data = response.json()
        except ValueError as e:
            raise HawkRestError(
                f"Response is not valid JSON: {e}",
                method=method.upper(),
                url=str(response.request.url),
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
        if response_model:
            return response_model.model_validate(data)
        return data
