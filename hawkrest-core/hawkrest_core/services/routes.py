"""
Route Tables
============
Declarative endpoint definitions and the service facade that dispatches
them through ``Client.request``.
"""

import functools
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple, Type
from urllib.parse import quote

from pydantic import BaseModel

from ..client import Client

_PLACEHOLDER = re.compile(r"{(\w+)}")
_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(name: str) -> str:
    """continuationToken -> continuation_token"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def urlencode_segment(value: Any) -> str:
    """Percent-encode one path segment; "." and ".." are encoded so URL resolution keeps them."""
    encoded = quote(str(value), safe="")
    if encoded in (".", ".."):
        return encoded.replace(".", "%2E")
    return encoded


@dataclass(frozen=True)
class Route:
    """One REST endpoint: method, path template, query names and response shape."""
    name: str
    method: str
    path: str
    query: Tuple[str, ...] = ()
    body: bool = False
    returns: str = "json"  # "json" or "none"
    response_model: Optional[Type[BaseModel]] = None

    @property
    def path_params(self) -> Tuple[str, ...]:
        return tuple(_PLACEHOLDER.findall(self.path))

    def expand(self, args: Tuple[Any, ...]) -> str:
        values = dict(zip(self.path_params, args))
        return _PLACEHOLDER.sub(lambda m: urlencode_segment(values[m.group(1)]), self.path)


class Service:
    """
    Facade exposing one coroutine per route.

    Example:
        auth = auth_service("https://tc.example.com", creds)
        scopes = await auth.current_scopes()
        clients = await auth.list_clients(prefix="project/")
    """

    def __init__(self, client: Client, routes: Iterable[Route]):
        self.client = client
        self.routes: Dict[str, Route] = {route.name: route for route in routes}

    async def __aenter__(self) -> "Service":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def __getattr__(self, name: str):
        routes = self.__dict__.get("routes") or {}
        if name in routes:
            return functools.partial(self.call, name)
        raise AttributeError(f"{type(self).__name__} has no route {name!r}")

    async def call(self, name: str, *args: Any, payload: Any = None, **query: Any) -> Any:
        """
        Invoke the route ``name``.

        Positional arguments fill the path placeholders in order; keyword
        arguments are the route's query parameters in snake_case.
        """
        route = self.routes.get(name)
        if route is None:
            raise AttributeError(f"{type(self).__name__} has no route {name!r}")

        if len(args) != len(route.path_params):
            raise TypeError(
                f"{name}() takes {len(route.path_params)} path arguments "
                f"({', '.join(route.path_params) or 'none'}), got {len(args)}"
            )
        if route.body and payload is None:
            raise TypeError(f"{name}() requires a payload")
        if not route.body and payload is not None:
            raise TypeError(f"{name}() does not accept a payload")

        pairs = []
        for wire_name in route.query:
            value = query.pop(snake_case(wire_name), None)
            if value is not None:
                pairs.append((wire_name, str(value)))
        if query:
            raise TypeError(f"{name}() got unexpected query arguments: {', '.join(sorted(query))}")

        path = route.expand(args)
        if route.returns == "none":
            await self.client.request(route.method, path, pairs or None, payload)
            return None
        return await self.client.request_json(
            route.method,
            path,
            pairs or None,
            payload,
            response_model=route.response_model,
        )
