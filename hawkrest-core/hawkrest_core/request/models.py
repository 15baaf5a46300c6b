"""
Request Models
==============
Per-call request description and its composed, ready-to-send form.
"""

from dataclasses import dataclass, field, replace
from typing import Any, AsyncIterable, Dict, Iterable, Optional, Sequence, Tuple, Union

import httpx

QueryPairs = Sequence[Tuple[str, str]]
Body = Union[bytes, Iterable[bytes], AsyncIterable[bytes]]

_NO_BODY = object()


@dataclass(frozen=True)
class RequestDescriptor:
    """What the caller asked for; re-composed on every attempt."""
    method: str
    path: str
    query: Optional[QueryPairs] = None
    body: Any = _NO_BODY

    @property
    def has_body(self) -> bool:
        return self.body is not _NO_BODY

    @classmethod
    def create(
        cls,
        method: str,
        path: str,
        query: Optional[QueryPairs] = None,
        body: Any = None,
    ) -> "RequestDescriptor":
        """Build a descriptor, treating ``body=None`` as "no body"."""
        if body is None:
            return cls(method=method.upper(), path=path, query=query)
        return cls(method=method.upper(), path=path, query=query, body=body)


@dataclass(frozen=True)
class ComposedRequest:
    """Absolute URL, serialized payload and headers for one attempt."""
    method: str
    url: str
    body: Optional[Body] = None
    content_type: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def with_header(self, name: str, value: str) -> "ComposedRequest":
        headers = dict(self.headers)
        headers[name] = value
        return replace(self, headers=headers)

    def to_httpx(self) -> httpx.Request:
        headers = dict(self.headers)
        if self.content_type:
            headers["Content-Type"] = self.content_type
        return httpx.Request(self.method, self.url, content=self.body, headers=headers)
