"""
Request Composer
================
Resolves relative paths against the service base URL and serializes JSON
bodies.
"""

import json
from typing import Any, Optional
from urllib.parse import urlencode, urljoin, urlsplit

import httpx

from ..exceptions import MalformedPath
from .models import ComposedRequest, QueryPairs, RequestDescriptor

JSON_CONTENT_TYPE = "application/json"


def compose_url(base_url: str, path: str, query: Optional[QueryPairs] = None) -> str:
    """
    Join ``path`` under ``base_url`` and append ``query`` pairs in order.

    Args:
        base_url: Absolute service URL ending in "/"
        path: Relative path, must not begin with "/"
        query: Ordered (key, value) pairs; duplicates are kept

    Returns:
        Absolute URL

    Raises:
        MalformedPath: If the path is absolute, escapes the base URL or does
            not form a valid URL
    """
    if path.startswith("/"):
        raise MalformedPath(f"Path {path!r} must not begin with '/'", url=base_url)

    parts = urlsplit(path)
    if parts.scheme or parts.netloc:
        raise MalformedPath(f"Path {path!r} is an absolute URL", url=base_url)
    if parts.fragment:
        raise MalformedPath(f"Path {path!r} must not carry a fragment", url=base_url)

    url = urljoin(base_url, path)
    if not url.startswith(base_url):
        raise MalformedPath(f"Path {path!r} resolves outside of the service", url=url)

    if query:
        encoded = urlencode([(str(k), str(v)) for k, v in query])
        url = f"{url}&{encoded}" if urlsplit(url).query else f"{url}?{encoded}"

    try:
        httpx.URL(url)
    except httpx.InvalidURL as e:
        raise MalformedPath(f"Path {path!r} does not form a valid URL: {e}", url=base_url) from e
    return url


def serialize_body(body: Any) -> bytes:
    return json.dumps(body, separators=(",", ":")).encode("utf-8")


def compose(base_url: str, descriptor: RequestDescriptor) -> ComposedRequest:
    """Build the absolute request for one attempt."""
    url = compose_url(base_url, descriptor.path, descriptor.query)
    if not descriptor.has_body:
        return ComposedRequest(method=descriptor.method, url=url)
    return ComposedRequest(
        method=descriptor.method,
        url=url,
        body=serialize_body(descriptor.body),
        content_type=JSON_CONTENT_TYPE,
    )
