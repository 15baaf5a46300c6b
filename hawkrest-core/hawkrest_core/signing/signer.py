"""
Request Signer
==============
Attaches a Hawk ``Authorization`` header to a composed request.
"""

import base64
import json
import time
from typing import Callable, Optional, Tuple

import httpx

from ..credentials import Credentials
from ..exceptions import ConfigurationError, SigningError
from ..request.models import ComposedRequest
from .headers import format_authorization_header
from .models import HawkHeader, SigningContext
from .signature import compute_mac, generate_nonce, hash_payload

DEFAULT_PORTS = {"http": 80, "https": 443}


def request_target(url: str) -> Tuple[str, int, str]:
    """
    Extract host, port and path (without query) from an absolute URL.

    The port falls back to the scheme default when not explicit.

    Raises:
        SigningError: If the URL has no host or no known port
    """
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise SigningError(f"Cannot parse request URL: {e}", url=url)

    host = parsed.host
    if not host:
        raise SigningError("The request URL doesn't contain a host", url=url)

    port = parsed.port or DEFAULT_PORTS.get(parsed.scheme)
    if port is None:
        raise SigningError(f"Unknown port for protocol {parsed.scheme!r}", url=url)

    path = parsed.raw_path.decode("ascii").split("?", 1)[0] or "/"
    return host, port, path


def encode_ext(credentials: Credentials) -> Optional[str]:
    """Encode a temporary-credential certificate for the ``ext`` field."""
    try:
        certificate = credentials.certificate_object()
    except ConfigurationError as e:
        raise SigningError(e.message)
    if certificate is None:
        return None
    payload = json.dumps({"certificate": certificate}, separators=(",", ":"))
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


class RequestSigner:
    """
    Signs composed requests with one set of credentials.

    A fresh nonce and timestamp are drawn on every call, so signing the
    same request twice never yields the same header.
    """

    def __init__(
        self,
        credentials: Credentials,
        clock: Callable[[], float] = time.time,
        nonce_factory: Callable[[], str] = generate_nonce,
    ):
        self.credentials = credentials
        self._clock = clock
        self._nonce_factory = nonce_factory

    def sign(self, request: ComposedRequest) -> ComposedRequest:
        host, port, path = request_target(request.url)

        payload_hash = None
        if request.body is not None:
            if not isinstance(request.body, (bytes, bytearray)):
                raise SigningError(
                    "Cannot sign a streaming body; the payload must be buffered",
                    method=request.method,
                    url=request.url,
                )
            payload_hash = hash_payload(request.content_type or "", bytes(request.body))

        context = SigningContext(
            method=request.method,
            host=host,
            port=port,
            path=path,
            timestamp=int(self._clock()),
            nonce=self._nonce_factory(),
            payload_hash=payload_hash,
            ext=encode_ext(self.credentials),
        )
        header = HawkHeader(
            id=self.credentials.client_id,
            ts=context.timestamp,
            nonce=context.nonce,
            mac=compute_mac(self.credentials.key, context),
            hash=payload_hash,
            ext=context.ext,
        )
        return request.with_header("Authorization", format_authorization_header(header))


def sign_request(request: ComposedRequest, credentials: Optional[Credentials]) -> ComposedRequest:
    """Sign ``request`` when credentials are present, otherwise pass it through."""
    if credentials is None:
        return request
    return RequestSigner(credentials).sign(request)
