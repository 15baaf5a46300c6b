"""
Hawk Verifier
=============
Server-side counterpart of the signer: validates a received
``Authorization`` header against the request as it arrived.
"""

import hmac
import time
from typing import Callable, Mapping, Optional, Union

import httpx
import structlog

from ..credentials import Credentials
from .headers import parse_authorization_header
from .models import AuthDecision, BlockReason, SigningContext, VerificationResult
from .nonce_cache import NonceCache
from .signature import MAX_TIMESTAMP_SKEW_SECONDS, check_timestamp_skew, hash_payload, verify_mac
from .signer import DEFAULT_PORTS

logger = structlog.get_logger(__name__)

CredentialsSource = Union[Credentials, Mapping[str, Credentials], Callable[[str], Optional[Credentials]]]


def _block(reason_code: BlockReason, reason: str, client_id: Optional[str] = None) -> VerificationResult:
    return VerificationResult(
        decision=AuthDecision.BLOCK,
        reason=reason,
        reason_code=reason_code,
        client_id=client_id,
    )


class HawkVerifier:
    """
    Verifies Hawk-signed requests.

    ``credentials`` may be a single Credentials, a mapping of client id to
    Credentials, or a callable returning Credentials (or None) for an id.
    """

    def __init__(
        self,
        credentials: CredentialsSource,
        max_skew: int = MAX_TIMESTAMP_SKEW_SECONDS,
        nonce_cache: Optional[NonceCache] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._credentials = credentials
        self.max_skew = max_skew
        self.nonce_cache = nonce_cache if nonce_cache is not None else NonceCache(ttl_seconds=2 * max_skew)
        self._clock = clock

    def _lookup(self, client_id: str) -> Optional[Credentials]:
        source = self._credentials
        if isinstance(source, Credentials):
            return source if source.client_id == client_id else None
        if isinstance(source, Mapping):
            return source.get(client_id)
        return source(client_id)

    def verify(
        self,
        method: str,
        host: str,
        port: int,
        path: str,
        authorization: Optional[str],
        body: Optional[bytes] = None,
        content_type: Optional[str] = None,
    ) -> VerificationResult:
        """
        Verify a received request.

        Args:
            method: HTTP method as received
            host: Host the request was addressed to
            port: Port the request was addressed to
            path: Request path without query string
            authorization: Raw Authorization header value
            body: Received body; when given, the payload hash is checked
            content_type: Received Content-Type, used with ``body``

        Returns:
            VerificationResult with ALLOW or BLOCK decision
        """
        header = parse_authorization_header(authorization or "")
        if header is None:
            return _block(BlockReason.INVALID_HEADER, "Missing or malformed Hawk header")

        credentials = self._lookup(header.id)
        if credentials is None:
            return _block(BlockReason.UNKNOWN_ID, "Unknown client id", header.id)

        context = SigningContext(
            method=method,
            host=host,
            port=port,
            path=path,
            timestamp=header.ts,
            nonce=header.nonce,
            payload_hash=header.hash,
            ext=header.ext,
        )
        if not verify_mac(credentials.key, context, header.mac):
            logger.warning("Hawk MAC mismatch", client_id=header.id, method=method, path=path)
            return _block(BlockReason.INVALID_MAC, "Bad MAC", header.id)

        if body is not None and body != b"":
            expected = hash_payload(content_type or "", body)
            if not header.hash or not hmac.compare_digest(expected.encode("ascii"), header.hash.encode("utf-8")):
                return _block(BlockReason.PAYLOAD_MISMATCH, "Bad payload hash", header.id)

        if not check_timestamp_skew(header.ts, self.max_skew, now=self._clock()):
            return _block(BlockReason.TIMESTAMP_SKEW, "Stale timestamp", header.id)

        if not self.nonce_cache.check_and_store(header.id, header.ts, header.nonce):
            return _block(BlockReason.REPLAY_DETECTED, "Nonce already used", header.id)

        return VerificationResult(decision=AuthDecision.ALLOW, client_id=header.id)

    def verify_request(self, request: httpx.Request) -> VerificationResult:
        """Verify an ``httpx.Request`` as it would arrive at the service."""
        url = request.url
        port = url.port or DEFAULT_PORTS.get(url.scheme, 0)
        path = url.raw_path.decode("ascii").split("?", 1)[0] or "/"
        return self.verify(
            method=request.method,
            host=url.host,
            port=port,
            path=path,
            authorization=request.headers.get("Authorization"),
            body=request.content or None,
            content_type=request.headers.get("Content-Type"),
        )
