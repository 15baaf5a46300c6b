"""
Signature Functions
===================
Hawk MAC and payload hash computation.
"""

import base64
import hashlib
import hmac
import time
import uuid
from typing import Optional

from .models import SigningContext

# Configuration
HEADER_VERSION = "hawk.1.header"
PAYLOAD_VERSION = "hawk.1.payload"
MAX_TIMESTAMP_SKEW_SECONDS = 60
SIGNATURE_ALGORITHM = "sha256"


def normalize(context: SigningContext) -> str:
    """
    Build the normalized string the MAC covers.

    The string covers, newline-terminated and in order:
    - Header version tag
    - Timestamp (Unix epoch seconds)
    - Nonce
    - Upper-cased HTTP method
    - Request path without query string
    - Lower-cased host and port
    - Payload hash (empty when there is no body)
    - ext data (empty when absent)
    """
    fields = [
        HEADER_VERSION,
        str(context.timestamp),
        context.nonce,
        context.method.upper(),
        context.path,
        context.host.lower(),
        str(context.port),
        context.payload_hash or "",
        context.ext or "",
    ]
    return "\n".join(fields) + "\n"


def compute_mac(key: bytes, context: SigningContext) -> str:
    """
    Compute the base64 HMAC-SHA256 of the normalized string.

    Args:
        key: Shared secret
        context: Method, host, port, path, timestamp, nonce and hashes

    Returns:
        Base64-encoded MAC
    """
    digest = hmac.new(
        key,
        normalize(context).encode("utf-8"),
        hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def hash_payload(content_type: str, body: bytes) -> str:
    """
    Compute the Hawk payload hash of a request body.

    Only the media type is hashed; parameters such as charset are dropped.
    """
    media_type = content_type.split(";", 1)[0].strip().lower()
    hasher = hashlib.sha256()
    hasher.update(f"{PAYLOAD_VERSION}\n{media_type}\n".encode("utf-8"))
    hasher.update(body)
    hasher.update(b"\n")
    return base64.b64encode(hasher.digest()).decode("ascii")


def verify_mac(key: bytes, context: SigningContext, provided_mac: str) -> bool:
    """Verify a MAC using constant-time comparison."""
    expected = compute_mac(key, context)
    return hmac.compare_digest(expected.encode("ascii"), provided_mac.encode("ascii", "replace"))


def check_timestamp_skew(
    timestamp: int,
    max_skew: int = MAX_TIMESTAMP_SKEW_SECONDS,
    now: Optional[float] = None,
) -> bool:
    """Check if a timestamp is within the allowed clock skew."""
    current_time = int(now if now is not None else time.time())
    return abs(current_time - timestamp) <= max_skew


def generate_nonce() -> str:
    """Generate a unique nonce for request signing."""
    return uuid.uuid4().hex[:12]
