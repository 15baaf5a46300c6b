"""
Hawk Signing
============
Request signing with Hawk MAC authentication, and the matching verifier
with replay protection.
"""

from .models import AuthDecision, BlockReason, HawkHeader, SigningContext, VerificationResult
from .signature import (
    compute_mac,
    hash_payload,
    normalize,
    verify_mac,
    check_timestamp_skew,
    generate_nonce,
    MAX_TIMESTAMP_SKEW_SECONDS,
    SIGNATURE_ALGORITHM,
)
from .headers import format_authorization_header, parse_authorization_header, SCHEME
from .signer import RequestSigner, request_target, sign_request
from .nonce_cache import NonceCache
from .verifier import HawkVerifier

__all__ = [
    # Models
    "AuthDecision",
    "BlockReason",
    "HawkHeader",
    "SigningContext",
    "VerificationResult",
    # Signature
    "compute_mac",
    "hash_payload",
    "normalize",
    "verify_mac",
    "check_timestamp_skew",
    "generate_nonce",
    "MAX_TIMESTAMP_SKEW_SECONDS",
    "SIGNATURE_ALGORITHM",
    # Headers
    "format_authorization_header",
    "parse_authorization_header",
    "SCHEME",
    # Signer
    "RequestSigner",
    "request_target",
    "sign_request",
    # Verification
    "NonceCache",
    "HawkVerifier",
]
