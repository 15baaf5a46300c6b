"""
Signing Models
==============
Data models and enums for Hawk signing and verification.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthDecision(str, Enum):
    """Verifier decision types."""
    ALLOW = "ALLOW"
    BLOCK = "BLOCK"


class BlockReason(str, Enum):
    """Reasons for rejecting a signed request."""
    INVALID_HEADER = "invalid_header"
    UNKNOWN_ID = "unknown_id"
    INVALID_MAC = "invalid_mac"
    TIMESTAMP_SKEW = "timestamp_skew"
    REPLAY_DETECTED = "replay_detected"
    PAYLOAD_MISMATCH = "payload_mismatch"


@dataclass(frozen=True)
class SigningContext:
    """Everything the MAC is computed over."""
    method: str
    host: str
    port: int
    path: str
    timestamp: int
    nonce: str
    payload_hash: Optional[str] = None
    ext: Optional[str] = None


@dataclass(frozen=True)
class HawkHeader:
    """Fields of a parsed ``Authorization: Hawk ...`` header."""
    id: str
    ts: int
    nonce: str
    mac: str
    hash: Optional[str] = None
    ext: Optional[str] = None


@dataclass
class VerificationResult:
    """Result of verifying a signed request."""
    decision: AuthDecision
    reason: Optional[str] = None
    reason_code: Optional[BlockReason] = None
    client_id: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.decision == AuthDecision.ALLOW
