"""
Unit Tests for Hawk Signing
===========================
Signer, header grammar and verifier.
"""

import base64
import json
from dataclasses import replace

import pytest

from hawkrest_core.credentials import Credentials
from hawkrest_core.exceptions import SigningError
from hawkrest_core.request import ComposedRequest, RequestDescriptor, compose
from hawkrest_core.signing import (
    BlockReason,
    HawkVerifier,
    NonceCache,
    RequestSigner,
    SigningContext,
    compute_mac,
    parse_authorization_header,
    request_target,
    sign_request,
)

BASE = "https://tc.example.com/api/queue/v1/"
NOW = 1704067200


def signed(credentials, method="GET", path="ping", body=None, now=NOW, nonce="n0nce"):
    signer = RequestSigner(credentials, clock=lambda: now, nonce_factory=lambda: nonce)
    return signer.sign(compose(BASE, RequestDescriptor.create(method, path, body=body)))


def verifier_for(credentials, now=NOW):
    return HawkVerifier(credentials, clock=lambda: now)


class TestSignature:
    """Tests for MAC computation."""

    def test_reference_vector(self):
        """MAC matches the published Hawk header example."""
        context = SigningContext(
            method="GET",
            host="example.com",
            port=8000,
            path="/resource/1?b=1&a=2",
            timestamp=1353832234,
            nonce="j4h3g2",
            ext="some-app-ext-data",
        )
        key = b"werxhqb98rpaxn39848xrunpaw3489ruxnpa98w4rxn"

        assert compute_mac(key, context) == "6R4rV5iE+NPoym+WwjeHzjAGXUtLNIxmo1vpMofpLAE="

    def test_request_target_defaults(self):
        """Port falls back to the scheme default; query is dropped."""
        assert request_target("https://tc.example.com/api/x?y=1") == ("tc.example.com", 443, "/api/x")
        assert request_target("http://tc.example.com/api/x") == ("tc.example.com", 80, "/api/x")
        assert request_target("http://localhost:8080/api/x") == ("localhost", 8080, "/api/x")


class TestSigner:
    """Tests for header generation."""

    def test_header_fields(self, credentials):
        """Header carries id, ts, nonce and mac under the Hawk scheme."""
        request = signed(credentials)
        header = request.headers["Authorization"]

        assert header.startswith('Hawk id="clientId", ts="1704067200", nonce="n0nce", mac="')
        parsed = parse_authorization_header(header)
        assert parsed.id == "clientId"
        assert parsed.ts == NOW
        assert parsed.nonce == "n0nce"
        assert parsed.hash is None

    def test_body_adds_payload_hash(self, credentials):
        request = signed(credentials, method="POST", path="task", body={"a": 1})

        parsed = parse_authorization_header(request.headers["Authorization"])
        assert parsed.hash

    def test_fresh_nonce_per_signature(self, credentials):
        """Signing the same request twice never reuses a nonce."""
        signer = RequestSigner(credentials)
        composed = compose(BASE, RequestDescriptor.create("GET", "ping"))

        first = parse_authorization_header(signer.sign(composed).headers["Authorization"])
        second = parse_authorization_header(signer.sign(composed).headers["Authorization"])

        assert first.nonce != second.nonce

    def test_no_credentials_passes_through(self):
        composed = compose(BASE, RequestDescriptor.create("GET", "ping"))

        assert sign_request(composed, None) is composed

    def test_streaming_body_rejected(self, credentials):
        composed = ComposedRequest(method="POST", url=BASE + "x", body=iter([b"chunk"]), content_type="application/json")

        with pytest.raises(SigningError):
            RequestSigner(credentials).sign(composed)

    def test_missing_host_rejected(self, credentials):
        with pytest.raises(SigningError):
            RequestSigner(credentials).sign(ComposedRequest(method="GET", url="file:///tmp/x"))

    def test_unknown_port_rejected(self, credentials):
        with pytest.raises(SigningError):
            RequestSigner(credentials).sign(ComposedRequest(method="GET", url="gopher://tc.example.com/x"))

    def test_quote_in_client_id_rejected(self):
        with pytest.raises(SigningError):
            signed(Credentials('bad"id', "accessToken-0123456789"))

    def test_certificate_carried_in_ext(self):
        """Temporary credentials put their certificate into ext."""
        certificate = {"version": 1, "scopes": ["queue:*"], "seed": "abc"}
        creds = Credentials("tmpClient", "accessToken-0123456789", certificate=json.dumps(certificate))

        parsed = parse_authorization_header(signed(creds).headers["Authorization"])

        assert json.loads(base64.b64decode(parsed.ext)) == {"certificate": certificate}


class TestVerifier:
    """Tests for server-side verification."""

    def test_valid_request_allowed(self, credentials):
        request = signed(credentials).to_httpx()

        result = verifier_for(credentials).verify_request(request)

        assert result.allowed
        assert result.client_id == "clientId"

    def test_valid_request_with_body_allowed(self, credentials):
        request = signed(credentials, method="PUT", path="task/abc", body={"x": [1, 2]}).to_httpx()

        assert verifier_for(credentials).verify_request(request).allowed

    def test_certificate_request_allowed(self):
        creds = Credentials("tmpClient", "accessToken-0123456789", certificate={"version": 1})
        request = signed(creds).to_httpx()

        assert verifier_for(creds).verify_request(request).allowed

    @pytest.mark.parametrize(
        "field,value",
        [
            ("method", "POST"),
            ("path", "/api/queue/v1/other"),
            ("host", "evil.example.com"),
            ("port", 8443),
        ],
    )
    def test_altered_request_rejected(self, credentials, field, value):
        """Changing method, path, host or port invalidates the MAC."""
        header = signed(credentials).headers["Authorization"]
        received = {
            "method": "GET",
            "host": "tc.example.com",
            "port": 443,
            "path": "/api/queue/v1/ping",
        }
        received[field] = value

        result = verifier_for(credentials).verify(authorization=header, **received)

        assert not result.allowed
        assert result.reason_code == BlockReason.INVALID_MAC

    def test_altered_mac_rejected(self, credentials):
        header = parse_authorization_header(signed(credentials).headers["Authorization"])
        forged = f'Hawk id="{header.id}", ts="{header.ts}", nonce="{header.nonce}", mac="AAAA{header.mac[4:]}"'

        result = verifier_for(credentials).verify("GET", "tc.example.com", 443, "/api/queue/v1/ping", forged)

        assert result.reason_code == BlockReason.INVALID_MAC

    def test_wrong_key_rejected(self, credentials):
        request = signed(credentials).to_httpx()
        other = Credentials("clientId", "a-different-access-token")

        assert verifier_for(other).verify_request(request).reason_code == BlockReason.INVALID_MAC

    def test_unknown_client_rejected(self, credentials):
        request = signed(credentials).to_httpx()
        verifier = HawkVerifier({"someoneElse": credentials}, clock=lambda: NOW)

        assert verifier.verify_request(request).reason_code == BlockReason.UNKNOWN_ID

    def test_tampered_body_rejected(self, credentials):
        composed = signed(credentials, method="POST", path="task", body={"a": 1})
        tampered = replace(composed, body=b'{"a":2}')

        result = verifier_for(credentials).verify_request(tampered.to_httpx())

        assert result.reason_code == BlockReason.PAYLOAD_MISMATCH

    def test_stale_timestamp_rejected(self, credentials):
        request = signed(credentials, now=NOW).to_httpx()

        result = verifier_for(credentials, now=NOW + 120).verify_request(request)

        assert result.reason_code == BlockReason.TIMESTAMP_SKEW

    def test_replay_rejected(self, credentials):
        request = signed(credentials).to_httpx()
        verifier = verifier_for(credentials)

        assert verifier.verify_request(request).allowed
        assert verifier.verify_request(request).reason_code == BlockReason.REPLAY_DETECTED

    def test_missing_header_rejected(self, credentials):
        result = verifier_for(credentials).verify("GET", "tc.example.com", 443, "/", None)

        assert result.reason_code == BlockReason.INVALID_HEADER


class TestHeaderParsing:
    """Tests for the Authorization header grammar."""

    def test_wrong_scheme(self):
        assert parse_authorization_header('Bearer id="a", ts="1", nonce="n", mac="m"') is None

    def test_missing_required_field(self):
        assert parse_authorization_header('Hawk id="a", ts="1", nonce="n"') is None

    def test_non_numeric_timestamp(self):
        assert parse_authorization_header('Hawk id="a", ts="soon", nonce="n", mac="m"') is None

    def test_duplicate_attribute(self):
        assert parse_authorization_header('Hawk id="a", id="b", ts="1", nonce="n", mac="m"') is None


class TestNonceCache:
    """Tests for replay protection."""

    def test_nonce_cache_replay_protection(self):
        cache = NonceCache(ttl_seconds=60)

        assert cache.check_and_store("client", NOW, "nonce-1") is True
        assert cache.check_and_store("client", NOW, "nonce-1") is False
        assert cache.check_and_store("client", NOW, "nonce-2") is True
        assert cache.check_and_store("other", NOW, "nonce-1") is True

    def test_expired_entries_dropped(self):
        now = [1000.0]
        cache = NonceCache(ttl_seconds=60, clock=lambda: now[0])
        cache.check_and_store("client", NOW, "nonce-1")

        now[0] += 61

        assert cache.check_and_store("client", NOW, "nonce-1") is True
        assert len(cache) == 1
