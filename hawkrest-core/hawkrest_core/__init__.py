"""
hawkrest-core
=============
Hawk-authenticated request pipeline for generated REST API clients.
"""

__version__ = "0.1.0"

# Client
from hawkrest_core.client import Client

# Configuration
from hawkrest_core.config import ClientConfig, RetryConfig, build_base_url
from hawkrest_core.credentials import Credentials

# Exceptions
from hawkrest_core.exceptions import (
    HawkRestError,
    ConfigurationError,
    MalformedPath,
    SigningError,
    RetryableError,
    TransportError,
    ServerError,
    ClientError,
    AuthenticationError,
    NotFoundError,
    RetryBudgetExhausted,
)

# Request composition
from hawkrest_core.request import ComposedRequest, RequestDescriptor, compose, compose_url

# Signing
from hawkrest_core.signing import (
    RequestSigner,
    HawkVerifier,
    NonceCache,
    AuthDecision,
    BlockReason,
    VerificationResult,
    parse_authorization_header,
)

# Retry
from hawkrest_core.retry import (
    ExponentialBackoff,
    RequestExecutor,
    Success,
    RetryableFailure,
    TerminalFailure,
    Outcome,
    classify,
)

# Services
from hawkrest_core.services import (
    Route,
    Service,
    AUTH_ROUTES,
    GITHUB_ROUTES,
    auth_service,
    github_service,
)

# Logging
from hawkrest_core.logging_setup import configure_logging

__all__ = [
    # Client
    "Client",
    # Configuration
    "ClientConfig",
    "RetryConfig",
    "build_base_url",
    "Credentials",
    # Exceptions
    "HawkRestError",
    "ConfigurationError",
    "MalformedPath",
    "SigningError",
    "RetryableError",
    "TransportError",
    "ServerError",
    "ClientError",
    "AuthenticationError",
    "NotFoundError",
    "RetryBudgetExhausted",
    # Request composition
    "ComposedRequest",
    "RequestDescriptor",
    "compose",
    "compose_url",
    # Signing
    "RequestSigner",
    "HawkVerifier",
    "NonceCache",
    "AuthDecision",
    "BlockReason",
    "VerificationResult",
    "parse_authorization_header",
    # Retry
    "ExponentialBackoff",
    "RequestExecutor",
    "Success",
    "RetryableFailure",
    "TerminalFailure",
    "Outcome",
    "classify",
    # Services
    "Route",
    "Service",
    "AUTH_ROUTES",
    "GITHUB_ROUTES",
    "auth_service",
    "github_service",
    # Logging
    "configure_logging",
]
