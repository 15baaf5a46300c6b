"""
Service Facades
===============
Route tables for individual services and the facade that dispatches them.
"""

from .routes import Route, Service, snake_case, urlencode_segment
from .auth import AUTH_ROUTES, ClientInfo, CreatedClient, ScopeSet, auth_service
from .github import GITHUB_ROUTES, RepositoryInfo, github_service

__all__ = [
    # Routes
    "Route",
    "Service",
    "snake_case",
    "urlencode_segment",
    # Auth
    "AUTH_ROUTES",
    "ClientInfo",
    "CreatedClient",
    "ScopeSet",
    "auth_service",
    # Github
    "GITHUB_ROUTES",
    "RepositoryInfo",
    "github_service",
]
