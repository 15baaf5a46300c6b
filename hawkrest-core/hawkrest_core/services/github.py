"""
Github Service
==============
Repository status and build endpoints (``github/v1``).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..client import Client
from ..credentials import Credentials
from .routes import Route, Service


class RepositoryInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    installed: bool


GITHUB_ROUTES = (
    Route("ping", "GET", "ping", returns="none"),
    Route("github_webhook_consumer", "POST", "github", returns="none"),
    Route(
        "builds",
        "GET",
        "builds",
        query=("continuationToken", "limit", "organization", "repository", "sha"),
    ),
    Route("badge", "GET", "repository/{owner}/{repo}/{branch}/badge.svg", returns="none"),
    Route("repository", "GET", "repository/{owner}/{repo}", response_model=RepositoryInfo),
    Route("latest", "GET", "repository/{owner}/{repo}/{branch}/latest", returns="none"),
    Route("create_status", "POST", "repository/{owner}/{repo}/statuses/{sha}", body=True, returns="none"),
    Route(
        "create_comment",
        "POST",
        "repository/{owner}/{repo}/issues/{number}/comments",
        body=True,
        returns="none",
    ),
)


def github_service(root_url: str, credentials: Optional[Credentials] = None, **client_options) -> Service:
    return Service(Client(root_url, "github", "v1", credentials, **client_options), GITHUB_ROUTES)
