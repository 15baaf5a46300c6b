"""
Auth Service
============
Client, role and scope management endpoints (``auth/v1``).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..client import Client
from ..credentials import Credentials
from .routes import Route, Service


class ScopeSet(BaseModel):
    model_config = ConfigDict(extra="allow")

    scopes: List[str] = Field(default_factory=list)


class ClientInfo(BaseModel):
    """Client record as returned by the auth service."""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    client_id: str = Field(alias="clientId")
    description: str = ""
    expires: Optional[datetime] = None
    disabled: bool = False
    scopes: List[str] = Field(default_factory=list)
    expanded_scopes: List[str] = Field(default_factory=list, alias="expandedScopes")


class CreatedClient(ClientInfo):
    access_token: str = Field(alias="accessToken", repr=False)


AUTH_ROUTES = (
    Route("ping", "GET", "ping", returns="none"),
    Route("list_clients", "GET", "clients/", query=("prefix", "continuationToken", "limit")),
    Route("client", "GET", "clients/{clientId}", response_model=ClientInfo),
    Route("create_client", "PUT", "clients/{clientId}", body=True, response_model=CreatedClient),
    Route("update_client", "POST", "clients/{clientId}", body=True, response_model=ClientInfo),
    Route("reset_access_token", "POST", "clients/{clientId}/reset", response_model=CreatedClient),
    Route("enable_client", "POST", "clients/{clientId}/enable", response_model=ClientInfo),
    Route("disable_client", "POST", "clients/{clientId}/disable", response_model=ClientInfo),
    Route("delete_client", "DELETE", "clients/{clientId}", returns="none"),
    Route("list_roles", "GET", "roles/"),
    Route("list_roles2", "GET", "roles2/", query=("continuationToken", "limit")),
    Route("list_role_ids", "GET", "roleids/", query=("continuationToken", "limit")),
    Route("role", "GET", "roles/{roleId}"),
    Route("create_role", "PUT", "roles/{roleId}", body=True),
    Route("update_role", "POST", "roles/{roleId}", body=True),
    Route("delete_role", "DELETE", "roles/{roleId}", returns="none"),
    Route("expand_scopes", "POST", "scopes/expand", body=True, response_model=ScopeSet),
    Route("current_scopes", "GET", "scopes/current", response_model=ScopeSet),
    Route("aws_s3_credentials", "GET", "aws/s3/{level}/{bucket}/{prefix}", query=("format",)),
    Route("azure_accounts", "GET", "azure/accounts"),
    Route("azure_tables", "GET", "azure/{account}/tables", query=("continuationToken",)),
    Route("azure_table_sas", "GET", "azure/{account}/table/{table}/{level}"),
    Route("azure_containers", "GET", "azure/{account}/containers", query=("continuationToken",)),
    Route("azure_container_sas", "GET", "azure/{account}/containers/{container}/{level}"),
    Route("sentry_dsn", "GET", "sentry/{project}/dsn"),
    Route("websocktunnel_token", "GET", "websocktunnel/{wstAudience}/{wstClient}"),
    Route("gcp_credentials", "GET", "gcp/credentials/{projectId}/{serviceAccount}"),
    Route("authenticate_hawk", "POST", "authenticate-hawk", body=True),
    Route("test_authenticate", "POST", "test-authenticate", body=True),
    Route("test_authenticate_get", "GET", "test-authenticate-get/"),
)


def auth_service(root_url: str, credentials: Optional[Credentials] = None, **client_options) -> Service:
    return Service(Client(root_url, "auth", "v1", credentials, **client_options), AUTH_ROUTES)
