"""Connection configuration model for an OpenStack cloud."""

import os
from typing import Literal, Optional

from pydantic import BaseModel, Field, SecretStr, model_validator

DEFAULT_IGNORE_ERROR_SUBSTRINGS = ["404", "ErrDefault404", "itemNotFound"]


class ConnectionConfig(BaseModel):
    """Configuration for connecting to an OpenStack cloud.

    Covers Keystone v3 authentication, endpoint selection from the
    service catalog, transport settings and the not-found ignore list.
    """

    name: str = Field(default="openstack", description="Connection name")

    # Authentication
    auth_url: str = Field(description="Keystone v3 URL (supports templates)")
    auth_type: Literal["password", "token"] = Field(
        default="password", description="Authentication type"
    )
    username: Optional[str] = Field(
        default=None, description="User name for password auth (supports templates)"
    )
    password: Optional[SecretStr] = Field(
        default=None, description="Password for password auth (supports templates)"
    )
    user_domain_name: str = Field(default="Default", description="User domain name")
    token: Optional[SecretStr] = Field(
        default=None, description="Existing token for token auth (supports templates)"
    )
    project_name: Optional[str] = Field(default=None, description="Project to scope to")
    project_id: Optional[str] = Field(
        default=None, description="Project id to scope to (wins over project_name)"
    )
    project_domain_name: str = Field(
        default="Default", description="Domain of the scoped project"
    )

    # Endpoint selection
    region: str = Field(
        default="", description="Default region; empty picks the first catalog match"
    )
    interface: Literal["public", "internal", "admin"] = Field(
        default="public", description="Catalog endpoint interface"
    )

    # Transport
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    timeout: int = Field(default=30, description="Request timeout in seconds", ge=1)
    max_retries: int = Field(
        default=3, description="Transport retries for 5xx responses", ge=0
    )
    retry_delay: float = Field(
        default=1.0, description="Backoff factor for transport retries", ge=0.0
    )
    page_size: Optional[int] = Field(
        default=None, description="Page size sent as 'limit' on paginated lists", ge=1
    )

    # Error handling
    ignore_error_substrings: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_ERROR_SUBSTRINGS),
        description="Error text fragments treated as 'resource absent' on get",
    )
    table_ignore_errors: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Extra ignore substrings keyed by table name",
    )

    @model_validator(mode="after")
    def validate_auth_fields(self):
        """Validate authentication fields based on auth_type."""
        if self.auth_type == "password":
            if not self.username:
                raise ValueError("username is required when auth_type is 'password'")
            if not self.password:
                raise ValueError("password is required when auth_type is 'password'")
        if self.auth_type == "token" and not self.token:
            raise ValueError("token is required when auth_type is 'token'")
        return self

    def ignore_errors_for(self, resource_kind: str) -> list[str]:
        """Return the ignore substrings that apply to a table."""
        extra = self.table_ignore_errors.get(resource_kind, [])
        return [*self.ignore_error_substrings, *extra]

    @classmethod
    def from_env(cls, name: str = "openstack") -> "ConnectionConfig":
        """Build a configuration from the standard OS_* environment variables."""
        env = os.environ
        values = {
            "name": name,
            "auth_url": env.get("OS_AUTH_URL", ""),
            "username": env.get("OS_USERNAME"),
            "password": env.get("OS_PASSWORD"),
            "user_domain_name": env.get("OS_USER_DOMAIN_NAME", "Default"),
            "project_name": env.get("OS_PROJECT_NAME"),
            "project_id": env.get("OS_PROJECT_ID"),
            "project_domain_name": env.get("OS_PROJECT_DOMAIN_NAME", "Default"),
            "region": env.get("OS_REGION_NAME", ""),
            "interface": env.get("OS_INTERFACE", "public"),
        }
        if env.get("OS_TOKEN"):
            values["auth_type"] = "token"
            values["token"] = env["OS_TOKEN"]
        return cls(**values)
