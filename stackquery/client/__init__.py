"""Service clients, authentication and per-request client resolution."""

from stackquery.client.http import ServiceClient, build_session
from stackquery.client.resolver import ClientResolver
from stackquery.client.services import CATALOG_TYPES, ServiceEndpoint, ServiceKind
from stackquery.client.session import (
    KeystoneSessionFactory,
    SessionFactory,
    find_endpoint_url,
)

__all__ = [
    "CATALOG_TYPES",
    "ClientResolver",
    "KeystoneSessionFactory",
    "ServiceClient",
    "ServiceEndpoint",
    "ServiceKind",
    "SessionFactory",
    "build_session",
    "find_endpoint_url",
]
