"""Keystone v3 authentication and service catalog lookup."""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Protocol, runtime_checkable

import requests
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import RequestException, Timeout

from stackquery.client.http import ServiceClient, build_session, error_message
from stackquery.client.services import CATALOG_TYPES, ServiceEndpoint
from stackquery.core.exceptions import (
    ErrorKind,
    RemoteAPIError,
    ResolutionError,
    ResolutionReason,
)
from stackquery.models.connection_config import ConnectionConfig

logger = logging.getLogger(__name__)

# Re-authenticate when the token is this close to expiring
TOKEN_EXPIRY_MARGIN = timedelta(seconds=60)


@runtime_checkable
class SessionFactory(Protocol):
    """Produces ready-to-use clients for service endpoints."""

    def create_client(self, endpoint: ServiceEndpoint) -> ServiceClient:
        """Return an authenticated client for the endpoint.

        Raises:
            RemoteAPIError: If authentication or the network fails.
            ResolutionError: If the catalog has no matching endpoint.
        """
        ...


class KeystoneSessionFactory:
    """Session factory backed by Keystone v3 password or token auth.

    The token and service catalog are shared by all clients created from
    this factory and refreshed shortly before the token expires.
    """

    def __init__(self, config: ConnectionConfig):
        self._config = config
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self._expires_at: Optional[datetime] = None
        self._catalog: list[dict[str, Any]] = []

    def create_client(self, endpoint: ServiceEndpoint) -> ServiceClient:
        token, catalog = self._authenticated()
        region = endpoint.region or self._config.region
        base_url = find_endpoint_url(
            catalog, endpoint, region=region, interface=self._config.interface
        )
        logger.debug(
            "Resolved service endpoint",
            extra={"context": {"endpoint": str(endpoint), "url": base_url}},
        )
        session = build_session(
            max_retries=self._config.max_retries,
            retry_delay=self._config.retry_delay,
            verify_ssl=self._config.verify_ssl,
        )
        return ServiceClient(
            endpoint, base_url, token, timeout=self._config.timeout, session=session
        )

    def _authenticated(self) -> tuple[str, list[dict[str, Any]]]:
        with self._lock:
            if self._token is None or self._token_expiring():
                self._authenticate()
            return self._token, self._catalog

    def _token_expiring(self) -> bool:
        if self._expires_at is None:
            return False
        return datetime.now(timezone.utc) + TOKEN_EXPIRY_MARGIN >= self._expires_at

    def _authenticate(self) -> None:
        url = f"{self._config.auth_url.rstrip('/')}/auth/tokens"
        context = {"auth_url": self._config.auth_url}
        logger.debug("Requesting Keystone token", extra={"context": context})

        try:
            response = requests.post(
                url,
                json=self._auth_body(),
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
            )
        except (RequestsConnectionError, Timeout) as e:
            raise RemoteAPIError(
                f"Cannot reach identity service: {e}",
                kind=ErrorKind.CONNECTION,
                context=context,
            ) from e
        except RequestException as e:
            raise RemoteAPIError(
                f"Authentication request failed: {e}", context=context
            ) from e

        if response.status_code in (401, 403):
            raise RemoteAPIError(
                f"Authentication failed: {error_message(response)}",
                kind=ErrorKind.AUTH,
                status_code=response.status_code,
                context=context,
            )
        if response.status_code >= 400:
            raise RemoteAPIError(
                f"HTTP {response.status_code} {error_message(response)}",
                status_code=response.status_code,
                context=context,
            )

        token = response.headers.get("X-Subject-Token")
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteAPIError(
                "Identity service returned an invalid body",
                kind=ErrorKind.INVALID_RESPONSE,
                context=context,
            ) from e
        if not token:
            raise RemoteAPIError(
                "Identity service returned no X-Subject-Token header",
                kind=ErrorKind.INVALID_RESPONSE,
                context=context,
            )

        token_info = body.get("token", {})
        self._token = token
        self._catalog = token_info.get("catalog", [])
        self._expires_at = _parse_expiry(token_info.get("expires_at"))

    def _auth_body(self) -> dict[str, Any]:
        config = self._config
        if config.auth_type == "token":
            identity = {
                "methods": ["token"],
                "token": {"id": config.token.get_secret_value()},
            }
        else:
            identity = {
                "methods": ["password"],
                "password": {
                    "user": {
                        "name": config.username,
                        "domain": {"name": config.user_domain_name},
                        "password": config.password.get_secret_value(),
                    }
                },
            }

        auth: dict[str, Any] = {"identity": identity}
        if config.project_id:
            auth["scope"] = {"project": {"id": config.project_id}}
        elif config.project_name:
            auth["scope"] = {
                "project": {
                    "name": config.project_name,
                    "domain": {"name": config.project_domain_name},
                }
            }
        return {"auth": auth}


def find_endpoint_url(
    catalog: list[dict[str, Any]],
    endpoint: ServiceEndpoint,
    region: str = "",
    interface: str = "public",
) -> str:
    """Pick the catalog URL for a service, region and interface.

    An empty region matches the first endpoint with the right interface.

    Raises:
        ResolutionError: If the catalog has no matching endpoint.
    """
    for catalog_type in CATALOG_TYPES[endpoint.service]:
        for service in catalog:
            if service.get("type") != catalog_type:
                continue
            for candidate in service.get("endpoints", []):
                if candidate.get("interface") != interface:
                    continue
                candidate_region = candidate.get("region_id") or candidate.get("region")
                if region and candidate_region != region:
                    continue
                return candidate["url"]

    raise ResolutionError(
        f"No {interface} endpoint for service '{endpoint.service.value}' in catalog",
        reason=ResolutionReason.UNKNOWN_SERVICE,
        context={"service": endpoint.service.value, "region": region or "<any>"},
    )


def _parse_expiry(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
