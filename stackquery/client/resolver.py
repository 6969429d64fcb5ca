"""Per-request resolution of service clients."""

import logging
from typing import Union

from stackquery.client.http import ServiceClient
from stackquery.client.services import ServiceEndpoint, ServiceKind
from stackquery.client.session import SessionFactory
from stackquery.core.exceptions import (
    ErrorKind,
    RemoteAPIError,
    ResolutionError,
    ResolutionReason,
)

logger = logging.getLogger(__name__)


class ClientResolver:
    """Resolves and caches service clients for one request.

    A resolver is created per scan or get and discarded afterwards; the
    cache is private to it, so no locking is needed.

    Example:
        resolver = ClientResolver(factory)
        client = resolver.resolve("network")
        assert resolver.resolve(ServiceKind.NETWORK) is client
    """

    def __init__(self, factory: SessionFactory, default_region: str = ""):
        self._factory = factory
        self._default_region = default_region
        self._clients: dict[ServiceEndpoint, ServiceClient] = {}

    def resolve(
        self, service: Union[ServiceKind, str], region: str = ""
    ) -> ServiceClient:
        """Return the client for a service and region.

        Args:
            service: Service kind or its string value (e.g. 'compute').
            region: Region name; empty uses the default region.

        Returns:
            The same ServiceClient for repeated identical calls.

        Raises:
            ResolutionError: If the service is unknown, authentication fails
                or the cloud is unreachable. Never retried.
        """
        endpoint = ServiceEndpoint(_coerce_service(service), region or self._default_region)

        client = self._clients.get(endpoint)
        if client is not None:
            return client

        try:
            client = self._factory.create_client(endpoint)
        except ResolutionError:
            logger.error(
                "Error resolving client", extra={"context": {"endpoint": str(endpoint)}}
            )
            raise
        except RemoteAPIError as e:
            reason = (
                ResolutionReason.AUTH_FAILURE
                if e.kind == ErrorKind.AUTH
                else ResolutionReason.NETWORK_UNREACHABLE
            )
            logger.error(
                "Error resolving client",
                extra={"context": {"endpoint": str(endpoint), "reason": reason.value}},
            )
            raise ResolutionError(
                f"Cannot obtain client for {endpoint}: {e.message}",
                reason=reason,
                context={"service": endpoint.service.value, "region": endpoint.region},
            ) from e

        self._clients[endpoint] = client
        return client

    def close(self) -> None:
        """Close every client resolved so far."""
        for client in self._clients.values():
            client.close()
        self._clients.clear()

    def __enter__(self) -> "ClientResolver":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _coerce_service(service: Union[ServiceKind, str]) -> ServiceKind:
    if isinstance(service, ServiceKind):
        return service
    try:
        return ServiceKind(service)
    except ValueError:
        known = ", ".join(kind.value for kind in ServiceKind)
        raise ResolutionError(
            f"Unknown service: '{service}'",
            reason=ResolutionReason.UNKNOWN_SERVICE,
            context={"service": service, "known_services": known},
        ) from None
