"""Unit tests for per-request client resolution."""

import pytest

from stackquery.client.resolver import ClientResolver
from stackquery.client.services import ServiceEndpoint, ServiceKind
from stackquery.core.exceptions import (
    ErrorKind,
    RemoteAPIError,
    ResolutionError,
    ResolutionReason,
)


@pytest.fixture
def network_client(make_client):
    return make_client({})


def test_resolve_caches_per_endpoint(network_client, make_factory):
    factory = make_factory({ServiceKind.NETWORK: network_client})
    resolver = ClientResolver(factory)

    first = resolver.resolve(ServiceKind.NETWORK)
    second = resolver.resolve("network")

    assert first is second is network_client
    assert factory.requested == [ServiceEndpoint(ServiceKind.NETWORK)]


def test_regions_are_cached_separately(network_client, make_factory):
    factory = make_factory({ServiceKind.NETWORK: network_client})
    resolver = ClientResolver(factory, default_region="RegionOne")

    resolver.resolve(ServiceKind.NETWORK)
    resolver.resolve(ServiceKind.NETWORK, "RegionTwo")
    resolver.resolve(ServiceKind.NETWORK, "RegionOne")

    assert factory.requested == [
        ServiceEndpoint(ServiceKind.NETWORK, "RegionOne"),
        ServiceEndpoint(ServiceKind.NETWORK, "RegionTwo"),
    ]


def test_unknown_service(make_factory):
    with pytest.raises(ResolutionError) as exc_info:
        ClientResolver(make_factory()).resolve("object-store")

    assert exc_info.value.reason == ResolutionReason.UNKNOWN_SERVICE


@pytest.mark.parametrize(
    "kind,reason",
    [
        (ErrorKind.AUTH, ResolutionReason.AUTH_FAILURE),
        (ErrorKind.CONNECTION, ResolutionReason.NETWORK_UNREACHABLE),
        (ErrorKind.PROVIDER, ResolutionReason.NETWORK_UNREACHABLE),
    ],
)
def test_factory_errors_are_mapped(kind, reason, make_factory):
    factory = make_factory({ServiceKind.COMPUTE: RemoteAPIError("failed", kind=kind)})

    with pytest.raises(ResolutionError) as exc_info:
        ClientResolver(factory).resolve(ServiceKind.COMPUTE)

    assert exc_info.value.reason == reason
    assert isinstance(exc_info.value.__cause__, RemoteAPIError)


def test_resolution_error_passes_through(make_factory):
    error = ResolutionError("no endpoint", reason=ResolutionReason.UNKNOWN_SERVICE)
    factory = make_factory({ServiceKind.IMAGE: error})

    with pytest.raises(ResolutionError) as exc_info:
        ClientResolver(factory).resolve(ServiceKind.IMAGE)

    assert exc_info.value is error


def test_failures_are_not_cached(network_client, make_factory):
    factory = make_factory({ServiceKind.NETWORK: RemoteAPIError("down", kind=ErrorKind.CONNECTION)})
    resolver = ClientResolver(factory)

    with pytest.raises(ResolutionError):
        resolver.resolve(ServiceKind.NETWORK)
    factory.clients[ServiceKind.NETWORK] = network_client

    assert resolver.resolve(ServiceKind.NETWORK) is network_client


def test_context_manager_closes_clients(network_client, make_factory):
    factory = make_factory({ServiceKind.NETWORK: network_client})

    with ClientResolver(factory) as resolver:
        resolver.resolve(ServiceKind.NETWORK)

    assert network_client.closed
