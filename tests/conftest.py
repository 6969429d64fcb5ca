"""Pytest configuration and shared fixtures."""

import logging
import tempfile
from pathlib import Path
from typing import Any, Optional

import pytest

from stackquery.client.services import ServiceEndpoint, ServiceKind
from stackquery.core.exceptions import ErrorKind, RemoteAPIError
from stackquery.tables.descriptor import column, define_table
from stackquery.tables.registry import DescriptorRegistry


class FakeServiceClient:
    """Stand-in for ServiceClient serving canned bodies by path or URL.

    A response that is an exception instance is raised instead of returned.
    Every call is recorded as (path_or_url, params).
    """

    def __init__(self, responses: dict[str, Any], endpoint: Optional[ServiceEndpoint] = None):
        self.endpoint = endpoint or ServiceEndpoint(ServiceKind.NETWORK)
        self.base_url = "https://cloud.example.com:9696"
        self.responses = responses
        self.calls: list[tuple[str, Optional[dict]]] = []
        self.closed = False

    def get_json(self, path_or_url: str, params=None):
        self.calls.append((path_or_url, dict(params) if params else None))
        response = self.responses[path_or_url]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


class FakeSessionFactory:
    """Session factory returning one FakeServiceClient per service kind."""

    def __init__(self, clients: dict[ServiceKind, Any] | None = None):
        self.clients = clients or {}
        self.requested: list[ServiceEndpoint] = []

    def create_client(self, endpoint: ServiceEndpoint):
        self.requested.append(endpoint)
        client = self.clients[endpoint.service]
        if isinstance(client, Exception):
            raise client
        return client


def _not_found(message: str = "HTTP 404 itemNotFound: Resource could not be found.") -> RemoteAPIError:
    return RemoteAPIError(message, kind=ErrorKind.NOT_FOUND, status_code=404)


@pytest.fixture
def make_client():
    """Factory for fake service clients: make_client({path_or_url: body_or_error})."""
    return FakeServiceClient


@pytest.fixture
def make_factory():
    """Factory for fake session factories: make_factory({ServiceKind: client_or_error})."""
    return FakeSessionFactory


@pytest.fixture
def not_found_error():
    """Build the RemoteAPIError a ServiceClient raises for HTTP 404."""
    return _not_found


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by configure_logging during a test."""
    yield
    logging.getLogger("stackquery").handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def widget_descriptor():
    """A small network-service table used across engine tests."""
    return define_table(
        resource_kind="test_widget",
        description="Test widget",
        service=ServiceKind.NETWORK,
        columns=(
            column("id"),
            column("name"),
            column("size", type="int"),
            column("enabled", type="bool", field="admin_state_up"),
            column("zone", field="location.zone"),
            column("tags", type="json"),
        ),
        filterable_columns={
            "id": "id",
            "name": "name",
            "size": "size",
            "enabled": "admin_state_up",
        },
        list_path="/v2.0/widgets",
        get_path="/v2.0/widgets/{id}",
        collection_key="widgets",
        item_key="widget",
    )


@pytest.fixture
def widget_registry(widget_descriptor):
    return DescriptorRegistry([widget_descriptor])


@pytest.fixture
def env_vars(monkeypatch):
    """Set the standard OS_* environment variables."""
    test_vars = {
        "OS_AUTH_URL": "https://keystone.example.com:5000/v3",
        "OS_USERNAME": "admin",
        "OS_PASSWORD": "secret",
        "OS_PROJECT_NAME": "admin",
        "OS_REGION_NAME": "RegionOne",
    }
    for key, value in test_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("OS_TOKEN", raising=False)
    return test_vars
