"""End-to-end scans through QueryExecutor with a canned subnet API."""

import pytest

from stackquery.client.services import ServiceKind
from stackquery.core.exceptions import ListError, RemoteAPIError
from stackquery.engine.executor import GetRequest, QueryExecutor, ScanRequest
from stackquery.engine.translator import translate
from stackquery.tables.registry import build_default_registry

BASE = "https://neutron.example.com:9696/v2.0/subnets"


def _subnet(number: int) -> dict:
    return {
        "id": f"subnet-{number}",
        "name": f"web-0{number}",
        "network_id": "net-1",
        "cidr": f"10.0.{number}.0/24",
        "ip_version": 4,
        "enable_dhcp": True,
        "dns_nameservers": [],
    }


def _page(numbers, next_marker=None) -> dict:
    links = [{"rel": "next", "href": f"{BASE}?marker={next_marker}"}] if next_marker else []
    return {"subnets": [_subnet(n) for n in numbers], "subnets_links": links}


@pytest.fixture
def registry():
    return build_default_registry()


@pytest.fixture
def executor_for(registry, make_factory):
    """Build a QueryExecutor whose network service is the given client."""

    def build(client):
        return QueryExecutor(registry, make_factory({ServiceKind.NETWORK: client}))

    return build


def test_three_pages_stream_in_order(make_client, executor_for):
    client = make_client(
        {
            "/v2.0/subnets": _page([1, 2], next_marker="subnet-2"),
            f"{BASE}?marker=subnet-2": _page([3, 4], next_marker="subnet-4"),
            f"{BASE}?marker=subnet-4": _page([5]),
        }
    )
    rows = []

    metrics = executor_for(client).scan(ScanRequest("openstack_subnet", rows.append))

    assert [row["id"] for row in rows] == [f"subnet-{n}" for n in range(1, 6)]
    assert metrics.pages_fetched == 3
    assert rows[0]["cidr"] == "10.0.1.0/24"
    assert rows[0]["dns_nameservers"] is None


def test_error_on_second_page_after_three_rows(make_client, executor_for):
    client = make_client(
        {
            "/v2.0/subnets": _page([1, 2, 3], next_marker="subnet-3"),
            f"{BASE}?marker=subnet-3": RemoteAPIError("HTTP 500 NeutronError: internal"),
        }
    )
    rows = []

    with pytest.raises(ListError) as exc_info:
        executor_for(client).scan(ScanRequest("openstack_subnet", rows.append))

    assert len(rows) == 3
    assert exc_info.value.context["page"] == 2


def test_name_predicate_becomes_filter(registry, make_client, executor_for):
    subnet = registry.get("openstack_subnet")

    options = translate(subnet, {"name": "web-01"})

    assert options.name == "web-01"
    assert all(
        value is None for field, value in options.model_dump().items() if field != "name"
    )

    client = make_client({"/v2.0/subnets": _page([1])})
    rows = []
    executor_for(client).scan(ScanRequest("openstack_subnet", rows.append, {"name": "web-01"}))

    assert client.calls == [("/v2.0/subnets", {"name": "web-01"})]
    assert rows[0]["name"] == "web-01"


def test_get_then_missing(make_client, executor_for):
    client = make_client(
        {
            "/v2.0/subnets/subnet-1": {"subnet": _subnet(1)},
            "/v2.0/subnets/subnet-9": RemoteAPIError(
                "HTTP 404 NeutronError: SubnetNotFound: Subnet subnet-9 could not be found.",
                status_code=404,
            ),
        }
    )
    executor = executor_for(client)

    assert executor.get_row(GetRequest("openstack_subnet", "subnet-1"))["network"] == "net-1"
    assert executor.get_row(GetRequest("openstack_subnet", "subnet-9")) is None
