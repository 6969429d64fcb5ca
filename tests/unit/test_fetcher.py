"""Unit tests for get-by-key lookups."""

from unittest.mock import Mock

import pytest
import requests

from stackquery.client.http import ServiceClient
from stackquery.client.services import ServiceEndpoint, ServiceKind
from stackquery.core.exceptions import ErrorKind, FetchError, RemoteAPIError
from stackquery.engine.fetcher import get_by_key, is_not_found
from stackquery.tables.registry import build_default_registry


class TestGetByKey:
    def test_unwraps_item_key(self, widget_descriptor, make_client):
        client = make_client({"/v2.0/widgets/w-1": {"widget": {"id": "w-1", "name": "a"}}})

        entity = get_by_key(client, widget_descriptor, "w-1")

        assert entity == {"id": "w-1", "name": "a"}
        assert client.calls == [("/v2.0/widgets/w-1", None)]

    def test_unwrapped_body(self, make_client):
        image = build_default_registry().get("openstack_image")
        client = make_client({"/v2/images/img-1": {"id": "img-1", "name": "cirros"}})

        assert get_by_key(client, image, "img-1")["name"] == "cirros"

    def test_not_found_is_none(self, widget_descriptor, make_client, not_found_error):
        client = make_client({"/v2.0/widgets/w-9": not_found_error()})

        assert get_by_key(client, widget_descriptor, "w-9") is None

    def test_ignore_list_match_is_none(self, widget_descriptor, make_client):
        error = RemoteAPIError("HTTP 400 ErrDefault404 bad request", status_code=400)
        client = make_client({"/v2.0/widgets/w-9": error})

        assert get_by_key(client, widget_descriptor, "w-9") is None

    def test_custom_ignore_list(self, widget_descriptor, make_client):
        error = RemoteAPIError("HTTP 409 WidgetGone", status_code=409)
        client = make_client({"/v2.0/widgets/w-9": error})

        assert get_by_key(client, widget_descriptor, "w-9", ignore_errors=["WidgetGone"]) is None
        with pytest.raises(FetchError):
            get_by_key(client, widget_descriptor, "w-9", ignore_errors=[])

    def test_auth_failure_raises(self, widget_descriptor, make_client):
        error = RemoteAPIError("HTTP 401 Unauthorized", kind=ErrorKind.AUTH, status_code=401)
        client = make_client({"/v2.0/widgets/w-1": error})

        with pytest.raises(FetchError) as exc_info:
            get_by_key(client, widget_descriptor, "w-1")

        assert exc_info.value.cause is error
        assert len(client.calls) == 1

    def test_connection_error_mentioning_404_raises(self, widget_descriptor, make_client):
        key = "3f2a4045-9c1e-4b7d-8e0f-1a2b3c4d5e6f"
        error = RemoteAPIError(
            f"Cannot reach network@RegionOne: HTTPConnectionPool(host='rack404', port=14040): "
            f"Max retries exceeded with url: /v2.0/widgets/{key}",
            kind=ErrorKind.CONNECTION,
        )
        client = make_client({f"/v2.0/widgets/{key}": error})

        with pytest.raises(FetchError) as exc_info:
            get_by_key(client, widget_descriptor, key)

        assert exc_info.value.cause.kind == ErrorKind.CONNECTION

    def test_unreachable_service_client_raises(self, widget_descriptor):
        session = Mock(spec=requests.Session)
        session.headers = {}
        session.get.side_effect = requests.exceptions.ConnectionError(
            "HTTPConnectionPool(host='127.0.0.1', port=14040): Max retries exceeded"
        )
        client = ServiceClient(
            ServiceEndpoint(ServiceKind.NETWORK), "http://127.0.0.1:14040", "token", session=session
        )

        with pytest.raises(FetchError):
            get_by_key(client, widget_descriptor, "4040-404")

    def test_key_is_url_quoted(self, widget_descriptor, make_client):
        client = make_client({"/v2.0/widgets/a%2Fb": {"widget": {"id": "a/b"}}})

        assert get_by_key(client, widget_descriptor, "a/b") == {"id": "a/b"}

    def test_empty_key_is_none(self, widget_descriptor, make_client):
        client = make_client({})

        assert get_by_key(client, widget_descriptor, "") is None
        assert client.calls == []

    def test_int_key_coercion(self, make_client):
        aggregate = build_default_registry().get("openstack_aggregate")
        client = make_client({"/os-aggregates/3": {"aggregate": {"id": 3}}})

        assert get_by_key(client, aggregate, "3") == {"id": 3}
        assert get_by_key(client, aggregate, "three") is None

    def test_table_without_get(self, make_client):
        member = build_default_registry().get("openstack_pool_member")

        with pytest.raises(FetchError, match="does not support lookup"):
            get_by_key(make_client({}), member, "m-1")

    def test_unexpected_body(self, widget_descriptor, make_client):
        client = make_client({"/v2.0/widgets/w-1": {"gadget": {}}})

        with pytest.raises(FetchError) as exc_info:
            get_by_key(client, widget_descriptor, "w-1")

        assert exc_info.value.cause.kind == ErrorKind.INVALID_RESPONSE


def test_is_not_found(not_found_error):
    assert is_not_found(not_found_error("HTTP 404"), [])
    assert is_not_found(RemoteAPIError("HTTP 400 itemNotFound: gone", status_code=400), ["itemNotFound"])
    assert not is_not_found(RemoteAPIError("HTTP 500", status_code=500), ["itemNotFound", ""])


def test_ignore_substrings_need_an_http_response():
    connection_error = RemoteAPIError("Cannot reach http://rack404:9696", kind=ErrorKind.CONNECTION)
    invalid_body = RemoteAPIError(
        "Response body is not valid JSON: column 404", kind=ErrorKind.INVALID_RESPONSE, status_code=200
    )

    assert not is_not_found(connection_error, ["404"])
    assert not is_not_found(invalid_body, ["404"])
