"""Unit tests for ServiceClient and its HTTP helpers."""

from unittest.mock import Mock

import pytest
import requests

from stackquery.client.http import ServiceClient, build_session, error_message
from stackquery.client.services import ServiceEndpoint, ServiceKind
from stackquery.core.exceptions import ErrorKind, RemoteAPIError


def _response(status_code=200, body=None, text=""):
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.reason = "Reason"
    response.text = text
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    mock_session = Mock(spec=requests.Session)
    mock_session.headers = {}
    return mock_session


@pytest.fixture
def client(session):
    return ServiceClient(
        ServiceEndpoint(ServiceKind.NETWORK, "RegionOne"),
        "https://neutron.example.com:9696/",
        "token-123",
        timeout=5,
        session=session,
    )


class TestServiceClient:
    def test_sets_token_header(self, client, session):
        assert session.headers["X-Auth-Token"] == "token-123"
        assert client.base_url == "https://neutron.example.com:9696"

    def test_url_for(self, client):
        assert client.url_for("/v2.0/networks") == "https://neutron.example.com:9696/v2.0/networks"
        assert client.url_for("v2.0/ports") == "https://neutron.example.com:9696/v2.0/ports"
        assert client.url_for("https://other/x") == "https://other/x"

    def test_get_json(self, client, session):
        session.get.return_value = _response(body={"networks": []})

        body = client.get_json("/v2.0/networks", params={"name": "web"})

        assert body == {"networks": []}
        session.get.assert_called_once_with(
            "https://neutron.example.com:9696/v2.0/networks",
            params={"name": "web"},
            timeout=5,
        )

    @pytest.mark.parametrize(
        "status,kind",
        [
            (401, ErrorKind.AUTH),
            (403, ErrorKind.AUTH),
            (404, ErrorKind.NOT_FOUND),
            (429, ErrorKind.RATE_LIMITED),
            (400, ErrorKind.PROVIDER),
            (503, ErrorKind.PROVIDER),
        ],
    )
    def test_status_mapping(self, client, session, status, kind):
        session.get.return_value = _response(status, text="failure")

        with pytest.raises(RemoteAPIError) as exc_info:
            client.get_json("/v2.0/networks")

        assert exc_info.value.kind == kind
        assert exc_info.value.status_code == status
        assert exc_info.value.message.startswith(f"HTTP {status}")

    def test_connection_error(self, client, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(RemoteAPIError) as exc_info:
            client.get_json("/v2.0/networks")

        assert exc_info.value.kind == ErrorKind.CONNECTION

    def test_timeout(self, client, session):
        session.get.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(RemoteAPIError) as exc_info:
            client.get_json("/v2.0/networks")

        assert exc_info.value.kind == ErrorKind.CONNECTION

    def test_invalid_json(self, client, session):
        session.get.return_value = _response(200, text="<html>")

        with pytest.raises(RemoteAPIError) as exc_info:
            client.get_json("/v2.0/networks")

        assert exc_info.value.kind == ErrorKind.INVALID_RESPONSE

    def test_close(self, client, session):
        client.close()
        session.close.assert_called_once()


class TestErrorMessage:
    def test_nova_style(self):
        body = {"itemNotFound": {"code": 404, "message": "Instance could not be found."}}
        assert error_message(_response(404, body)) == "itemNotFound: Instance could not be found."

    def test_neutron_style(self):
        body = {"NeutronError": {"type": "NetworkNotFound", "message": "Network x not found."}}
        assert error_message(_response(404, body)) == "NeutronError: NetworkNotFound: Network x not found."

    def test_octavia_style(self):
        assert error_message(_response(404, {"faultstring": "Pool not found"})) == "Pool not found"

    def test_plain_text(self):
        assert error_message(_response(502, text="Bad Gateway\n")) == "Bad Gateway"


def test_build_session():
    session = build_session(max_retries=2, retry_delay=0.5, verify_ssl=False)

    assert session.verify is False
    adapter = session.get_adapter("https://example.com")
    assert adapter.max_retries.total == 2
    assert 503 in adapter.max_retries.status_forcelist
