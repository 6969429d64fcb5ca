"""HTTP client handle for one OpenStack service endpoint."""

import logging
from typing import Any, Mapping, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import RequestException, Timeout
from urllib3.util.retry import Retry

from stackquery.client.services import ServiceEndpoint
from stackquery.core.exceptions import ErrorKind, RemoteAPIError

logger = logging.getLogger(__name__)

_STATUS_KINDS = {
    401: ErrorKind.AUTH,
    403: ErrorKind.AUTH,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMITED,
}


def build_session(
    max_retries: int = 3,
    retry_delay: float = 1.0,
    verify_ssl: bool = True,
) -> requests.Session:
    """Build a requests session with transport-level retries for 5xx.

    Args:
        max_retries: Retries urllib3 performs on 500-504 responses.
        retry_delay: Backoff factor between retries.
        verify_ssl: Whether TLS certificates are verified.

    Returns:
        Configured requests.Session.
    """
    session = requests.Session()
    session.verify = verify_ssl
    session.headers.update({"Accept": "application/json"})

    if max_retries > 0:
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=retry_delay,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

    return session


def error_message(response: requests.Response) -> str:
    """Extract a readable message from an OpenStack error body.

    Services wrap errors differently: Nova uses ``{"itemNotFound": {...}}``,
    Neutron ``{"NeutronError": {...}}``, Keystone ``{"error": {...}}`` and
    Octavia ``{"faultstring": ...}``. The wrapper name is kept in the message
    so ignore substrings such as ``itemNotFound`` can match it.
    """
    try:
        body = response.json()
    except ValueError:
        return (response.text or response.reason or "").strip()[:200]

    if isinstance(body, dict):
        if "faultstring" in body:
            return str(body["faultstring"])
        if len(body) == 1:
            wrapper, detail = next(iter(body.items()))
            if isinstance(detail, dict):
                name = detail.get("type") or detail.get("title")
                prefix = f"{wrapper}: {name}" if name and name != wrapper else wrapper
                return f"{prefix}: {detail.get('message', '')}"
            return f"{wrapper}: {detail}"
    return str(body)[:200]


class ServiceClient:
    """Authenticated handle for one service endpoint.

    Issues GET requests relative to the catalog URL of the service and maps
    failures to RemoteAPIError kinds.
    """

    def __init__(
        self,
        endpoint: ServiceEndpoint,
        base_url: str,
        token: str,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.endpoint = endpoint
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or build_session()
        self._session.headers.update({"X-Auth-Token": token})

    def url_for(self, path_or_url: str) -> str:
        """Resolve a path against the service URL; absolute URLs pass through."""
        if path_or_url.startswith(("http://", "https://")):
            return path_or_url
        if not path_or_url.startswith("/"):
            path_or_url = f"/{path_or_url}"
        return f"{self.base_url}{path_or_url}"

    def get_json(
        self,
        path_or_url: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """GET a resource and decode its JSON body.

        Args:
            path_or_url: Path relative to the service URL, or an absolute URL.
            params: Query string parameters.

        Returns:
            Decoded JSON body.

        Raises:
            RemoteAPIError: If the request fails or the body is not JSON.
        """
        url = self.url_for(path_or_url)
        context = {"service": self.endpoint.service.value, "url": url}

        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except (RequestsConnectionError, Timeout) as e:
            raise RemoteAPIError(
                f"Cannot reach {self.endpoint}: {e}",
                kind=ErrorKind.CONNECTION,
                context=context,
            ) from e
        except RequestException as e:
            raise RemoteAPIError(
                f"Request to {self.endpoint} failed: {e}",
                kind=ErrorKind.PROVIDER,
                context=context,
            ) from e

        if response.status_code >= 400:
            kind = _STATUS_KINDS.get(response.status_code, ErrorKind.PROVIDER)
            raise RemoteAPIError(
                f"HTTP {response.status_code} {error_message(response)}",
                kind=kind,
                status_code=response.status_code,
                context=context,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteAPIError(
                f"Response body is not valid JSON: {e}",
                kind=ErrorKind.INVALID_RESPONSE,
                status_code=response.status_code,
                context=context,
            ) from e

    def close(self) -> None:
        self._session.close()

    def __repr__(self) -> str:
        return f"ServiceClient({self.endpoint}, {self.base_url!r})"
