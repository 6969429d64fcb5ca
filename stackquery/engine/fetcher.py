"""Get-by-key lookup of a single entity."""

import logging
from typing import Any, Iterable, Optional
from urllib.parse import quote

from stackquery.client.http import ServiceClient
from stackquery.core.exceptions import ErrorKind, FetchError, RemoteAPIError
from stackquery.engine.translator import coerce_value
from stackquery.models.connection_config import DEFAULT_IGNORE_ERROR_SUBSTRINGS
from stackquery.tables.descriptor import EntityDescriptor

logger = logging.getLogger(__name__)


def get_by_key(
    client: ServiceClient,
    descriptor: EntityDescriptor,
    key: Any,
    ignore_errors: Iterable[str] = DEFAULT_IGNORE_ERROR_SUBSTRINGS,
) -> Optional[dict[str, Any]]:
    """Fetch one entity by its key column.

    Args:
        client: Client for the descriptor's service.
        descriptor: Table descriptor; must support get.
        key: Key value; coerced to the key column's type.
        ignore_errors: Error text fragments that mean "resource absent".

    Returns:
        The entity, or None when the resource does not exist (a 404, a
        not-found variant, an ignored error, or a key that cannot be valid
        for the key column's type).

    Raises:
        FetchError: For any other failure. A single attempt is made.
    """
    table = descriptor.resource_kind
    if not descriptor.supports_get:
        raise FetchError(
            f"Table '{table}' does not support lookup by key",
            cause=ValueError("no get endpoint"),
            context={"table": table},
        )

    coerced = coerce_value(key, descriptor.key_type)
    if coerced is None or coerced == "":
        logger.debug(
            "Key cannot exist, no row", extra={"table": table, "context": {"key": key}}
        )
        return None

    path = descriptor.get_path.format(
        **{descriptor.key_column: quote(str(coerced), safe="")}
    )
    try:
        body = client.get_json(path)
    except RemoteAPIError as e:
        if is_not_found(e, ignore_errors):
            logger.debug(
                "No resource found", extra={"table": table, "context": {"key": coerced}}
            )
            return None
        logger.error(
            "Error retrieving resource",
            extra={"table": table, "context": {"key": coerced, "error": e.message}},
        )
        raise FetchError(
            f"Error retrieving {table} '{coerced}': {e.message}",
            cause=e,
            context={"table": table, "key": coerced},
        ) from e

    entity = body
    if descriptor.item_key and isinstance(body, dict):
        entity = body.get(descriptor.item_key)
    if not isinstance(entity, dict):
        raise FetchError(
            f"Unexpected response body for {table} '{coerced}'",
            cause=RemoteAPIError(
                "Unexpected get body",
                kind=ErrorKind.INVALID_RESPONSE,
                context={"item_key": descriptor.item_key},
            ),
            context={"table": table, "key": coerced},
        )
    return entity


def is_not_found(error: RemoteAPIError, ignore_errors: Iterable[str]) -> bool:
    """Whether a remote error means the resource is absent.

    Ignore substrings only apply to HTTP error responses. A connection
    error message embeds the request URL, and with it the key.
    """
    if error.kind == ErrorKind.NOT_FOUND:
        return True
    if error.status_code is None or error.kind == ErrorKind.INVALID_RESPONSE:
        return False
    return any(fragment and fragment in error.message for fragment in ignore_errors)
