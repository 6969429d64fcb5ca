"""Lazy, page-by-page listing of remote entities."""

import logging
from typing import Any, Callable, Iterator, Optional
from urllib.parse import quote

from pydantic import BaseModel

from stackquery.client.http import ServiceClient
from stackquery.core.exceptions import ErrorKind, ListError, RemoteAPIError
from stackquery.engine.translator import to_query_params
from stackquery.tables.descriptor import EntityDescriptor

logger = logging.getLogger(__name__)

Entity = dict[str, Any]


def list_entities(
    client: ServiceClient,
    descriptor: EntityDescriptor,
    options: BaseModel,
    page_size: Optional[int] = None,
    on_page: Optional[Callable[[int], None]] = None,
) -> Iterator[Entity]:
    """List every entity matching the filter options, one page at a time.

    This is a generator: no request is made until the first entity is
    requested, and the next page is only fetched once the consumer has
    taken every entity of the current one. Stopping iteration stops paging.

    Args:
        client: Client for the descriptor's service.
        descriptor: Table descriptor.
        options: FilterOptions built by the translator.
        page_size: Optional 'limit' sent with the first request.
        on_page: Called with the entity count of each fetched page.

    Yields:
        Entities in the order the API returns them, each exactly once.

    Raises:
        ListError: If a page cannot be fetched or decoded. Entities yielded
            before the failure remain valid.
    """
    path, path_values = _list_path(descriptor, options)
    params = to_query_params(descriptor, options)
    if page_size and descriptor.pagination != "none":
        params.setdefault("limit", page_size)

    cursor: Optional[str] = None
    seen_cursors: set[str] = set()
    page_number = 0

    while True:
        page_number += 1
        context = {"table": descriptor.resource_kind, "page": page_number}
        try:
            if cursor is None:
                body = client.get_json(path, params=params)
            else:
                body = client.get_json(cursor)
        except RemoteAPIError as e:
            logger.error(
                "Error listing page",
                extra={
                    "table": descriptor.resource_kind,
                    "context": {"page": page_number, "error": e.message},
                },
            )
            raise ListError(
                f"Error listing {descriptor.resource_kind}: {e.message}",
                cause=e,
                context=context,
            ) from e

        batch = _extract_batch(descriptor, body, context)
        logger.debug(
            "Fetched page",
            extra={
                "table": descriptor.resource_kind,
                "context": {"page": page_number, "count": len(batch)},
            },
        )
        if on_page is not None:
            on_page(len(batch))

        for entity in batch:
            for field, value in path_values.items():
                entity.setdefault(field, value)
            yield entity

        cursor = next_cursor(descriptor, body)
        if not cursor or not batch:
            return
        if cursor in seen_cursors:
            raise _invalid_page(
                f"Pagination of {descriptor.resource_kind} did not advance",
                context,
                cursor=cursor,
            )
        seen_cursors.add(cursor)


def next_cursor(descriptor: EntityDescriptor, body: Any) -> Optional[str]:
    """Return the next-page URL announced by a page body, if any."""
    if not isinstance(body, dict):
        return None

    style = descriptor.pagination
    if style == "collection_links":
        for link in body.get(f"{descriptor.collection_key}_links") or []:
            if isinstance(link, dict) and link.get("rel") == "next":
                return link.get("href")
        return None
    if style == "links":
        links = body.get("links")
        return links.get("next") if isinstance(links, dict) else None
    if style == "next":
        return body.get("next")
    return None


def _list_path(
    descriptor: EntityDescriptor, options: BaseModel
) -> tuple[str, dict[str, Any]]:
    """Fill list path placeholders and return the values used, keyed by entity field."""
    if not descriptor.required_columns:
        return descriptor.list_path, {}

    placeholders: dict[str, str] = {}
    path_values: dict[str, Any] = {}
    for column_name in descriptor.required_columns:
        remote_field = descriptor.filterable_columns[column_name]
        value = getattr(options, remote_field)
        placeholders[remote_field] = quote(str(value), safe="")
        path_values[descriptor.column(column_name).path] = value
    return descriptor.list_path.format(**placeholders), path_values


def _extract_batch(
    descriptor: EntityDescriptor, body: Any, context: dict[str, Any]
) -> list[Entity]:
    if not isinstance(body, dict):
        raise _invalid_page("Page body is not a JSON object", context, type=type(body).__name__)
    batch = body.get(descriptor.collection_key)
    if batch is None:
        raise _invalid_page(
            f"Page body has no '{descriptor.collection_key}' key", context, keys=list(body)
        )
    if not isinstance(batch, list):
        raise _invalid_page(
            f"'{descriptor.collection_key}' is not a list", context, type=type(batch).__name__
        )
    return batch


def _invalid_page(message: str, context: dict[str, Any], **detail: Any) -> ListError:
    cause = RemoteAPIError(message, kind=ErrorKind.INVALID_RESPONSE, context=detail)
    return ListError(message, cause=cause, context=context)
