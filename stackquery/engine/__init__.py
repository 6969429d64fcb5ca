"""Generic resource listing and lookup engine.

Scan: translate -> resolve -> list_entities -> stream.
Get: resolve -> get_by_key.
"""

from stackquery.engine.executor import GetRequest, QueryExecutor, ScanRequest
from stackquery.engine.fetcher import get_by_key, is_not_found
from stackquery.engine.lister import list_entities, next_cursor
from stackquery.engine.streamer import CancelSignal, RowSink, stream
from stackquery.engine.translator import (
    PredicateSet,
    coerce_value,
    to_query_params,
    translate,
)

__all__ = [
    "CancelSignal",
    "GetRequest",
    "PredicateSet",
    "QueryExecutor",
    "RowSink",
    "ScanRequest",
    "coerce_value",
    "get_by_key",
    "is_not_found",
    "list_entities",
    "next_cursor",
    "stream",
    "to_query_params",
    "translate",
]
