"""Projection of raw entities onto a table's columns."""

import re
from typing import Any, Protocol

from jsonpath_ng import parse as parse_jsonpath

from stackquery.tables.descriptor import EntityDescriptor

Row = dict[str, Any]

_PLAIN_SEGMENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Column types whose empty values are reported as null
_NULL_IF_EMPTY = {"string", "timestamp", "json"}


class Projector(Protocol):
    """Turns one entity into one row."""

    def project(self, entity: dict[str, Any]) -> Row: ...


class RowProjector:
    """Projects entities through each column's field path.

    Field paths are dotted (``cpu_info.vendor``); segments that are not plain
    identifiers, such as ``OS-EXT-STS:vm_state``, are quoted before being
    compiled with jsonpath-ng.
    """

    def __init__(self, descriptor: EntityDescriptor):
        self._descriptor = descriptor
        self._columns = [
            (column.name, column.type, parse_jsonpath(_to_jsonpath(column.path)))
            for column in descriptor.columns
        ]

    def project(self, entity: dict[str, Any]) -> Row:
        row: Row = {}
        for name, column_type, expr in self._columns:
            matches = expr.find(entity)
            value = matches[0].value if matches else None
            row[name] = _null_if_empty(value, column_type)
        return row


def _to_jsonpath(path: str) -> str:
    segments = []
    for segment in path.split("."):
        if _PLAIN_SEGMENT.match(segment):
            segments.append(segment)
        else:
            segments.append(f"'{segment}'")
    return ".".join(segments)


def _null_if_empty(value: Any, column_type: str) -> Any:
    if column_type not in _NULL_IF_EMPTY:
        return value
    if value == "" or value == [] or value == {}:
        return None
    return value
