"""Translation of host equality predicates into remote list filters."""

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel

from stackquery.tables.descriptor import EntityDescriptor

logger = logging.getLogger(__name__)

Scalar = Union[str, int, bool]
PredicateSet = Mapping[str, Scalar]

_TRUE = {"true", "t", "yes", "1"}
_FALSE = {"false", "f", "no", "0"}


def translate(descriptor: EntityDescriptor, predicates: PredicateSet) -> BaseModel:
    """Build the FilterOptions for a scan.

    Every column present in both ``predicates`` and the descriptor's
    filterable columns has its value copied into the mapped remote field.
    Columns without a mapping are ignored; the host re-applies them as a
    post-filter. Values that cannot be coerced to the column type leave the
    field at its zero value (None). Never raises.

    Args:
        descriptor: Table descriptor.
        predicates: Column name to scalar equality value.

    Returns:
        Instance of ``descriptor.filter_model``.
    """
    fields: dict[str, Any] = {}
    for column_name, value in predicates.items():
        remote_field = descriptor.filterable_columns.get(column_name)
        if remote_field is None:
            continue
        coerced = coerce_value(value, descriptor.column(column_name).type)
        if coerced is not None:
            fields[remote_field] = coerced

    options = descriptor.filter_model(**fields)
    logger.debug(
        "Built list filter",
        extra={
            "table": descriptor.resource_kind,
            "context": {"filter": options.model_dump(exclude_none=True)},
        },
    )
    return options


def coerce_value(value: Any, column_type: str) -> Optional[Any]:
    """Coerce a predicate value to a column type, or None if it cannot be."""
    if value is None:
        return None
    if column_type == "int":
        return _to_int(value)
    if column_type == "bool":
        return _to_bool(value)
    if column_type == "double":
        if isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
    if column_type in ("string", "timestamp"):
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return str(value)
        return None
    return value


def to_query_params(descriptor: EntityDescriptor, options: BaseModel) -> dict[str, Any]:
    """Render FilterOptions plus the table's fixed filters as query parameters.

    Fields used as list path placeholders are left out.
    """
    params: dict[str, Any] = dict(descriptor.fixed_filters)
    path_fields = {descriptor.filterable_columns[c] for c in descriptor.required_columns}
    for field, value in options.model_dump(exclude_none=True).items():
        if field in path_fields:
            continue
        params[field] = ("true" if value else "false") if isinstance(value, bool) else value
    return params


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _to_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0 if value in (0, 1) else None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    return None
