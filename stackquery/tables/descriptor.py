"""Declarative description of one resource table.

An EntityDescriptor carries everything the generic engine needs to scan or
fetch a resource kind: which service serves it, where its list and get
endpoints live, how pages are linked, which columns can be pushed down as
list filters and which column is the key.
"""

import re
import string
from typing import Any, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    create_model,
    model_validator,
)

from stackquery.client.services import ServiceKind
from stackquery.core.exceptions import ConfigurationError

ColumnType = Literal["string", "int", "bool", "double", "json", "timestamp"]
PaginationStyle = Literal["collection_links", "links", "next", "none"]

KEY_COLUMN_TYPES = ("string", "int")

PYTHON_TYPES: dict[str, Any] = {
    "string": str,
    "int": int,
    "bool": bool,
    "double": float,
    "json": Any,
    "timestamp": str,
}

_IDENTIFIER = re.compile(r"^[a-z][a-z0-9_]*$")


class ColumnSpec(BaseModel):
    """One output column and the entity field it is read from."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ColumnType = "string"
    field: Optional[str] = Field(
        default=None,
        description="Dotted path into the entity; defaults to the column name",
    )
    description: str = ""

    @property
    def path(self) -> str:
        return self.field or self.name


class EntityDescriptor(BaseModel):
    """Static configuration for one resource kind."""

    model_config = ConfigDict(frozen=True)

    resource_kind: str = Field(description="Table name, e.g. 'openstack_subnet'")
    description: str = ""
    service: ServiceKind
    columns: tuple[ColumnSpec, ...]
    filterable_columns: dict[str, str] = Field(
        description="Column name to remote list-filter field"
    )
    key_column: str = "id"

    list_path: str = Field(
        description="List endpoint path; {field} placeholders are filled from filters"
    )
    get_path: Optional[str] = Field(
        default=None,
        description="Get endpoint path with a {<key_column>} placeholder; None disables get",
    )
    collection_key: str = Field(description="Body key holding a page's entity array")
    item_key: Optional[str] = Field(
        default=None, description="Body key wrapping a single entity; None if unwrapped"
    )
    pagination: PaginationStyle = "collection_links"
    required_columns: tuple[str, ...] = ()
    fixed_filters: dict[str, Any] = Field(default_factory=dict)

    _filter_model: type[BaseModel] = PrivateAttr()

    @model_validator(mode="after")
    def validate_layout(self):
        """Check the descriptor is internally consistent."""
        names = [column.name for column in self.columns]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate columns: {duplicates}")

        unknown = sorted(set(self.filterable_columns) - set(names))
        if unknown:
            raise ValueError(f"filterable columns are not declared columns: {unknown}")

        if self.key_column not in self.filterable_columns:
            raise ValueError(
                f"key column '{self.key_column}' must be a filterable column"
            )
        key_type = self.column(self.key_column).type
        if key_type not in KEY_COLUMN_TYPES:
            raise ValueError(
                f"key column '{self.key_column}' has type '{key_type}', "
                f"expected one of {KEY_COLUMN_TYPES}"
            )

        remote_fields = list(self.filterable_columns.values())
        for field in remote_fields:
            if not _IDENTIFIER.match(field):
                raise ValueError(f"remote filter field '{field}' is not a valid name")
        if len(set(remote_fields)) != len(remote_fields):
            raise ValueError("two columns map to the same remote filter field")

        missing = sorted(set(self.required_columns) - set(self.filterable_columns))
        if missing:
            raise ValueError(f"required columns must be filterable: {missing}")
        placeholders = _placeholders(self.list_path)
        required_fields = {self.filterable_columns[c] for c in self.required_columns}
        if placeholders != required_fields:
            raise ValueError(
                f"list_path placeholders {sorted(placeholders)} must match "
                f"required column fields {sorted(required_fields)}"
            )

        if self.get_path is not None and _placeholders(self.get_path) != {self.key_column}:
            raise ValueError(
                f"get_path must contain exactly the '{{{self.key_column}}}' placeholder"
            )
        return self

    def model_post_init(self, __context: Any) -> None:
        self._filter_model = _build_filter_model(self)

    @property
    def filter_model(self) -> type[BaseModel]:
        """FilterOptions class for this resource kind."""
        return self._filter_model

    @property
    def key_type(self) -> str:
        return self.column(self.key_column).type

    @property
    def supports_get(self) -> bool:
        return self.get_path is not None

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def column(self, name: str) -> ColumnSpec:
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(name)


def column(
    name: str,
    type: ColumnType = "string",
    field: Optional[str] = None,
    description: str = "",
) -> ColumnSpec:
    """Shorthand for declaring a ColumnSpec."""
    return ColumnSpec(name=name, type=type, field=field, description=description)


def define_table(**kwargs: Any) -> EntityDescriptor:
    """Build a descriptor, turning validation failures into ConfigurationError.

    Raises:
        ConfigurationError: If the descriptor is inconsistent or names an
            unknown service.
    """
    try:
        return EntityDescriptor(**kwargs)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid table definition: {e}",
            context={"table": kwargs.get("resource_kind", "<unnamed>")},
        ) from e


def _placeholders(path: str) -> set[str]:
    return {name for _, name, _, _ in string.Formatter().parse(path) if name}


def _build_filter_model(descriptor: EntityDescriptor) -> type[BaseModel]:
    # Runs before validate_layout; entries it rejects are skipped here.
    column_types = {column.name: column.type for column in descriptor.columns}
    fields: dict[str, Any] = {}
    for column_name, remote_field in descriptor.filterable_columns.items():
        if column_name not in column_types or not _IDENTIFIER.match(remote_field):
            continue
        python_type = PYTHON_TYPES[column_types[column_name]]
        fields[remote_field] = (Optional[python_type], None)

    class_name = "".join(
        part.capitalize() for part in descriptor.resource_kind.split("_")
    )
    return create_model(
        f"{class_name}FilterOptions",
        __config__=ConfigDict(frozen=True, extra="forbid"),
        **fields,
    )
