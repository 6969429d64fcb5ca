"""Table descriptors for OpenStack resources.

This module exposes:
- EntityDescriptor / ColumnSpec: declarative description of one table
- DescriptorRegistry: immutable lookup of descriptors by table name
- build_default_registry: registry of every built-in table
- RowProjector: projection of raw entities onto table columns
"""

from stackquery.tables.descriptor import (
    ColumnSpec,
    EntityDescriptor,
    column,
    define_table,
)
from stackquery.tables.projection import Projector, Row, RowProjector
from stackquery.tables.registry import DescriptorRegistry, build_default_registry

__all__ = [
    "ColumnSpec",
    "DescriptorRegistry",
    "EntityDescriptor",
    "Projector",
    "Row",
    "RowProjector",
    "build_default_registry",
    "column",
    "define_table",
]
