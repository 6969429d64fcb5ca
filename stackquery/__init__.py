"""stackquery - OpenStack resources as queryable tables.

A read-only connector that translates table scans and point lookups into
OpenStack REST API calls, paginates the results and streams rows back to
the host query engine.
"""

__version__ = "0.1.0"

# Public API
from stackquery.api import connect, connect_from_yaml

# Engine
from stackquery.engine import GetRequest, QueryExecutor, ScanRequest

# Exceptions
from stackquery.core.exceptions import (
    ConfigurationError,
    FetchError,
    ListError,
    MissingQualifierError,
    ResolutionError,
    StackQueryError,
    UnknownTableError,
)

# Configuration and tables
from stackquery.models.connection_config import ConnectionConfig
from stackquery.tables import DescriptorRegistry, EntityDescriptor, build_default_registry

__all__ = [
    # Version
    "__version__",
    # Public API
    "connect",
    "connect_from_yaml",
    # Engine
    "QueryExecutor",
    "ScanRequest",
    "GetRequest",
    # Configuration and tables
    "ConnectionConfig",
    "DescriptorRegistry",
    "EntityDescriptor",
    "build_default_registry",
    # Exceptions
    "StackQueryError",
    "ConfigurationError",
    "ResolutionError",
    "ListError",
    "FetchError",
    "MissingQualifierError",
    "UnknownTableError",
]
