"""Public Python API for stackquery package.

This module provides the main entry points for connecting to a cloud and
querying its resource tables.
"""

from typing import Dict, Optional

from stackquery.client.session import KeystoneSessionFactory
from stackquery.engine.executor import QueryExecutor
from stackquery.models.connection_config import ConnectionConfig
from stackquery.models.loader import load_connection
from stackquery.tables.registry import DescriptorRegistry, build_default_registry


def connect(
    config: ConnectionConfig,
    registry: Optional[DescriptorRegistry] = None,
) -> QueryExecutor:
    """Create a QueryExecutor for a connection.

    Authentication is deferred until the first scan or get.

    Args:
        config: Connection configuration
        registry: Table registry (default: every built-in table)

    Returns:
        QueryExecutor bound to the connection

    Example:
        >>> executor = connect(ConnectionConfig.from_env())
        >>> rows = []
        >>> executor.scan(ScanRequest("openstack_network", rows.append))
    """
    return QueryExecutor(
        registry or build_default_registry(),
        KeystoneSessionFactory(config),
        config,
    )


def connect_from_yaml(
    path: str,
    cli_vars: Optional[Dict[str, str]] = None,
) -> QueryExecutor:
    """Load a connection file and create a QueryExecutor for it.

    Convenience function that combines `load_connection()` and `connect()`.

    Args:
        path: Path to connection YAML file
        cli_vars: Values for {{ var('KEY') }} templates

    Raises:
        ConfigurationError: If loading or validation fails
    """
    return connect(load_connection(path, cli_vars=cli_vars))
