"""Registry of table descriptors.

The registry is an immutable value: it is built once at startup from a set
of descriptors and passed explicitly to whatever needs to look tables up.
"""

from types import MappingProxyType
from typing import Iterable, Iterator

from stackquery.core.exceptions import ConfigurationError, UnknownTableError
from stackquery.tables.descriptor import EntityDescriptor


class DescriptorRegistry:
    """Read-only mapping of table name to EntityDescriptor."""

    def __init__(self, descriptors: Iterable[EntityDescriptor]):
        """Build the registry.

        Args:
            descriptors: Validated table descriptors.

        Raises:
            ConfigurationError: If two descriptors share a table name.
        """
        tables: dict[str, EntityDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.resource_kind in tables:
                raise ConfigurationError(
                    f"Table '{descriptor.resource_kind}' is already registered",
                    context={"table": descriptor.resource_kind},
                )
            tables[descriptor.resource_kind] = descriptor
        self._tables = MappingProxyType(tables)

    def get(self, resource_kind: str) -> EntityDescriptor:
        """Return the descriptor for a table.

        Raises:
            UnknownTableError: If the table is not registered.
        """
        descriptor = self._tables.get(resource_kind)
        if descriptor is None:
            available = ", ".join(sorted(self._tables)) or "(none)"
            raise UnknownTableError(
                f"Unknown table: '{resource_kind}'",
                context={"table": resource_kind, "available_tables": available},
            )
        return descriptor

    def list_tables(self) -> list[str]:
        """Return all registered table names, sorted."""
        return sorted(self._tables)

    def __contains__(self, resource_kind: object) -> bool:
        return resource_kind in self._tables

    def __iter__(self) -> Iterator[EntityDescriptor]:
        return iter(self._tables.values())

    def __len__(self) -> int:
        return len(self._tables)


def build_default_registry() -> DescriptorRegistry:
    """Build the registry of every built-in OpenStack table."""
    from stackquery.tables import compute, identity, loadbalancer, network, storage

    return DescriptorRegistry(
        [
            *compute.TABLES,
            *network.TABLES,
            *loadbalancer.TABLES,
            *identity.TABLES,
            *storage.TABLES,
        ]
    )
