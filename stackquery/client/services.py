"""Known OpenStack service kinds and their catalog types."""

from dataclasses import dataclass
from enum import Enum


class ServiceKind(str, Enum):
    """API surfaces the connector can talk to."""

    COMPUTE = "compute"
    NETWORK = "network"
    IMAGE = "image"
    BLOCK_STORAGE = "block-storage"
    IDENTITY = "identity"
    LOAD_BALANCING = "load-balancing"


# Service catalog types accepted for each kind, in order of preference
CATALOG_TYPES: dict[ServiceKind, tuple[str, ...]] = {
    ServiceKind.COMPUTE: ("compute",),
    ServiceKind.NETWORK: ("network",),
    ServiceKind.IMAGE: ("image",),
    ServiceKind.BLOCK_STORAGE: ("block-storage", "volumev3", "volumev2"),
    ServiceKind.IDENTITY: ("identity",),
    ServiceKind.LOAD_BALANCING: ("load-balancer",),
}


@dataclass(frozen=True)
class ServiceEndpoint:
    """One API surface: service kind plus region (empty means default)."""

    service: ServiceKind
    region: str = ""

    def __str__(self) -> str:
        return f"{self.service.value}@{self.region or '<default>'}"
