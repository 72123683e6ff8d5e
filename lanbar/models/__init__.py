"""Domain value types, entities and pydantic output models."""

from lanbar.models.address_types import (
    InterfaceName,
    InvalidFormat,
    IpAddress,
    MacAddress,
)
from lanbar.models.constants import Health, InterfaceKind, NeighborState, OperState
from lanbar.models.network_models import (
    InterfaceReport,
    NeighborInfo,
    RenderResult,
    SnapshotReport,
)
from lanbar.models.snapshot_models import (
    ClassifiedSnapshot,
    Interface,
    NeighborEntry,
    NetworkSnapshot,
)

__all__ = [
    # Address types
    "InterfaceName",
    "InvalidFormat",
    "IpAddress",
    "MacAddress",
    # Enums
    "Health",
    "InterfaceKind",
    "NeighborState",
    "OperState",
    # Entities
    "ClassifiedSnapshot",
    "Interface",
    "NeighborEntry",
    "NetworkSnapshot",
    # Output models
    "InterfaceReport",
    "NeighborInfo",
    "RenderResult",
    "SnapshotReport",
]
