"""Domain entities for one discovery run.

Everything here is built fresh per invocation and never mutated after
construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lanbar.models.address_types import InterfaceName, IpAddress, MacAddress
from lanbar.models.constants import Health, InterfaceKind, NeighborState, OperState


@dataclass(frozen=True)
class Interface:
    """A local network adapter.

    Attributes:
        name: Validated interface name.
        kind: Hardware/media class.
        oper_state: Operational state reported by the OS.
        addresses: IP addresses bound to the interface.
        mac: Hardware address of the interface itself (if reported).
    """

    name: InterfaceName
    kind: InterfaceKind = InterfaceKind.OTHER
    oper_state: OperState = OperState.UNKNOWN
    addresses: frozenset[IpAddress] = field(default_factory=frozenset)
    mac: MacAddress | None = None

    @property
    def is_loopback(self) -> bool:
        """Whether the interface is the loopback device."""
        return self.kind == InterfaceKind.LOOPBACK

    def sorted_addresses(self) -> list[IpAddress]:
        """Addresses in deterministic order."""
        return sorted(self.addresses)


@dataclass(frozen=True)
class NeighborEntry:
    """A device observed on an interface's segment.

    ``ip`` is the identity of the entry within its interface.
    """

    interface: InterfaceName
    ip: IpAddress
    mac: MacAddress | None = None
    state: NeighborState = NeighborState.UNKNOWN


@dataclass(frozen=True)
class NetworkSnapshot:
    """Interfaces and their neighbors collected in one run.

    Attributes:
        interfaces: Interfaces sorted by name.
        neighbors_by_interface: Neighbor entries per interface, sorted by ip.
        lookup_failures: Warning text for interfaces whose neighbor lookup failed.
        gateway: Default IPv4 gateway, if one was found.
        dns_servers: Configured resolvers, in file order.
        hostnames: Reverse DNS names of neighbor addresses that resolved.
    """

    interfaces: tuple[Interface, ...] = ()
    neighbors_by_interface: dict[InterfaceName, tuple[NeighborEntry, ...]] = field(
        default_factory=dict
    )
    lookup_failures: dict[InterfaceName, str] = field(default_factory=dict)
    gateway: IpAddress | None = None
    dns_servers: tuple[IpAddress, ...] = ()
    hostnames: dict[IpAddress, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Reject neighbor or failure data for interfaces that are not present."""
        known = {iface.name for iface in self.interfaces}
        orphans = (set(self.neighbors_by_interface) | set(self.lookup_failures)) - known
        if orphans:
            names = ", ".join(sorted(str(name) for name in orphans))
            raise ValueError(f"Neighbor data for unknown interfaces: {names}")

    def neighbors(self, name: InterfaceName) -> tuple[NeighborEntry, ...]:
        """Neighbors for one interface (empty if none were collected)."""
        return self.neighbors_by_interface.get(name, ())

    def lookup_failed(self, name: InterfaceName) -> bool:
        """Whether neighbor discovery failed for this interface."""
        return name in self.lookup_failures

    def hostname(self, ip: IpAddress) -> str | None:
        """Resolved name of a neighbor address, if any."""
        return self.hostnames.get(ip)


@dataclass(frozen=True)
class ClassifiedSnapshot:
    """A snapshot annotated with per-interface health."""

    snapshot: NetworkSnapshot
    health_by_interface: dict[InterfaceName, Health] = field(default_factory=dict)

    @property
    def interfaces(self) -> tuple[Interface, ...]:
        """Interfaces in name order."""
        return self.snapshot.interfaces

    def health(self, name: InterfaceName) -> Health:
        """Health of one interface."""
        return self.health_by_interface[name]

