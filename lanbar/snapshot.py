"""Merge interface and neighbor data into one NetworkSnapshot.

A neighbor lookup failure is isolated to its own interface: the interface
stays in the snapshot with no neighbors and a recorded warning.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor

from lanbar.backends.base import CollectionError
from lanbar.models.address_types import InterfaceName, IpAddress
from lanbar.models.snapshot_models import Interface, NeighborEntry, NetworkSnapshot
from lanbar.utils.logger import Logger

NeighborLookup = Callable[[InterfaceName], Sequence[NeighborEntry]]

log = Logger.for_module("snapshot")


def _lookup(
    neighbor_lookup: NeighborLookup, name: InterfaceName
) -> Sequence[NeighborEntry] | CollectionError:
    """Run one lookup, returning the failure instead of raising it."""
    try:
        return neighbor_lookup(name)
    except CollectionError as e:
        return e


def _dedupe(name: InterfaceName, entries: Iterable[NeighborEntry]) -> tuple[NeighborEntry, ...]:
    """Keep the last entry per ip, drop foreign entries, order by ip."""
    by_ip: dict[IpAddress, NeighborEntry] = {}
    for entry in entries:
        if entry.interface != name:
            log.debug(f"{name}: dropping entry reported for {entry.interface}")
            continue
        by_ip[entry.ip] = entry
    return tuple(by_ip[ip] for ip in sorted(by_ip))


def build(
    interfaces: Iterable[Interface],
    neighbor_lookup: NeighborLookup,
    *,
    gateway: IpAddress | None = None,
    dns_servers: Iterable[IpAddress] = (),
    max_workers: int = 1,
) -> NetworkSnapshot:
    """Build a validated, deterministically ordered snapshot.

    Args:
        interfaces: Interfaces from the interface collector (any order).
        neighbor_lookup: Returns the neighbor entries of one interface or
            raises CollectionError.
        gateway: Default gateway, if known.
        dns_servers: Configured resolvers.
        max_workers: Concurrent lookups; 1 runs them sequentially.

    Returns:
        Snapshot with interfaces sorted by name and neighbors sorted by ip.
    """
    by_name = {iface.name: iface for iface in interfaces}
    ordered = tuple(by_name[name] for name in sorted(by_name))
    names = [iface.name for iface in ordered]

    if max_workers > 1 and len(names) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(names))) as pool:
            results = list(pool.map(lambda n: _lookup(neighbor_lookup, n), names))
    else:
        results = [_lookup(neighbor_lookup, name) for name in names]

    neighbors_by_interface: dict[InterfaceName, tuple[NeighborEntry, ...]] = {}
    lookup_failures: dict[InterfaceName, str] = {}
    for name, result in zip(names, results, strict=True):
        if isinstance(result, CollectionError):
            log.warning(f"{name}: neighbor lookup failed: {result}")
            lookup_failures[name] = str(result)
            neighbors_by_interface[name] = ()
        else:
            neighbors_by_interface[name] = _dedupe(name, result)

    return NetworkSnapshot(
        interfaces=ordered,
        neighbors_by_interface=neighbors_by_interface,
        lookup_failures=lookup_failures,
        gateway=gateway,
        dns_servers=tuple(dns_servers),
    )
