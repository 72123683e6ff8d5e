"""Health classification for a NetworkSnapshot.

Pure and deterministic: no I/O happens here.
"""

from __future__ import annotations

from collections.abc import Iterable

from lanbar.models.constants import Health, NeighborState, OperState
from lanbar.models.snapshot_models import ClassifiedSnapshot, Interface, NetworkSnapshot


def interface_health(iface: Interface, snapshot: NetworkSnapshot) -> Health:
    """Classify one interface; the first matching rule wins.

    1. interface is down → UNREACHABLE
    2. its neighbor lookup failed → UNREACHABLE
    3. no neighbors → EMPTY
    4. every neighbor reachable → HEALTHY
    5. anything else → DEGRADED
    """
    if iface.oper_state == OperState.DOWN:
        return Health.UNREACHABLE
    if snapshot.lookup_failed(iface.name):
        return Health.UNREACHABLE

    neighbors = snapshot.neighbors(iface.name)
    if not neighbors:
        return Health.EMPTY
    if all(n.state == NeighborState.REACHABLE for n in neighbors):
        return Health.HEALTHY
    return Health.DEGRADED


def classify(snapshot: NetworkSnapshot) -> ClassifiedSnapshot:
    """Annotate every interface of the snapshot with its health."""
    return ClassifiedSnapshot(
        snapshot=snapshot,
        health_by_interface={
            iface.name: interface_health(iface, snapshot) for iface in snapshot.interfaces
        },
    )


def worst_health(healths: Iterable[Health]) -> Health:
    """Most severe health in the collection (EMPTY when there is none)."""
    return max(healths, key=lambda h: h.severity, default=Health.EMPTY)
