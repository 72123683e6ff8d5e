"""Constants and enums shared by lanbar models and commands."""

import sys

if sys.version_info >= (3, 11):  # noqa: UP036
    from enum import StrEnum
else:
    from backports.strenum import StrEnum  # noqa: UP035


class InterfaceKind(StrEnum):
    """Hardware/media class of a local interface."""

    ETHERNET = "ethernet"
    WIFI = "wifi"
    LOOPBACK = "loopback"
    OTHER = "other"


class OperState(StrEnum):
    """Operational state of a local interface."""

    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"


class NeighborState(StrEnum):
    """Reachability of a single neighbor table entry."""

    REACHABLE = "reachable"
    STALE = "stale"
    FAILED = "failed"
    UNKNOWN = "unknown"


class Health(StrEnum):
    """Aggregate health of an interface, derived from its neighbors."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    EMPTY = "empty"
    UNREACHABLE = "unreachable"

    @property
    def severity(self) -> int:
        """Rank used to pick the worst health (higher is worse)."""
        return _HEALTH_SEVERITY[self]


_HEALTH_SEVERITY: dict[Health, int] = {
    Health.HEALTHY: 0,
    Health.DEGRADED: 1,
    Health.EMPTY: 2,
    Health.UNREACHABLE: 3,
}


class Color(StrEnum):
    """Pango colors understood by the status bar tooltip renderer."""

    GREEN = "#00FF00"
    YELLOW = "#FFFF00"
    GRAY = "#888888"


HEALTH_COLORS: dict[Health, Color] = {
    Health.HEALTHY: Color.GREEN,
    Health.DEGRADED: Color.YELLOW,
    Health.EMPTY: Color.GRAY,
    Health.UNREACHABLE: Color.GRAY,
}

NEIGHBOR_COLORS: dict[NeighborState, Color] = {
    NeighborState.REACHABLE: Color.GREEN,
    NeighborState.STALE: Color.YELLOW,
    NeighborState.FAILED: Color.GRAY,
    NeighborState.UNKNOWN: Color.GRAY,
}

NETWORK_GLYPH = "🖧"
