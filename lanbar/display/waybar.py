"""Waybar JSON output formatting for classified snapshots.

Color contract for tooltip markup (the only three colors ever emitted):

    <span color='#00FF00'>  green   healthy interface / reachable neighbor
    <span color='#FFFF00'>  yellow  degraded interface / stale neighbor
    <span color='#888888'>  gray    empty or unreachable interface /
                                    failed or unknown neighbor
"""

from __future__ import annotations

import html
import json

from lanbar.backends.vendor import UNKNOWN_VENDOR, VendorLookup
from lanbar.classifier import worst_health
from lanbar.models.address_types import IpAddress
from lanbar.models.constants import (
    HEALTH_COLORS,
    NEIGHBOR_COLORS,
    NETWORK_GLYPH,
    Color,
    Health,
)
from lanbar.models.network_models import RenderResult
from lanbar.models.snapshot_models import ClassifiedSnapshot, Interface, NeighborEntry

ERROR_TEXT = f"{NETWORK_GLYPH} --"

# Emitted verbatim when even the error rendering cannot be produced
FALLBACK_JSON = json.dumps(
    {
        "text": ERROR_TEXT,
        "tooltip": "lanbar: internal error",
        "alt": "error",
        "class": ["network", "error"],
    },
    ensure_ascii=False,
)

_BRANCH = "  ├─ "
_LAST_BRANCH = "  └─ "
_CONTINUATION = "  │   "
_LAST_CONTINUATION = "      "


class RenderError(Exception):
    """Raised when a classified snapshot cannot be rendered."""


def colorize(text: str, color: Color) -> str:
    """Escape text and wrap it in a Pango color span."""
    return f"<span color='{color.value}'>{html.escape(text, quote=False)}</span>"


def device_count(count: int) -> str:
    """Render '1 device' / 'N devices'."""
    return "1 device" if count == 1 else f"{count} devices"


def fallback_json() -> str:
    """Hardcoded degraded payload for failures inside the formatter itself."""
    return FALLBACK_JSON


class WaybarFormatter:
    """Formats classified snapshots as Waybar custom-module JSON."""

    def __init__(
        self,
        vendor_lookup: VendorLookup | None = None,
        show_loopback: bool = False,
    ) -> None:
        """Create a formatter.

        Args:
            vendor_lookup: Optional OUI table; vendors are shown when known.
            show_loopback: Display loopback interfaces in the tooltip.
        """
        self.vendor_lookup = vendor_lookup
        self.show_loopback = show_loopback

    def displayed_interfaces(self, classified: ClassifiedSnapshot) -> list[Interface]:
        """Interfaces that appear in the tooltip, in name order."""
        return [
            iface
            for iface in classified.interfaces
            if self.show_loopback or not iface.is_loopback
        ]

    def render(self, classified: ClassifiedSnapshot) -> RenderResult:
        """Render a classified snapshot.

        Raises:
            RenderError: If the snapshot is inconsistent (e.g. an interface
                without a health).
        """
        try:
            displayed = self.displayed_interfaces(classified)
            healths = [classified.health(iface.name) for iface in displayed]
        except KeyError as e:
            raise RenderError(f"no health for interface {e}") from e

        active = sum(1 for h in healths if h in (Health.HEALTHY, Health.DEGRADED))
        worst = worst_health(healths)

        return RenderResult(
            text=f"{NETWORK_GLYPH} {active}",
            tooltip=self._build_tooltip(classified, displayed),
            alt=worst.value,
            classes=["network", worst.value],
        )

    @staticmethod
    def render_error(context: str, error: object) -> RenderResult:
        """Render a failure that prevented building a snapshot."""
        return RenderResult(
            text=ERROR_TEXT,
            tooltip=(
                "Unable to fetch network data\n\n"
                f"{html.escape(context, quote=False)}: "
                f"{html.escape(str(error), quote=False)}"
            ),
            alt="error",
            classes=["network", "error"],
        )

    def _build_tooltip(
        self, classified: ClassifiedSnapshot, displayed: list[Interface]
    ) -> str:
        if not displayed:
            return "No network interfaces found"

        blocks = []
        for iface in displayed:
            blocks.append("\n".join(self._format_interface(classified, iface)))
        return "\n\n".join(blocks)

    def _format_interface(
        self, classified: ClassifiedSnapshot, iface: Interface
    ) -> list[str]:
        """Header line plus one line per neighbor (and gateway details)."""
        snapshot = classified.snapshot
        health = classified.health(iface.name)
        neighbors = snapshot.neighbors(iface.name)

        header = f"{iface.name}: {health.value} ({device_count(len(neighbors))})"
        lines = [colorize(header, HEALTH_COLORS[health])]

        warning = snapshot.lookup_failures.get(iface.name)
        if warning:
            prefix = _LAST_BRANCH if not neighbors else _BRANCH
            lines.append(prefix + colorize(warning, Color.GRAY))

        for i, neighbor in enumerate(neighbors):
            is_last = i == len(neighbors) - 1
            prefix = _LAST_BRANCH if is_last else _BRANCH
            lines.append(
                prefix
                + colorize(
                    self._describe(neighbor, snapshot.hostname(neighbor.ip)),
                    NEIGHBOR_COLORS[neighbor.state],
                )
            )
            if snapshot.gateway is not None and neighbor.ip == snapshot.gateway:
                indent = _LAST_CONTINUATION if is_last else _CONTINUATION
                lines.extend(
                    indent + line
                    for line in self._gateway_lines(snapshot.gateway, snapshot.dns_servers)
                )

        return lines

    def _describe(self, neighbor: NeighborEntry, hostname: str | None) -> str:
        parts = [str(neighbor.ip)]
        if hostname:
            parts.append(hostname)
        if neighbor.mac is not None:
            parts.append(f"({neighbor.mac})")
            if self.vendor_lookup is not None:
                vendor = self.vendor_lookup.vendor_for(neighbor.mac)
                if vendor != UNKNOWN_VENDOR:
                    parts.append(vendor)
        parts.append(neighbor.state.value)
        return " ".join(parts)

    @staticmethod
    def _gateway_lines(
        gateway: IpAddress, dns_servers: tuple[IpAddress, ...]
    ) -> list[str]:
        """'Gateway' marker plus the resolvers that are not the gateway."""
        label = "Gateway (also DNS)" if gateway in dns_servers else "Gateway"
        lines = [f"  {label}"]

        others = [dns for dns in dns_servers if dns != gateway]
        if others:
            listed = ", ".join(
                f"{dns} ({'local' if dns.is_private else 'external'})" for dns in others
            )
            lines.append(f"  DNS: {html.escape(listed, quote=False)}")
        return lines
