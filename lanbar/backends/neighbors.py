"""Neighbor backend - reads ARP/NDP neighbor tables per interface.

Sources, in order of preference:
- iproute2: ``ip -j neigh show dev <iface>`` (IPv4 and IPv6, with NUD state)
- ``/proc/net/arp`` (IPv4 only, completion flag instead of NUD state)
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path

from lanbar.backends.base import NeighborSource, SourceUnavailable
from lanbar.config import DEFAULT_NEIGHBOR_TIMEOUT
from lanbar.models.address_types import InterfaceName, InvalidFormat, IpAddress, MacAddress
from lanbar.models.constants import NeighborState
from lanbar.models.snapshot_models import NeighborEntry
from lanbar.utils.logger import Logger

PROC_NET_ARP = Path("/proc/net/arp")

# Kernel NUD states as printed by iproute2
NUD_STATES: dict[str, NeighborState] = {
    "REACHABLE": NeighborState.REACHABLE,
    "PERMANENT": NeighborState.REACHABLE,
    "NOARP": NeighborState.REACHABLE,
    "STALE": NeighborState.STALE,
    "DELAY": NeighborState.STALE,
    "PROBE": NeighborState.STALE,
    "FAILED": NeighborState.FAILED,
    "INCOMPLETE": NeighborState.FAILED,
}

# ATF_COM: entry has a resolved hardware address
_ATF_COM = 0x2

log = Logger.for_module("backends.neighbors")


def map_nud_state(states: list[str] | str | None) -> NeighborState:
    """Map iproute2 state names onto NeighborState.

    iproute2 JSON reports ``state`` as a list; the first recognized name
    wins and anything unrecognized becomes UNKNOWN.
    """
    if states is None:
        return NeighborState.UNKNOWN
    if isinstance(states, str):
        states = [states]
    elif not isinstance(states, list | tuple):
        return NeighborState.UNKNOWN
    for state in states:
        mapped = NUD_STATES.get(str(state).upper())
        if mapped is not None:
            return mapped
    return NeighborState.UNKNOWN


def _parse_mac(raw: str | None, interface: InterfaceName, ip: IpAddress) -> MacAddress | None:
    """Parse a link-layer address, degrading unparseable text to None."""
    if not raw:
        return None
    try:
        return MacAddress.parse(raw)
    except InvalidFormat as e:
        log.warning(f"{interface}: keeping {ip} without hardware address: {e}")
        return None


class IpNeighSource(NeighborSource):
    """Neighbor table read through iproute2's JSON output."""

    def __init__(self, timeout: float = DEFAULT_NEIGHBOR_TIMEOUT) -> None:
        self.timeout = timeout
        self.ip_path = shutil.which("ip")

    @property
    def name(self) -> str:
        """Return source identifier."""
        return "ip neigh"

    def is_available(self) -> bool:
        """Check if the ip binary is installed."""
        return self.ip_path is not None

    def read(self, interface: InterfaceName) -> list[NeighborEntry]:
        """Run ``ip -j neigh show dev <iface>`` and parse its output.

        Raises:
            SourceUnavailable: If ip is missing, fails, times out or prints
                something other than JSON.
        """
        if self.ip_path is None:
            raise SourceUnavailable(self.name, "ip binary not found")

        try:
            result = subprocess.run(
                [self.ip_path, "-j", "neigh", "show", "dev", str(interface)],
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise SourceUnavailable(
                self.name, f"timed out after {self.timeout}s on {interface}"
            ) from e
        except OSError as e:
            raise SourceUnavailable(self.name, str(e)) from e

        if result.returncode != 0:
            reason = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise SourceUnavailable(self.name, f"{interface}: {reason}")

        return self.parse_output(result.stdout, interface)

    def parse_output(self, output: str, interface: InterfaceName) -> list[NeighborEntry]:
        """Parse ``ip -j neigh`` JSON into entries, in table order.

        Example record:
            {"dst": "192.168.1.1", "lladdr": "aa:bb:cc:dd:ee:ff",
             "state": ["REACHABLE"]}
        """
        if not output.strip():
            # Older iproute2 prints nothing for an empty table
            return []

        try:
            records = json.loads(output)
        except json.JSONDecodeError as e:
            raise SourceUnavailable(self.name, f"unparseable output: {e}") from e
        if not isinstance(records, list):
            raise SourceUnavailable(self.name, "expected a JSON array")

        entries = []
        for record in records:
            if not isinstance(record, dict):
                continue
            # Filtered by dev already; some versions still echo it
            dev = record.get("dev")
            if dev is not None and dev != str(interface):
                continue

            try:
                ip = IpAddress.parse(record.get("dst", ""))
            except InvalidFormat as e:
                log.debug(f"{interface}: dropping neighbor: {e}")
                continue

            entries.append(
                NeighborEntry(
                    interface=interface,
                    ip=ip,
                    mac=_parse_mac(record.get("lladdr"), interface, ip),
                    state=map_nud_state(record.get("state")),
                )
            )

        return entries


class ProcArpSource(NeighborSource):
    """IPv4 neighbor table read from /proc/net/arp."""

    def __init__(self, path: Path = PROC_NET_ARP) -> None:
        self.path = path

    @property
    def name(self) -> str:
        """Return source identifier."""
        return "/proc/net/arp"

    def is_available(self) -> bool:
        """Check if the kernel exposes the ARP table."""
        return self.path.exists()

    def read(self, interface: InterfaceName) -> list[NeighborEntry]:
        """Read the ARP table rows for one device.

        Raises:
            SourceUnavailable: If the file cannot be read.
        """
        try:
            content = self.path.read_text(errors="replace")
        except OSError as e:
            raise SourceUnavailable(self.name, str(e)) from e
        return self.parse_table(content, interface)

    def parse_table(self, content: str, interface: InterfaceName) -> list[NeighborEntry]:
        """Parse /proc/net/arp content.

        Format (after a header line):
            IP address  HW type  Flags  HW address  Mask  Device
        """
        entries = []
        for line in content.splitlines()[1:]:
            parts = line.split()
            if len(parts) < 6 or parts[5] != str(interface):
                continue

            try:
                ip = IpAddress.parse(parts[0])
            except InvalidFormat as e:
                log.debug(f"{interface}: dropping neighbor: {e}")
                continue

            try:
                flags = int(parts[2], 16)
            except ValueError:
                flags = 0

            complete = bool(flags & _ATF_COM)
            entries.append(
                NeighborEntry(
                    interface=interface,
                    ip=ip,
                    # Incomplete rows carry a placeholder all-zero address
                    mac=_parse_mac(parts[3], interface, ip) if complete else None,
                    state=NeighborState.REACHABLE if complete else NeighborState.FAILED,
                )
            )

        return entries


class NeighborCollector:
    """Reads neighbor entries per interface from the first available source."""

    def __init__(
        self,
        timeout: float = DEFAULT_NEIGHBOR_TIMEOUT,
        sources: list[NeighborSource] | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            timeout: Seconds allowed for each subprocess query.
            sources: Sources in priority order (defaults to iproute2, then
                /proc/net/arp).
        """
        if sources is None:
            sources = [IpNeighSource(timeout=timeout), ProcArpSource()]
        self.sources = sources

    def list_neighbors(self, interface: InterfaceName) -> list[NeighborEntry]:
        """List the neighbor entries observed on one interface.

        Raises:
            SourceUnavailable: If no source is available or the chosen source
                cannot be read for this interface.
        """
        for source in self.sources:
            if source.is_available():
                entries = source.read(interface)
                log.debug(f"{interface}: {len(entries)} entries from {source.name}")
                return entries

        raise SourceUnavailable("neighbor table", "no neighbor table source available")
