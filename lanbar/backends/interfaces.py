"""Interface backend - enumerates local interfaces using psutil and sysfs."""

from __future__ import annotations

import socket
from pathlib import Path

import psutil

from lanbar.backends.base import SourceUnavailable
from lanbar.models.address_types import InterfaceName, InvalidFormat, IpAddress, MacAddress
from lanbar.models.constants import InterfaceKind, OperState
from lanbar.models.snapshot_models import Interface
from lanbar.utils.logger import Logger

SYSFS_NET = Path("/sys/class/net")

# ARPHRD_* hardware types from <linux/if_arp.h>
_ARPHRD_KINDS: dict[int, InterfaceKind] = {
    1: InterfaceKind.ETHERNET,  # ARPHRD_ETHER
    772: InterfaceKind.LOOPBACK,  # ARPHRD_LOOPBACK
    801: InterfaceKind.WIFI,  # ARPHRD_IEEE80211
    802: InterfaceKind.WIFI,  # ARPHRD_IEEE80211_PRISM
    803: InterfaceKind.WIFI,  # ARPHRD_IEEE80211_RADIOTAP
}

# Wireless NICs report ARPHRD_ETHER; these sysfs entries tell them apart
_WIRELESS_MARKERS = ("wireless", "phy80211")

_OPERSTATES: dict[str, OperState] = {
    "up": OperState.UP,
    "down": OperState.DOWN,
    "lowerlayerdown": OperState.DOWN,
    "notpresent": OperState.DOWN,
}

log = Logger.for_module("backends.interfaces")


class InterfaceCollector:
    """Interface table backend using psutil, refined by sysfs on Linux.

    Down and loopback interfaces are reported like any other; deciding what
    to display is left to the caller.
    """

    def __init__(self, sysfs_root: Path = SYSFS_NET) -> None:
        """Initialize the collector.

        Args:
            sysfs_root: Directory holding one entry per interface
                (``/sys/class/net`` on Linux).
        """
        self.sysfs_root = sysfs_root

    def list_interfaces(self) -> list[Interface]:
        """Enumerate all local interfaces.

        Returns
        -------
            One Interface per valid interface name, in name order.

        Raises
        ------
            SourceUnavailable: If the interface table cannot be read at all.
        """
        try:
            addrs = psutil.net_if_addrs()
            stats = psutil.net_if_stats()
        except (OSError, psutil.Error) as e:
            raise SourceUnavailable("interface table", str(e)) from e

        interfaces = []
        for raw_name in sorted(set(addrs) | set(stats)):
            try:
                name = InterfaceName.parse(raw_name)
            except InvalidFormat as e:
                log.warning(f"Skipping interface: {e}")
                continue

            if_stats = stats.get(raw_name)
            addresses, mac = self._parse_addresses(addrs.get(raw_name, []))
            interfaces.append(
                Interface(
                    name=name,
                    kind=self._detect_kind(raw_name, if_stats),
                    oper_state=self._detect_oper_state(raw_name, if_stats),
                    addresses=frozenset(addresses),
                    mac=mac,
                )
            )

        return interfaces

    @staticmethod
    def _parse_addresses(
        interface_addrs: list,
    ) -> tuple[list[IpAddress], MacAddress | None]:
        """Split psutil address records into IP addresses and the link address."""
        addresses = []
        mac = None
        for addr in interface_addrs:
            if addr.family in (socket.AF_INET, socket.AF_INET6):
                # Link-local IPv6 carries a zone suffix (fe80::1%eth0)
                literal = addr.address.split("%", 1)[0]
                try:
                    addresses.append(IpAddress.parse(literal))
                except InvalidFormat as e:
                    log.debug(f"Dropping address: {e}")
            elif addr.family == psutil.AF_LINK:
                try:
                    mac = MacAddress.parse(addr.address)
                except InvalidFormat:
                    mac = None
        return addresses, mac

    def _detect_kind(self, name: str, if_stats) -> InterfaceKind:
        """Classify the interface by its advertised hardware type."""
        hw_type = self._read_sysfs(name, "type")
        if hw_type is not None:
            try:
                arphrd = int(hw_type)
            except ValueError:
                return InterfaceKind.OTHER
            if arphrd == 1 and self._is_wireless(name):
                return InterfaceKind.WIFI
            return _ARPHRD_KINDS.get(arphrd, InterfaceKind.OTHER)

        # No sysfs (macOS, BSD): psutil only tells us about loopback
        flags = getattr(if_stats, "flags", "") or ""
        if "loopback" in flags.split(","):
            return InterfaceKind.LOOPBACK
        return InterfaceKind.OTHER

    def _detect_oper_state(self, name: str, if_stats) -> OperState:
        """Read the operational state, falling back to psutil's isup."""
        operstate = self._read_sysfs(name, "operstate")
        # Drivers without carrier reporting (lo, tun) say "unknown"
        if operstate is not None and operstate.lower() != "unknown":
            return _OPERSTATES.get(operstate.lower(), OperState.UNKNOWN)

        if if_stats is None:
            return OperState.UNKNOWN
        return OperState.UP if if_stats.isup else OperState.DOWN

    def _is_wireless(self, name: str) -> bool:
        base = self.sysfs_root / name
        return any((base / marker).exists() for marker in _WIRELESS_MARKERS)

    def _read_sysfs(self, name: str, attribute: str) -> str | None:
        """Read one sysfs attribute, or None if it cannot be read."""
        try:
            return (self.sysfs_root / name / attribute).read_text(errors="replace").strip()
        except OSError:
            return None
