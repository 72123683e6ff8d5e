"""Route backend - default gateway and DNS resolvers.

Both lookups are best-effort: an unreadable file yields no gateway or an
empty resolver list, never an error.
"""

from __future__ import annotations

from pathlib import Path

from lanbar.models.address_types import InvalidFormat, IpAddress
from lanbar.utils.logger import Logger

PROC_NET_ROUTE = Path("/proc/net/route")
RESOLV_CONF = Path("/etc/resolv.conf")

log = Logger.for_module("backends.routes")


def parse_hex_ip(hex_ip: str) -> IpAddress:
    """Convert a little-endian hex IPv4 from /proc/net/route.

    Example:
        ``0101A8C0`` is 192.168.1.1.

    Raises:
        InvalidFormat: If the text is not 8 hex digits.
    """
    if len(hex_ip) != 8:
        raise InvalidFormat("route address", hex_ip, "expected 8 hex digits")
    try:
        value = int(hex_ip, 16)
    except ValueError as e:
        raise InvalidFormat("route address", hex_ip) from e
    return IpAddress.parse(value.to_bytes(4, "little"))


def default_gateway(path: Path = PROC_NET_ROUTE) -> IpAddress | None:
    """Find the IPv4 default gateway.

    Format (after a header line):
        Iface  Destination  Gateway  Flags  RefCnt  Use  Metric  Mask ...
    """
    try:
        content = path.read_text(errors="replace")
    except OSError as e:
        log.debug(f"No routing table: {e}")
        return None

    for line in content.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 3 or parts[1] != "00000000":
            continue
        try:
            gateway = parse_hex_ip(parts[2])
        except InvalidFormat as e:
            log.debug(f"Ignoring default route: {e}")
            continue
        # On-link default routes have no gateway
        if int(gateway.value) != 0:
            return gateway

    return None


def dns_servers(path: Path = RESOLV_CONF) -> list[IpAddress]:
    """Read ``nameserver`` entries from resolv.conf, in file order."""
    try:
        content = path.read_text(errors="replace")
    except OSError as e:
        log.debug(f"No resolver configuration: {e}")
        return []

    servers: list[IpAddress] = []
    for line in content.splitlines():
        parts = line.strip().split()
        if len(parts) < 2 or parts[0] != "nameserver":
            continue
        try:
            server = IpAddress.parse(parts[1].split("%", 1)[0])
        except InvalidFormat as e:
            log.debug(f"Ignoring nameserver: {e}")
            continue
        if server not in servers:
            servers.append(server)

    return servers
