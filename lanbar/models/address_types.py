"""Validated value types for network addressing.

Construction is the only validation gate: every ``parse`` either returns a
valid, immutable instance or raises :class:`InvalidFormat`. Downstream code
never re-checks these values.

Usage:
    from lanbar.models.address_types import IpAddress, MacAddress

    mac = MacAddress.parse("AA-BB-CC-DD-EE-FF")
    str(mac)  # "aa:bb:cc:dd:ee:ff"

    ip = IpAddress.parse("192.168.1.10")
    ip.version  # 4
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from functools import total_ordering

_MAC_RE = re.compile(r"^[0-9A-Fa-f]{2}([:-])(?:[0-9A-Fa-f]{2}\1){4}[0-9A-Fa-f]{2}$")

# Linux IFNAMSIZ is 16 including the terminating NUL
_IFNAME_MAX = 15


class InvalidFormat(ValueError):
    """Raised when raw text cannot be turned into a domain value."""

    def __init__(self, field: str, raw: object, reason: str | None = None) -> None:
        self.field = field
        self.raw = raw
        self.reason = reason
        message = f"Invalid {field}: {raw!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


@dataclass(frozen=True, order=True)
class MacAddress:
    """A 6-byte hardware address, ordered and compared byte-wise."""

    octets: bytes

    def __post_init__(self) -> None:
        """Reject anything that is not exactly six bytes."""
        if not isinstance(self.octets, bytes) or len(self.octets) != 6:
            raise InvalidFormat("mac address", self.octets, "expected 6 bytes")

    @classmethod
    def parse(cls, raw: str) -> MacAddress:
        """Parse ``aa:bb:cc:dd:ee:ff`` or ``AA-BB-CC-DD-EE-FF`` text.

        Raises:
            InvalidFormat: If the text is not six separated hex octets.
        """
        if not isinstance(raw, str) or not _MAC_RE.match(raw.strip()):
            raise InvalidFormat("mac address", raw)
        hex_digits = re.sub(r"[:-]", "", raw.strip())
        return cls(bytes.fromhex(hex_digits))

    @classmethod
    def from_bytes(cls, raw: bytes) -> MacAddress:
        """Build from a raw 6-byte value."""
        return cls(bytes(raw))

    @property
    def oui(self) -> str:
        """Organizationally unique identifier (first three octets)."""
        return ":".join(f"{b:02x}" for b in self.octets[:3])

    def __str__(self) -> str:
        """Return the canonical lowercase colon-separated form."""
        return ":".join(f"{b:02x}" for b in self.octets)


@total_ordering
@dataclass(frozen=True)
class IpAddress:
    """An IPv4 or IPv6 address. IPv4 sorts before IPv6, then numerically."""

    value: ipaddress.IPv4Address | ipaddress.IPv6Address

    @classmethod
    def parse(cls, raw: str | bytes) -> IpAddress:
        """Parse a textual literal, or a packed 4/16 byte value.

        Raises:
            InvalidFormat: If the literal is not a valid IPv4 or IPv6 address.
        """
        if isinstance(raw, bytes):
            if len(raw) not in (4, 16):
                raise InvalidFormat("ip address", raw, "expected 4 or 16 bytes")
            return cls(ipaddress.ip_address(raw))

        if not isinstance(raw, str) or "%" in raw:
            raise InvalidFormat("ip address", raw)
        try:
            return cls(ipaddress.ip_address(raw.strip()))
        except ValueError as e:
            raise InvalidFormat("ip address", raw) from e

    @property
    def version(self) -> int:
        """IP family: 4 or 6."""
        return self.value.version

    @property
    def is_loopback(self) -> bool:
        """Whether this is 127.0.0.0/8 or ::1."""
        return self.value.is_loopback

    @property
    def is_private(self) -> bool:
        """Whether this falls in a private (RFC1918 / ULA) range."""
        return self.value.is_private

    def sort_key(self) -> tuple[int, int]:
        """Key ordering IPv4 before IPv6, then by numeric value."""
        return (self.value.version, int(self.value))

    def __lt__(self, other: object) -> bool:
        """Compare by family, then numerically."""
        if not isinstance(other, IpAddress):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        """Return the compressed textual form."""
        return str(self.value)


@dataclass(frozen=True, order=True)
class InterfaceName:
    """An OS interface name such as ``eth0`` or ``wlan0``."""

    value: str

    def __post_init__(self) -> None:
        """Validate against the Linux interface naming rules."""
        raw = self.value
        if not isinstance(raw, str) or not raw:
            raise InvalidFormat("interface name", raw, "empty")
        if len(raw) > _IFNAME_MAX:
            raise InvalidFormat("interface name", raw, "longer than 15 characters")
        if raw in (".", ".."):
            raise InvalidFormat("interface name", raw)
        if any(ch.isspace() or ch in "/:" for ch in raw):
            raise InvalidFormat("interface name", raw, "contains '/', ':' or space")

    @classmethod
    def parse(cls, raw: str) -> InterfaceName:
        """Validate and wrap a raw interface name."""
        return cls(raw)

    def __str__(self) -> str:
        """Return the bare interface name."""
        return self.value
