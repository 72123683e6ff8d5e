"""Vendor resolver (MAC → OUI vendor name).

Optional enrichment backed by a plain-text OUI file. Understood layouts:

    D85ED3<TAB>GIGA-BYTE TECHNOLOGY CO., LTD.          (simple)
    00:00:0C<TAB>Cisco<TAB>Cisco Systems, Inc          (Wireshark manuf)
    00-22-72   (hex)<TAB><TAB>American Micro-Fuel     (IEEE oui.txt)

Lines starting with '#' and sub-allocated ranges (``.../28``) are ignored.
"""

from __future__ import annotations

import re
from pathlib import Path

from lanbar.models.address_types import MacAddress
from lanbar.utils.logger import Logger

UNKNOWN_VENDOR = "unknown"

_HEX_DIGIT = re.compile(r"[0-9A-Fa-f]")
_IEEE_MARKERS = ("(hex)", "(base 16)")

log = Logger.for_module("backends.vendor")


def normalize_oui(raw: str) -> str | None:
    """Normalise an OUI string to ``aa:bb:cc``, or None if it is not one."""
    digits = _HEX_DIGIT.findall(raw)
    if len(digits) != 6 or len(raw.replace(":", "").replace("-", "")) != 6:
        return None
    pairs = ["".join(digits[i : i + 2]).lower() for i in range(0, 6, 2)]
    return ":".join(pairs)


def parse_oui_table(content: str) -> dict[str, str]:
    """Parse OUI file content into an ``aa:bb:cc`` → vendor mapping."""
    mapping: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        parts = re.split(r"\s+", line, maxsplit=1)
        if len(parts) < 2 or "/" in parts[0]:
            continue

        oui = normalize_oui(parts[0])
        if oui is None:
            continue

        rest = parts[1].strip()
        for marker in _IEEE_MARKERS:
            if rest.startswith(marker):
                rest = rest[len(marker) :].strip()
        vendor = rest.split("\t", 1)[0].strip()
        if vendor:
            mapping[oui] = vendor

    return mapping


class VendorLookup:
    """In-memory OUI table loaded from a file."""

    def __init__(self, table: dict[str, str] | None = None) -> None:
        self._table = table or {}

    @classmethod
    def from_file(cls, path: Path) -> VendorLookup:
        """Load a table; a missing or unreadable file gives an empty table."""
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            log.warning(f"Vendor database not loaded: {e}")
            return cls()
        table = parse_oui_table(content)
        log.debug(f"Loaded {len(table)} OUI entries from {path}")
        return cls(table)

    def vendor_for(self, mac: MacAddress | None) -> str:
        """Return the vendor for a MAC, or ``"unknown"``."""
        if mac is None:
            return UNKNOWN_VENDOR
        return self._table.get(mac.oui, UNKNOWN_VENDOR)

    def __len__(self) -> int:
        return len(self._table)
