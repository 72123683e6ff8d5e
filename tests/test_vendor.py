"""Tests for the OUI vendor resolver."""

from lanbar.backends.vendor import (
    UNKNOWN_VENDOR,
    VendorLookup,
    normalize_oui,
    parse_oui_table,
)
from lanbar.models.address_types import MacAddress

OUI_CONTENT = (
    "# OUI table\n"
    "\n"
    "D85ED3\tGIGA-BYTE TECHNOLOGY CO., LTD.\n"
    "00:00:0C\tCisco\tCisco Systems, Inc\n"
    "00-22-72   (hex)\t\tAmerican Micro-Fuel Device Corp.\n"
    "002272     (base 16)\t\tAmerican Micro-Fuel Device Corp.\n"
    "00:1B:C5:00:00:00/36\tConverge\tConverging Systems\n"
    "nonsense line\n"
)


def test_normalize_oui():
    """Common OUI spellings normalize to aa:bb:cc."""
    assert normalize_oui("D85ED3") == "d8:5e:d3"
    assert normalize_oui("00-22-72") == "00:22:72"
    assert normalize_oui("00:00:0C") == "00:00:0c"
    assert normalize_oui("D85ED") is None
    assert normalize_oui("nonsense") is None


def test_parse_oui_table_formats():
    """Simple, Wireshark and IEEE layouts are all understood."""
    table = parse_oui_table(OUI_CONTENT)

    assert table == {
        "d8:5e:d3": "GIGA-BYTE TECHNOLOGY CO., LTD.",
        "00:00:0c": "Cisco",
        "00:22:72": "American Micro-Fuel Device Corp.",
    }


def test_vendor_lookup(tmp_path):
    """Known prefixes resolve; anything else is unknown."""
    oui_file = tmp_path / "oui.txt"
    oui_file.write_text(OUI_CONTENT)

    lookup = VendorLookup.from_file(oui_file)

    assert len(lookup) == 3
    assert lookup.vendor_for(MacAddress.parse("D8:5E:D3:12:34:56")) == (
        "GIGA-BYTE TECHNOLOGY CO., LTD."
    )
    assert lookup.vendor_for(MacAddress.parse("02:00:00:00:00:01")) == UNKNOWN_VENDOR
    assert lookup.vendor_for(None) == UNKNOWN_VENDOR


def test_vendor_lookup_missing_file(tmp_path):
    """A missing database degrades to an empty table."""
    lookup = VendorLookup.from_file(tmp_path / "missing.txt")

    assert len(lookup) == 0
    assert lookup.vendor_for(MacAddress.parse("d8:5e:d3:00:00:01")) == UNKNOWN_VENDOR
