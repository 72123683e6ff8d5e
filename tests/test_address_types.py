"""Tests for the validated address value types."""

import pytest

from lanbar.models.address_types import InterfaceName, InvalidFormat, IpAddress, MacAddress


def test_mac_address_canonical_form():
    """MACs are stored as bytes and printed lowercase colon-separated."""
    assert str(MacAddress.parse("AA:BB:CC:DD:EE:FF")) == "aa:bb:cc:dd:ee:ff"
    assert str(MacAddress.parse("AA-BB-CC-DD-EE-FF")) == "aa:bb:cc:dd:ee:ff"
    assert MacAddress.parse("aa:bb:cc:dd:ee:ff").octets == bytes.fromhex("aabbccddeeff")


def test_mac_address_equality_is_bytewise():
    """Different spellings of the same address compare equal."""
    assert MacAddress.parse("AA-BB-CC-DD-EE-FF") == MacAddress.parse("aa:bb:cc:dd:ee:ff")
    assert hash(MacAddress.parse("AA-BB-CC-DD-EE-FF")) == hash(
        MacAddress.from_bytes(bytes.fromhex("aabbccddeeff"))
    )
    assert MacAddress.parse("00:00:00:00:00:01") < MacAddress.parse("00:00:00:00:00:02")
    assert MacAddress.parse("01:00:00:00:00:00") > MacAddress.parse("00:ff:ff:ff:ff:ff")


@pytest.mark.parametrize(
    "raw",
    [
        "not-a-mac",
        "AA:BB:CC",
        "ZZ:BB:CC:DD:EE:FF",
        "aa:bb-cc:dd:ee:ff",
        "aabb.ccdd.eeff",
        "",
    ],
)
def test_mac_address_rejects_invalid(raw):
    """Malformed MAC text raises InvalidFormat naming the field and value."""
    with pytest.raises(InvalidFormat) as excinfo:
        MacAddress.parse(raw)
    assert excinfo.value.field == "mac address"
    assert excinfo.value.raw == raw
    assert "mac address" in str(excinfo.value)


def test_mac_address_from_bytes_length():
    """Only six-byte values are accepted."""
    with pytest.raises(InvalidFormat):
        MacAddress.from_bytes(b"\x00" * 5)


def test_mac_address_oui():
    """OUI is the first three octets."""
    assert MacAddress.parse("D8:5E:D3:01:02:03").oui == "d8:5e:d3"


def test_ip_address_parsing():
    """Both families parse; packed bytes are accepted too."""
    v4 = IpAddress.parse("192.168.1.10")
    v6 = IpAddress.parse("fe80::1")

    assert v4.version == 4
    assert v6.version == 6
    assert str(v6) == "fe80::1"
    assert IpAddress.parse(bytes([192, 168, 1, 10])) == v4
    assert IpAddress.parse("127.0.0.1").is_loopback


@pytest.mark.parametrize(
    "raw",
    ["999.999.1.1", "192.168.1", "192.168.1.1.1", "fe80::1%eth0", "gggg::1", ""],
)
def test_ip_address_rejects_invalid(raw):
    """Malformed IP text raises InvalidFormat."""
    with pytest.raises(InvalidFormat) as excinfo:
        IpAddress.parse(raw)
    assert excinfo.value.field == "ip address"


def test_ip_address_ordering():
    """IPv4 sorts before IPv6, and numerically within a family."""
    ips = [
        IpAddress.parse(raw)
        for raw in ["::1", "192.168.1.100", "10.0.0.2", "192.168.1.9", "10.0.0.10"]
    ]

    assert [str(ip) for ip in sorted(ips)] == [
        "10.0.0.2",
        "10.0.0.10",
        "192.168.1.9",
        "192.168.1.100",
        "::1",
    ]
    assert IpAddress.parse("255.255.255.255") < IpAddress.parse("::")


def test_interface_name_validation():
    """Interface names follow the kernel's naming rules."""
    assert str(InterfaceName.parse("wlp3s0")) == "wlp3s0"
    assert InterfaceName.parse("eth0") < InterfaceName.parse("wlan0")

    for raw in ["", "a" * 16, "eth 0", "eth0:1", "br/0", ".", ".."]:
        with pytest.raises(InvalidFormat):
            InterfaceName.parse(raw)
