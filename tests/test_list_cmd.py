"""Tests for the exported snapshot report."""

from dataclasses import replace

from lanbar.backends.vendor import VendorLookup
from lanbar.classifier import classify
from lanbar.commands.list_cmd import build_report
from lanbar.models.address_types import InterfaceName, IpAddress, MacAddress
from lanbar.models.constants import InterfaceKind, NeighborState, OperState
from lanbar.models.snapshot_models import Interface, NeighborEntry, NetworkSnapshot

ETH0 = InterfaceName.parse("eth0")
LO = InterfaceName.parse("lo")


def _classified():
    gateway = IpAddress.parse("192.168.1.1")
    return classify(
        NetworkSnapshot(
            interfaces=(
                Interface(
                    name=ETH0,
                    kind=InterfaceKind.ETHERNET,
                    oper_state=OperState.UP,
                    addresses=frozenset(
                        {IpAddress.parse("fe80::5"), IpAddress.parse("192.168.1.5")}
                    ),
                    mac=MacAddress.parse("aa:bb:cc:00:00:05"),
                ),
                Interface(name=LO, kind=InterfaceKind.LOOPBACK, oper_state=OperState.DOWN),
            ),
            neighbors_by_interface={
                ETH0: (
                    NeighborEntry(
                        interface=ETH0,
                        ip=gateway,
                        mac=MacAddress.parse("aa:bb:cc:00:00:01"),
                        state=NeighborState.REACHABLE,
                    ),
                ),
            },
            gateway=gateway,
            dns_servers=(gateway,),
        )
    )


def test_build_report():
    """Every interface is exported with its neighbors and health."""
    report = build_report(
        _classified(),
        hostname="workstation",
        vendor_lookup=VendorLookup({"aa:bb:cc": "Acme Corp"}),
    )

    assert report.hostname == "workstation"
    assert [iface.name for iface in report.interfaces] == ["eth0", "lo"]

    eth0 = report.interfaces[0]
    assert eth0.kind == "ethernet"
    assert eth0.health == "healthy"
    assert eth0.addresses == ["192.168.1.5", "fe80::5"]
    assert eth0.mac == "aa:bb:cc:00:00:05"
    assert eth0.neighbors[0].vendor == "Acme Corp"
    assert eth0.neighbors[0].is_gateway is True

    assert report.gateway == "192.168.1.1"
    assert report.dns_servers == ["192.168.1.1"]


def test_build_report_worst_health_ignores_hidden_loopback():
    """A down loopback only counts when loopback is displayed."""
    assert build_report(_classified(), hostname="h").worst_health == "healthy"
    assert (
        build_report(_classified(), hostname="h", show_loopback=True).worst_health
        == "unreachable"
    )


def test_build_report_hostnames():
    """Resolved neighbor names are exported; unresolved ones are null."""
    classified = _classified()
    named = classify(
        replace(
            classified.snapshot,
            hostnames={IpAddress.parse("192.168.1.1"): "router.lan"},
        )
    )

    assert build_report(named, hostname="h").interfaces[0].neighbors[0].hostname == "router.lan"
    assert build_report(classified, hostname="h").interfaces[0].neighbors[0].hostname is None
