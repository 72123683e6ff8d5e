"""Tests for Waybar JSON rendering."""

import json

import pytest

from lanbar.backends.vendor import VendorLookup
from lanbar.classifier import classify
from lanbar.display.waybar import RenderError, WaybarFormatter, fallback_json
from lanbar.models.address_types import InterfaceName, IpAddress, MacAddress
from lanbar.models.constants import Health, InterfaceKind, NeighborState, OperState
from lanbar.models.snapshot_models import (
    ClassifiedSnapshot,
    Interface,
    NeighborEntry,
    NetworkSnapshot,
)

ETH0 = InterfaceName.parse("eth0")
WLAN0 = InterfaceName.parse("wlan0")
LO = InterfaceName.parse("lo")

GREEN = "<span color='#00FF00'>"
YELLOW = "<span color='#FFFF00'>"
GRAY = "<span color='#888888'>"


def _entry(iface, ip, state=NeighborState.REACHABLE, mac=None):
    return NeighborEntry(
        interface=iface,
        ip=IpAddress.parse(ip),
        mac=MacAddress.parse(mac) if mac else None,
        state=state,
    )


def _home_network(**kwargs):
    """eth0 with one reachable host, wlan0 with one reachable and one stale."""
    return classify(
        NetworkSnapshot(
            interfaces=(
                Interface(name=ETH0, kind=InterfaceKind.ETHERNET, oper_state=OperState.UP),
                Interface(name=WLAN0, kind=InterfaceKind.WIFI, oper_state=OperState.UP),
            ),
            neighbors_by_interface={
                ETH0: (_entry(ETH0, "192.168.1.10", mac="aa:bb:cc:dd:ee:10"),),
                WLAN0: (
                    _entry(WLAN0, "192.168.1.20"),
                    _entry(WLAN0, "192.168.1.21", NeighborState.STALE),
                ),
            },
            **kwargs,
        )
    )


def test_render_home_network():
    """Count, worst health and per-interface coloring."""
    result = WaybarFormatter().render(_home_network())

    assert result.text == "🖧 2"
    assert result.alt == "degraded"
    assert result.classes == ["network", "degraded"]
    assert result.tooltip == (
        f"{GREEN}eth0: healthy (1 device)</span>\n"
        f"  └─ {GREEN}192.168.1.10 (aa:bb:cc:dd:ee:10) reachable</span>\n"
        "\n"
        f"{YELLOW}wlan0: degraded (2 devices)</span>\n"
        f"  ├─ {GREEN}192.168.1.20 reachable</span>\n"
        f"  └─ {YELLOW}192.168.1.21 stale</span>"
    )


def test_render_json_contract():
    """Payload has exactly the four Waybar keys, with class as a list."""
    payload = json.loads(WaybarFormatter().render(_home_network()).to_json())

    assert set(payload) == {"text", "tooltip", "alt", "class"}
    assert payload["class"] == ["network", "degraded"]
    assert "\n" not in WaybarFormatter().render(_home_network()).to_json()


def test_render_is_idempotent():
    """Rendering the same snapshot twice gives byte-identical output."""
    formatter = WaybarFormatter()
    classified = _home_network()

    assert formatter.render(classified).to_json() == formatter.render(classified).to_json()


def test_render_unreachable_interface():
    """Unreachable interfaces are gray, show their warning and are not counted."""
    classified = classify(
        NetworkSnapshot(
            interfaces=(
                Interface(name=ETH0, oper_state=OperState.UP),
                Interface(name=WLAN0, oper_state=OperState.UP),
            ),
            neighbors_by_interface={ETH0: (), WLAN0: (_entry(WLAN0, "10.0.0.1"),)},
            lookup_failures={ETH0: "ip neigh unavailable: <timeout>"},
        )
    )

    result = WaybarFormatter().render(classified)

    assert result.text == "🖧 1"
    assert result.alt == "unreachable"
    assert f"{GRAY}eth0: unreachable (0 devices)</span>" in result.tooltip
    assert f"  └─ {GRAY}ip neigh unavailable: &lt;timeout&gt;</span>" in result.tooltip
    assert f"{GREEN}wlan0: healthy (1 device)</span>" in result.tooltip


def test_render_hides_loopback_by_default():
    """Loopback is neither shown nor counted unless requested."""
    classified = classify(
        NetworkSnapshot(
            interfaces=(
                Interface(name=ETH0, oper_state=OperState.UP),
                Interface(name=LO, kind=InterfaceKind.LOOPBACK, oper_state=OperState.UP),
            ),
            neighbors_by_interface={
                ETH0: (_entry(ETH0, "192.168.1.10"),),
                LO: (_entry(LO, "127.0.0.2"),),
            },
        )
    )

    hidden = WaybarFormatter().render(classified)
    shown = WaybarFormatter(show_loopback=True).render(classified)

    assert "lo:" not in hidden.tooltip
    assert hidden.text == "🖧 1"
    assert f"{GREEN}lo: healthy (1 device)</span>" in shown.tooltip
    assert shown.text == "🖧 2"


def test_render_no_interfaces():
    """Nothing to display renders as empty."""
    result = WaybarFormatter().render(classify(NetworkSnapshot()))

    assert result.text == "🖧 0"
    assert result.alt == "empty"
    assert result.tooltip == "No network interfaces found"


def test_render_gateway_and_dns():
    """The gateway neighbor is marked and external resolvers are listed."""
    gateway = IpAddress.parse("192.168.1.10")
    classified = _home_network(
        gateway=gateway, dns_servers=(gateway, IpAddress.parse("8.8.8.8"))
    )

    tooltip = WaybarFormatter().render(classified).tooltip

    assert "      Gateway (also DNS)" in tooltip
    assert "DNS: 8.8.8.8 (external)" in tooltip


def test_render_vendor():
    """Known vendors are appended to the neighbor description."""
    formatter = WaybarFormatter(vendor_lookup=VendorLookup({"aa:bb:cc": "Acme Corp"}))

    tooltip = formatter.render(_home_network()).tooltip

    assert "192.168.1.10 (aa:bb:cc:dd:ee:10) Acme Corp reachable" in tooltip


def test_render_inconsistent_snapshot():
    """A missing health is a RenderError, not a KeyError."""
    classified = ClassifiedSnapshot(
        snapshot=NetworkSnapshot(interfaces=(Interface(name=ETH0),)),
        health_by_interface={},
    )

    with pytest.raises(RenderError):
        WaybarFormatter().render(classified)


def test_render_error():
    """Error payloads are well-formed and escape their message."""
    result = WaybarFormatter.render_error("interface discovery", "permission <denied>")
    payload = json.loads(result.to_json())

    assert payload["text"] == "🖧 --"
    assert payload["alt"] == "error"
    assert payload["class"] == ["network", "error"]
    assert payload["tooltip"] == (
        "Unable to fetch network data\n\ninterface discovery: permission &lt;denied&gt;"
    )


def test_fallback_json():
    """The hardcoded fallback is valid Waybar JSON."""
    payload = json.loads(fallback_json())

    assert payload["text"] == "🖧 --"
    assert payload["class"] == ["network", "error"]
    assert Health.UNREACHABLE.value not in payload["class"]


def test_render_hostnames():
    """Resolved names follow the address and are escaped."""
    result = WaybarFormatter().render(
        _home_network(
            hostnames={
                IpAddress.parse("192.168.1.10"): "nas.lan",
                IpAddress.parse("192.168.1.21"): "<printer>",
            }
        )
    )

    assert f"{GREEN}192.168.1.10 nas.lan (aa:bb:cc:dd:ee:10) reachable</span>" in result.tooltip
    assert f"{GREEN}192.168.1.20 reachable</span>" in result.tooltip
    assert f"{YELLOW}192.168.1.21 &lt;printer&gt; stale</span>" in result.tooltip
