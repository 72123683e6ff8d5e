"""Probe command - one discovery run rendered as Waybar JSON.

The payload is always a well-formed JSON object; failures are reported
through its content, never through the exit status.
"""

from __future__ import annotations

from dataclasses import replace

from lanbar.backends.base import SourceUnavailable
from lanbar.backends.hostnames import HostnameResolver
from lanbar.backends.interfaces import InterfaceCollector
from lanbar.backends.neighbors import NeighborCollector
from lanbar.backends.routes import default_gateway, dns_servers
from lanbar.backends.vendor import VendorLookup
from lanbar.classifier import classify
from lanbar.config import ProbeConfig
from lanbar.display.waybar import RenderError, WaybarFormatter, fallback_json
from lanbar.models.network_models import RenderResult
from lanbar.models.snapshot_models import ClassifiedSnapshot, NetworkSnapshot
from lanbar.snapshot import build
from lanbar.utils.logger import Logger

log = Logger.for_module("commands.probe")


def collect_snapshot(
    config: ProbeConfig,
    interface_collector: InterfaceCollector | None = None,
    neighbor_collector: NeighborCollector | None = None,
) -> NetworkSnapshot:
    """Run the collectors and merge their output.

    Raises:
        SourceUnavailable: If the interface table cannot be read at all.
    """
    interface_collector = interface_collector or InterfaceCollector()
    neighbor_collector = neighbor_collector or NeighborCollector(
        timeout=config.neighbor_timeout
    )

    interfaces = interface_collector.list_interfaces()
    log.debug(f"Found {len(interfaces)} interfaces")

    snapshot = build(
        interfaces,
        neighbor_collector.list_neighbors,
        gateway=default_gateway(),
        dns_servers=dns_servers(),
        max_workers=config.workers,
    )

    if not config.resolve_hostnames:
        return snapshot

    resolver = HostnameResolver(timeout=config.hostname_timeout, max_workers=config.workers)
    ips = [n.ip for entries in snapshot.neighbors_by_interface.values() for n in entries]
    hostnames = resolver.resolve_all(ips)
    log.debug(f"Resolved {len(hostnames)} of {len(set(ips))} neighbor hostnames")
    return replace(snapshot, hostnames=hostnames)


def collect_classified(
    config: ProbeConfig,
    interface_collector: InterfaceCollector | None = None,
    neighbor_collector: NeighborCollector | None = None,
) -> ClassifiedSnapshot:
    """Collect and classify in one step."""
    return classify(collect_snapshot(config, interface_collector, neighbor_collector))


def make_formatter(config: ProbeConfig) -> WaybarFormatter:
    """Formatter configured for vendor enrichment and loopback display."""
    vendor_lookup = VendorLookup.from_file(config.vendor_db) if config.vendor_db else None
    return WaybarFormatter(vendor_lookup=vendor_lookup, show_loopback=config.show_loopback)


def run_pipeline(
    config: ProbeConfig,
    interface_collector: InterfaceCollector | None = None,
    neighbor_collector: NeighborCollector | None = None,
) -> RenderResult:
    """Collect, build, classify and render.

    Only a total interface discovery failure becomes an error rendering;
    per-interface failures are already folded into the snapshot.

    Raises:
        RenderError: If the formatter cannot render the snapshot.
    """
    try:
        classified = collect_classified(config, interface_collector, neighbor_collector)
    except SourceUnavailable as e:
        log.error(f"Interface discovery failed: {e}")
        return WaybarFormatter.render_error("interface discovery", e)

    return make_formatter(config).render(classified)


def probe_payload(
    config: ProbeConfig,
    interface_collector: InterfaceCollector | None = None,
    neighbor_collector: NeighborCollector | None = None,
) -> str:
    """JSON line for one invocation; never raises."""
    try:
        return run_pipeline(config, interface_collector, neighbor_collector).to_json()
    except RenderError as e:
        log.error(f"Rendering failed: {e}")
        return fallback_json()
    except Exception as e:
        log.exception("Probe failed")
        try:
            return WaybarFormatter.render_error("probe", e).to_json()
        except Exception:
            return fallback_json()


def run_probe(config: ProbeConfig) -> None:
    """Print one Waybar JSON line."""
    print(probe_payload(config), flush=True)
