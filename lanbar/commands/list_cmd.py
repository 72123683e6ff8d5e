"""List command - prints the classified snapshot as JSON."""

from __future__ import annotations

import socket
import sys
from pathlib import Path

from lanbar.backends.vendor import VendorLookup
from lanbar.classifier import worst_health
from lanbar.commands.probe_cmd import collect_classified
from lanbar.config import ProbeConfig
from lanbar.models.network_models import InterfaceReport, NeighborInfo, SnapshotReport
from lanbar.models.snapshot_models import ClassifiedSnapshot


def build_report(
    classified: ClassifiedSnapshot,
    hostname: str,
    vendor_lookup: VendorLookup | None = None,
    show_loopback: bool = False,
) -> SnapshotReport:
    """Convert a classified snapshot into the exported report model.

    All interfaces are exported; ``show_loopback`` only affects which of
    them count towards ``worst_health``.
    """
    snapshot = classified.snapshot
    interfaces = []
    for iface in snapshot.interfaces:
        neighbors = [
            NeighborInfo(
                ip=str(n.ip),
                mac=str(n.mac) if n.mac else None,
                hostname=snapshot.hostname(n.ip),
                state=n.state.value,
                vendor=vendor_lookup.vendor_for(n.mac) if vendor_lookup else None,
                is_gateway=snapshot.gateway is not None and n.ip == snapshot.gateway,
            )
            for n in snapshot.neighbors(iface.name)
        ]
        interfaces.append(
            InterfaceReport(
                name=str(iface.name),
                kind=iface.kind.value,
                oper_state=iface.oper_state.value,
                health=classified.health(iface.name).value,
                addresses=[str(ip) for ip in iface.sorted_addresses()],
                mac=str(iface.mac) if iface.mac else None,
                warning=snapshot.lookup_failures.get(iface.name),
                neighbors=neighbors,
            )
        )

    displayed = [
        classified.health(iface.name)
        for iface in snapshot.interfaces
        if show_loopback or not iface.is_loopback
    ]
    return SnapshotReport(
        hostname=hostname,
        interfaces=interfaces,
        worst_health=worst_health(displayed).value,
        gateway=str(snapshot.gateway) if snapshot.gateway else None,
        dns_servers=[str(ip) for ip in snapshot.dns_servers],
    )


def run_list(config: ProbeConfig, export_filename: str | None = None) -> None:
    """Collect a snapshot and print it as indented JSON.

    Args:
        config: Probe settings.
        export_filename: Also write the JSON to this file.

    Raises:
        SourceUnavailable: If the interface table cannot be read.
    """
    vendor_lookup = VendorLookup.from_file(config.vendor_db) if config.vendor_db else None
    report = build_report(
        collect_classified(config),
        hostname=socket.gethostname(),
        vendor_lookup=vendor_lookup,
        show_loopback=config.show_loopback,
    )
    output = report.model_dump_json(indent=2)
    print(output)

    if export_filename:
        Path(export_filename).write_text(output)
        print(f"✓ JSON exported to: {export_filename}", file=sys.stderr)
