#!/usr/bin/env python3
"""lanbar CLI - command-line interface for lanbar."""

from pathlib import Path

import click

from lanbar.commands.probe_cmd import run_probe
from lanbar.config import ProbeConfig, load_config
from lanbar.display.waybar import WaybarFormatter
from lanbar.utils.env import EnvVarError
from lanbar.utils.logger import Logger


def _configure(debug: bool, **overrides) -> ProbeConfig:
    """Load env config, apply CLI overrides and set up logging.

    Raises:
        EnvVarError: If an environment variable has the wrong type.
        ValueError: If a value is out of range or the log level is unknown.
    """
    config = load_config().with_overrides(**overrides)
    if not Logger.is_configured():
        Logger.configure(level="DEBUG" if debug else config.log_level, output="stderr")
    elif debug:
        Logger.set_level("DEBUG")
    return config


@click.group()
def lanbar():
    """Discover devices on local network segments for status bars."""


@lanbar.command()
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Concurrent neighbor lookups (env: LANBAR_WORKERS)",
)
@click.option(
    "--timeout",
    "neighbor_timeout",
    type=float,
    default=None,
    help="Seconds per neighbor table query (env: LANBAR_NEIGHBOR_TIMEOUT)",
)
@click.option(
    "--vendor-db",
    type=click.Path(dir_okay=False),
    default=None,
    help="OUI file for vendor names (env: LANBAR_VENDOR_DB)",
)
@click.option(
    "--show-loopback",
    is_flag=True,
    help="Include loopback interfaces in the tooltip",
)
@click.option(
    "--no-hostnames",
    is_flag=True,
    help="Skip reverse DNS lookups (env: LANBAR_RESOLVE_HOSTNAMES=0)",
)
@click.option("--debug", is_flag=True, help="Log debug output to stderr")
def probe(workers, neighbor_timeout, vendor_db, show_loopback, no_hostnames, debug):
    r"""Print one Waybar JSON line and exit 0.

    \b
    Waybar config:
      "custom/lan": {
          "exec": "lanbar probe",
          "return-type": "json",
          "interval": 30
      }
    """
    try:
        config = _configure(
            debug,
            workers=workers,
            neighbor_timeout=neighbor_timeout,
            vendor_db=Path(vendor_db) if vendor_db else None,
            show_loopback=show_loopback or None,
            resolve_hostnames=False if no_hostnames else None,
        )
    except (EnvVarError, ValueError) as e:
        click.echo(WaybarFormatter.render_error("configuration", e).to_json())
        return

    run_probe(config)


@lanbar.command("list")
@click.option(
    "--export-file",
    default=None,
    help="Also write the JSON snapshot to this file",
)
@click.option("--debug", is_flag=True, help="Log debug output to stderr")
def list_snapshot(export_file, debug):
    """Print the classified snapshot as JSON."""
    from lanbar.backends.base import SourceUnavailable
    from lanbar.commands.list_cmd import run_list

    try:
        config = _configure(debug)
    except (EnvVarError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    try:
        run_list(config, export_filename=export_file)
    except SourceUnavailable as e:
        raise click.ClickException(str(e)) from e


@lanbar.command()
@click.option("--verbose", "-v", is_flag=True, help="Show detailed version information")
def version(verbose):
    """Display lanbar version information."""
    from lanbar.commands.version_cmd import run_version

    run_version(verbose=verbose)


if __name__ == "__main__":
    lanbar()
