"""Runtime configuration gathered from LANBAR_* environment variables."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from pathlib import Path

from lanbar.utils.env import get_env

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_NEIGHBOR_TIMEOUT = 2.0
DEFAULT_WORKERS = 4
DEFAULT_HOSTNAME_TIMEOUT = 1.0


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass(frozen=True)
class ProbeConfig:
    """Settings for one probe invocation.

    Attributes:
        log_level: Level passed to Logger.configure().
        neighbor_timeout: Seconds allowed for each neighbor table query.
        workers: Number of concurrent neighbor lookups (1 disables threading).
        vendor_db: Optional OUI file used for vendor enrichment.
        show_loopback: Whether loopback interfaces appear in the tooltip.
        resolve_hostnames: Look up neighbor names through the system resolver.
        hostname_timeout: Seconds allowed for all reverse lookups together.
    """

    log_level: str = DEFAULT_LOG_LEVEL
    neighbor_timeout: float = DEFAULT_NEIGHBOR_TIMEOUT
    workers: int = DEFAULT_WORKERS
    vendor_db: Path | None = None
    show_loopback: bool = False
    resolve_hostnames: bool = True
    hostname_timeout: float = DEFAULT_HOSTNAME_TIMEOUT

    def __post_init__(self) -> None:
        """Validate numeric ranges."""
        if not math.isfinite(self.neighbor_timeout) or self.neighbor_timeout <= 0:
            raise ConfigError("neighbor_timeout must be a finite number greater than zero")
        if not math.isfinite(self.hostname_timeout) or self.hostname_timeout <= 0:
            raise ConfigError("hostname_timeout must be a finite number greater than zero")
        if self.workers < 1:
            raise ConfigError("workers must be at least 1")

    def with_overrides(self, **overrides: object) -> ProbeConfig:
        """Return a copy with the non-None overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def load_config() -> ProbeConfig:
    """Build a ProbeConfig from the environment.

    Raises:
        EnvVarTypeError: If a variable cannot be coerced to its type.
        ConfigError: If a value is out of range.
    """
    vendor_db = get_env("LANBAR_VENDOR_DB", log=True)
    return ProbeConfig(
        log_level=get_env("LANBAR_LOG_LEVEL", default=DEFAULT_LOG_LEVEL, log=True),
        neighbor_timeout=get_env(
            "LANBAR_NEIGHBOR_TIMEOUT",
            default=DEFAULT_NEIGHBOR_TIMEOUT,
            as_type=float,
            log=True,
        ),
        workers=get_env("LANBAR_WORKERS", default=DEFAULT_WORKERS, as_type=int, log=True),
        vendor_db=Path(vendor_db) if vendor_db else None,
        show_loopback=get_env(
            "LANBAR_SHOW_LOOPBACK", default=False, as_type=bool, log=True
        ),
        resolve_hostnames=get_env(
            "LANBAR_RESOLVE_HOSTNAMES", default=True, as_type=bool, log=True
        ),
        hostname_timeout=get_env(
            "LANBAR_HOSTNAME_TIMEOUT",
            default=DEFAULT_HOSTNAME_TIMEOUT,
            as_type=float,
            log=True,
        ),
    )
