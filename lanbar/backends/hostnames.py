"""Hostname backend - reverse DNS names for neighbor addresses.

Lookups go through the system resolver (``socket.gethostbyaddr``), so
/etc/hosts, nss-mdns and the local DNS cache all apply. The whole batch shares
one deadline; lookups still pending at the deadline are left out. Workers are
daemon threads, so an abandoned lookup never delays process exit.
"""

from __future__ import annotations

import queue
import socket
import threading
import time
from collections.abc import Callable, Iterable

from lanbar.config import DEFAULT_HOSTNAME_TIMEOUT, DEFAULT_WORKERS
from lanbar.models.address_types import IpAddress
from lanbar.utils.logger import Logger

log = Logger.for_module("backends.hostnames")


def reverse_lookup(ip: IpAddress) -> str | None:
    """Resolve one address to a hostname, or None if it has no name."""
    try:
        name, _aliases, _addresses = socket.gethostbyaddr(str(ip))
    except (OSError, UnicodeError):
        # herror/gaierror are OSError subclasses
        return None
    if not name or name == str(ip):
        return None
    return name


class HostnameResolver:
    """Resolves a batch of addresses concurrently under a single deadline."""

    def __init__(
        self,
        timeout: float = DEFAULT_HOSTNAME_TIMEOUT,
        max_workers: int = DEFAULT_WORKERS,
        lookup: Callable[[IpAddress], str | None] = reverse_lookup,
    ) -> None:
        """Initialize the resolver.

        Args:
            timeout: Seconds to wait for the whole batch.
            max_workers: Concurrent lookups.
            lookup: Single-address resolver (reverse DNS by default).
        """
        self.timeout = timeout
        self.max_workers = max_workers
        self.lookup = lookup

    def resolve_all(self, ips: Iterable[IpAddress]) -> dict[IpAddress, str]:
        """Map each address that resolved in time to its hostname."""
        unique = sorted(set(ips))
        if not unique:
            return {}

        todo: queue.SimpleQueue[IpAddress] = queue.SimpleQueue()
        for ip in unique:
            todo.put(ip)
        names: dict[IpAddress, str] = {}
        lock = threading.Lock()

        def worker() -> None:
            while True:
                try:
                    ip = todo.get_nowait()
                except queue.Empty:
                    return
                name = self.lookup(ip)
                if name:
                    with lock:
                        names[ip] = name

        threads = [
            threading.Thread(target=worker, name=f"lanbar-rdns-{i}", daemon=True)
            for i in range(min(self.max_workers, len(unique)))
        ]
        for thread in threads:
            thread.start()

        deadline = time.monotonic() + self.timeout
        for thread in threads:
            thread.join(max(0.0, deadline - time.monotonic()))

        # late results are not picked up once the copy is taken
        with lock:
            resolved = dict(sorted(names.items()))

        busy = sum(1 for thread in threads if thread.is_alive())
        if busy:
            log.debug(f"{busy} reverse lookups still pending after {self.timeout}s")
        return resolved
