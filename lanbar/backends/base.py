"""Errors and abstract base classes for discovery backends.

Backends only read OS tables; none of them change system state.

- each neighbor table source implements the same interface
- a source that cannot be opened raises SourceUnavailable
"""

from abc import ABC, abstractmethod

from lanbar.models.address_types import InterfaceName
from lanbar.models.snapshot_models import NeighborEntry


class CollectionError(Exception):
    """Base class for failures while reading an OS table."""


class SourceUnavailable(CollectionError):
    """Raised when a whole query channel cannot be opened or read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"{source} unavailable: {reason}")


class NeighborSource(ABC):
    """A neighbor/association table that can be read per interface."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier used in logs and error messages."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this table can be queried on this system."""
        pass

    @abstractmethod
    def read(self, interface: InterfaceName) -> list[NeighborEntry]:
        """Read the entries observed on one interface, in table order.

        Raises
        ------
            SourceUnavailable: If the table cannot be read for this interface.
        """
        pass
