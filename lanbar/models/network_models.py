"""Pydantic models for lanbar's JSON output."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RenderResult(BaseModel):
    """Status bar payload printed once per invocation.

    Serialized with ``by_alias=True`` so ``classes`` is emitted as ``class``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., description="Short bar label (e.g., '🖧 2')")
    tooltip: str = Field(..., description="Multi-line tooltip with Pango markup")
    alt: str = Field(..., description="Machine-readable state tag")
    classes: list[str] = Field(
        default_factory=list, alias="class", description="CSS classes for styling"
    )

    def to_json(self) -> str:
        """Serialize to the single-line JSON contract."""
        return self.model_dump_json(by_alias=True)


class NeighborInfo(BaseModel):
    """A neighbor device as exported by ``lanbar list``."""

    model_config = ConfigDict(frozen=True)

    ip: str = Field(..., description="Neighbor IP address")
    mac: str | None = Field(None, description="Hardware address (if resolved)")
    state: str = Field(..., description="reachable, stale, failed or unknown")
    hostname: str | None = Field(None, description="Reverse DNS name (if resolved)")
    vendor: str | None = Field(None, description="OUI vendor (if looked up)")
    is_gateway: bool = Field(False, description="Whether this is the default gateway")


class InterfaceReport(BaseModel):
    """A local interface and its classified neighbors."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Interface name (e.g., 'eth0', 'wlan0')")
    kind: str = Field(..., description="ethernet, wifi, loopback or other")
    oper_state: str = Field(..., description="up, down or unknown")
    health: str = Field(..., description="healthy, degraded, empty or unreachable")
    addresses: list[str] = Field(
        default_factory=list, description="IP addresses bound to this interface"
    )
    mac: str | None = Field(None, description="Interface MAC address (if available)")
    warning: str | None = Field(
        None, description="Neighbor lookup failure for this interface"
    )
    neighbors: list[NeighborInfo] = Field(
        default_factory=list, description="Devices seen on this segment"
    )


class SnapshotReport(BaseModel):
    """Complete classified snapshot for one invocation."""

    model_config = ConfigDict(frozen=True)

    hostname: str = Field(..., description="System hostname")
    interfaces: list[InterfaceReport] = Field(
        ..., description="Interfaces in name order"
    )
    worst_health: str = Field(..., description="Worst health of displayed interfaces")
    gateway: str | None = Field(None, description="Default gateway (if detectable)")
    dns_servers: list[str] = Field(
        default_factory=list, description="Configured DNS servers"
    )
