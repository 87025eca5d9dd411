"""
Shared types for the RDS health system.

This module defines the telemetry sample and the database topology
vocabulary used by every package: nodes, clusters, engines, storage
and compute descriptions. Rendering helpers (__str__) produce the short
human-readable forms used by the console output.

All types use @dataclass. Samples are frozen since they are shared
between batches and evaluators.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


# Type aliases for common patterns
NodeId = str
"""Stable backend identifier of a database instance (e.g. db-ABCDEFG...)."""


@dataclass(frozen=True)
class Sample:
    """
    A single telemetry observation.

    Attributes:
        timestamp: When the observation was taken (timezone-aware).
        value: Observed value. NaN marks a missing datapoint.
    """

    timestamp: datetime
    value: float


Samples = list[Sample]
"""Time-ordered sequence of samples for one raw metric."""


def values(samples: Samples) -> list[float]:
    """Project samples onto their values."""
    return [s.value for s in samples]


class BiB(int):
    """Binary byte count rendered with the largest fitting unit."""

    _UNITS = (
        (1 << 40, "TiB"),
        (1 << 30, "GiB"),
        (1 << 20, "MiB"),
        (1 << 10, "KiB"),
    )

    def __str__(self) -> str:
        for size, unit in self._UNITS:
            if self >= size:
                return f"{self // size} {unit}"
        return f"{int(self)} bytes"


KiB = BiB(1 << 10)
MiB = BiB(1 << 20)
GiB = BiB(1 << 30)
TiB = BiB(1 << 40)


class GHz(float):
    def __str__(self) -> str:
        return f"{float(self):.2f} GHz"


@dataclass
class Engine:
    """Database engine and its version."""

    id: str
    version: str

    def __str__(self) -> str:
        return f"{self.id} v{self.version}"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "version": self.version}


@dataclass
class Storage:
    """
    Storage attached to a node.

    The type "memory" is used for RAM so that both can be rendered the
    same way within a compute description.
    """

    type: str
    size: BiB

    def __str__(self) -> str:
        if self.type == "memory":
            return f"mem {self.size}"
        return f"storage {self.type} {self.size}"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "size": int(self.size)}


@dataclass
class CPU:
    cores: int
    clock: GHz

    def __str__(self) -> str:
        return f"{self.cores} vcpu {self.clock}"

    def to_dict(self) -> dict[str, Any]:
        return {"cores": self.cores, "clock": float(self.clock)}


@dataclass
class Compute:
    """Compute capacity of an instance class (cpu and memory)."""

    cpu: CPU | None = None
    memory: Storage | None = None

    def __str__(self) -> str:
        parts = [str(p) for p in (self.cpu, self.memory) if p is not None]
        return ", ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.cpu is not None:
            data["cpu"] = self.cpu.to_dict()
        if self.memory is not None:
            data["memory"] = self.memory.to_dict()
        return data


@dataclass
class Node:
    """
    A single database instance.

    Attributes:
        id: Stable backend identifier used to query telemetry.
        name: Human name of the instance (DB instance identifier).
        type: Instance class (e.g. db.r5.large).
        zones: Availability zones the instance is placed in.
        engine: Database engine, if known.
        storage: Allocated storage, if known.
        compute: Compute capacity of the instance class, if known.
        read_only: True for cluster readers.
    """

    id: NodeId
    name: str
    type: str = ""
    zones: list[str] = field(default_factory=list)
    engine: Engine | None = None
    storage: Storage | None = None
    compute: Compute | None = None
    read_only: bool = False

    def __str__(self) -> str:
        text = self.type
        if self.engine is not None:
            text = f"{text} {self.engine}"
        parts = [str(p) for p in (self.compute, self.storage) if p is not None and str(p)]
        if parts:
            text = f"{text} ({', '.join(parts)})"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "zones": list(self.zones),
            "engine": self.engine.to_dict() if self.engine else None,
            "storage": self.storage.to_dict() if self.storage else None,
            "compute": self.compute.to_dict() if self.compute else None,
            "read_only": self.read_only,
        }


@dataclass
class Cluster:
    """A database cluster with its writer and reader nodes."""

    id: str
    engine: Engine | None = None
    writer: list[Node] = field(default_factory=list)
    reader: list[Node] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "engine": self.engine.to_dict() if self.engine else None,
            "writer": [n.to_dict() for n in self.writer],
            "reader": [n.to_dict() for n in self.reader],
        }


@dataclass
class Region:
    """Topology of a region: clusters and standalone nodes."""

    clusters: list[Cluster] = field(default_factory=list)
    nodes: list[Node] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "clusters": [c.to_dict() for c in self.clusters],
            "nodes": [n.to_dict() for n in self.nodes],
        }
