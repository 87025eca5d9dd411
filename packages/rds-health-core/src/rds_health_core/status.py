"""
Evaluation results and their rollup.

A Status is the outcome of one rule evaluation. Node, cluster and region
statuses aggregate child codes with worst-wins semantics:

    FAILURE > WARNING > SUCCESS > UNKNOWN

An empty set of children rolls up to UNKNOWN.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntEnum
from typing import Any, Iterable

from rds_health_core.stats import MinMax, Percentile, json_float
from rds_health_protocols import Cluster, Node


class StatusCode(IntEnum):
    """Ordered outcome of a check. Larger is worse."""

    UNKNOWN = 0
    SUCCESS = 1
    WARNING = 2
    FAILURE = 3

    def __str__(self) -> str:
        return _LONG[self]

    @property
    def short(self) -> str:
        """Four-letter label used in tables."""
        return _SHORT[self]

    @property
    def label(self) -> str:
        """Lower-case label used in JSON output."""
        return _LONG[self].lower()


_LONG = {
    StatusCode.UNKNOWN: "UNKNOWN",
    StatusCode.SUCCESS: "PASSED",
    StatusCode.WARNING: "WARNED",
    StatusCode.FAILURE: "FAILED",
}

_SHORT = {
    StatusCode.UNKNOWN: "NONE",
    StatusCode.SUCCESS: "PASS",
    StatusCode.WARNING: "WARN",
    StatusCode.FAILURE: "FAIL",
}


def worst(codes: Iterable[StatusCode]) -> StatusCode:
    """Worst-wins rollup; UNKNOWN when there is nothing to roll up."""
    return max(codes, default=StatusCode.UNKNOWN)


@dataclass(frozen=True)
class Rule:
    """Metadata of the rule that produced a status."""

    id: str = ""
    unit: str = ""
    about: str = ""

    def __str__(self) -> str:
        if self.id:
            return f"{self.id}: {self.about}"
        return self.about

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "unit": self.unit, "about": self.about}


@dataclass
class Status:
    """
    Outcome of one rule evaluation.

    Attributes:
        code: Outcome classification
        rule: Metadata of the evaluated rule
        interval: Sampling interval observed in the telemetry
        success_rate: Percentage of time the rule held (threshold rules)
        hard_minmax: Absolute min/avg/max
        soft_minmax: p95 of min/avg/max series
        aggregator: Aggregation used for a distribution report
        distribution: Percentiles of the aggregated series
    """

    code: StatusCode
    rule: Rule
    interval: timedelta = timedelta(0)
    success_rate: float | None = None
    hard_minmax: MinMax | None = None
    soft_minmax: MinMax | None = None
    aggregator: str | None = None
    distribution: Percentile | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": self.code.label,
            "rule": self.rule.to_dict(),
        }
        if self.success_rate is not None:
            data["success_rate"] = json_float(self.success_rate)
        if self.hard_minmax is not None:
            data["hard_minmax"] = self.hard_minmax.to_dict()
        if self.soft_minmax is not None:
            data["soft_minmax"] = self.soft_minmax.to_dict()
        if self.aggregator is not None:
            data["aggregator"] = self.aggregator
        if self.distribution is not None:
            data["distribution"] = self.distribution.to_dict()
        data["interval"] = int(self.interval.total_seconds())
        return data


@dataclass
class StatusNode:
    """Statuses of one node with their rollup."""

    node: Node
    checks: list[Status] = field(default_factory=list)
    code: StatusCode = StatusCode.UNKNOWN

    @classmethod
    def from_checks(cls, node: Node, checks: list[Status]) -> "StatusNode":
        return cls(node=node, checks=checks, code=worst(s.code for s in checks))

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.label,
            "node": self.node.to_dict(),
            "status": [s.to_dict() for s in self.checks],
        }


@dataclass
class StatusCluster:
    cluster: Cluster
    writer: list[StatusNode] = field(default_factory=list)
    reader: list[StatusNode] = field(default_factory=list)
    code: StatusCode = StatusCode.UNKNOWN

    @classmethod
    def from_nodes(
        cls, cluster: Cluster, writer: list[StatusNode], reader: list[StatusNode]
    ) -> "StatusCluster":
        code = worst(n.code for n in [*writer, *reader])
        return cls(cluster=cluster, writer=writer, reader=reader, code=code)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.label,
            "cluster": {
                "id": self.cluster.id,
                "engine": self.cluster.engine.to_dict() if self.cluster.engine else None,
            },
            "writer": [n.to_dict() for n in self.writer],
            "reader": [n.to_dict() for n in self.reader],
        }


@dataclass
class StatusRegion:
    clusters: list[StatusCluster] = field(default_factory=list)
    nodes: list[StatusNode] = field(default_factory=list)
    code: StatusCode = StatusCode.UNKNOWN

    @classmethod
    def from_parts(
        cls, clusters: list[StatusCluster], nodes: list[StatusNode]
    ) -> "StatusRegion":
        code = worst([*(c.code for c in clusters), *(n.code for n in nodes)])
        return cls(clusters=clusters, nodes=nodes, code=code)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.label,
            "clusters": [c.to_dict() for c in self.clusters],
            "nodes": [n.to_dict() for n in self.nodes],
        }
