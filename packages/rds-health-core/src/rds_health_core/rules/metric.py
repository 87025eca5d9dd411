"""Metric names and their aggregated variants."""

from dataclasses import dataclass
from enum import Enum


class Aggregator(str, Enum):
    """Per-period aggregation applied by the telemetry backend."""

    MIN = "min"
    AVG = "avg"
    MAX = "max"
    SUM = "sum"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Metric:
    """
    A base metric path such as "os.cpuUtilization.total".

    The backend exposes each metric as raw series with an aggregation
    suffix ("os.cpuUtilization.total.avg").
    """

    name: str

    def __str__(self) -> str:
        return self.name

    def agg(self, aggregator: Aggregator) -> str:
        """Raw series name for one aggregator."""
        return f"{self.name}.{aggregator.value}"

    def min_max(self) -> list[str]:
        """Raw series names of the min, avg and max aggregations, in that order."""
        return [
            self.agg(Aggregator.MIN),
            self.agg(Aggregator.AVG),
            self.agg(Aggregator.MAX),
        ]
