"""
Telemetry protocol definitions.

Two layers are distinguished:
- MetricProvider: one backend call for one batch of raw metrics
- TelemetrySource: fetch any number of raw metrics for an entity over a
  look-back window (the sampling service implements this on top of a
  MetricProvider; tests substitute fakes)
"""

from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable

from rds_health_protocols.types import Samples


@runtime_checkable
class MetricProvider(Protocol):
    """
    Protocol for a telemetry backend.

    Implementations perform exactly one backend request per call and raise
    TransportError on failure. Metrics absent from the response are simply
    absent from the returned mapping.
    """

    async def get_resource_metrics(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
        period_seconds: int,
        metrics: list[str],
    ) -> dict[str, Samples]:
        """
        Fetch one batch of raw metrics.

        Args:
            entity_id: Backend identifier of the database instance
            start: Window start (inclusive)
            end: Window end
            period_seconds: Sampling period
            metrics: Raw metric names such as "os.cpuUtilization.total.avg"

        Returns:
            Mapping raw metric name -> time-ordered samples
        """
        ...


@runtime_checkable
class TelemetrySource(Protocol):
    """Protocol for fetching raw metrics over a look-back window."""

    async def fetch(
        self, entity_id: str, duration: timedelta, *metrics: str
    ) -> dict[str, Samples]:
        ...
