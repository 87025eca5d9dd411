"""
Time-series sampling service.

Fetches raw metrics for one entity over a look-back window on top of a
MetricProvider:
- picks the sampling period from the window length, bounding the number
  of returned points
- splits metric names into batches of CHUNK_SIZE, the widest request the
  telemetry backend accepts
- fetches batches concurrently in one TaskGroup; the first failure
  cancels the remaining batches and is re-raised alone, partial results
  are discarded

Results are merged on the event loop; a name requested by two batches
yields the same series from both, so merge order does not matter.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from rds_health_protocols import MetricProvider, Samples

logger = logging.getLogger(__name__)

CHUNK_SIZE = 15

# (longest window, sampling period in seconds)
PERIODS: tuple[tuple[timedelta, int], ...] = (
    (timedelta(minutes=10), 1),
    (timedelta(hours=5), 60),
    (timedelta(hours=24), 300),
)
LONG_PERIOD = 3600


def period_for(duration: timedelta) -> int:
    """Sampling period in seconds for a look-back window."""
    for limit, period in PERIODS:
        if duration <= limit:
            return period
    return LONG_PERIOD


def chunks(metrics: list[str], size: int = CHUNK_SIZE) -> list[list[str]]:
    return [metrics[i : i + size] for i in range(0, len(metrics), size)]


@dataclass
class SamplingService:
    """
    TelemetrySource backed by a MetricProvider.

    Example:
        source = SamplingService(provider=PerformanceInsightsProvider(client=pi))
        samples = await source.fetch(node.id, timedelta(hours=24), "os.swap.in.avg")
    """

    provider: MetricProvider
    chunk_size: int = CHUNK_SIZE

    async def fetch(
        self, entity_id: str, duration: timedelta, *metrics: str
    ) -> dict[str, Samples]:
        """
        Fetch raw metrics for an entity over the last `duration`.

        Returns:
            Mapping raw metric name -> samples; metrics the backend did not
            report are absent

        Raises:
            TransportError: First batch failure; no partial result
        """
        if not metrics:
            return {}

        end = datetime.now(timezone.utc)
        start = end - duration
        period = period_for(duration)
        batches = chunks(list(metrics), self.chunk_size)
        logger.debug(
            f"Fetching {len(metrics)} metrics for {entity_id} in "
            f"{len(batches)} batches, period {period}s"
        )

        result: dict[str, Samples] = {}

        async def fetch_batch(batch: list[str]) -> None:
            samples = await self.provider.get_resource_metrics(
                entity_id, start, end, period, batch
            )
            result.update(samples)

        try:
            async with asyncio.TaskGroup() as tg:
                for batch in batches:
                    tg.create_task(fetch_batch(batch))
        except ExceptionGroup as group:
            logger.warning(f"Failed to fetch metrics for {entity_id}: {group.exceptions[0]}")
            raise group.exceptions[0] from None

        return result
