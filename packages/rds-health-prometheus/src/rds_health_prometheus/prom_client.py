"""
Prometheus API client and metric provider.

PrometheusClient wraps the range query endpoint. PrometheusProvider
implements MetricProvider on top of it, answering one batch of raw
metrics with a single query: every raw metric becomes an aggregated
expression tagged with its raw name via label_replace, and the
expressions are joined with `or`:

    label_replace(
        avg(avg_over_time(os_swap_in{instance="db-ABC"}[300s])),
        "metric", "os.swap.in.avg", "", ""
    )

Dots in metric paths become underscores, the aggregation suffix selects
both the *_over_time function and the outer aggregation.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx
from pydantic import ValidationError

from rds_health_prometheus.types import PrometheusRangeResponse, PrometheusRangeResult
from rds_health_protocols import Sample, Samples, TransportError

logger = logging.getLogger(__name__)

METRIC_LABEL = "metric"
AGGREGATORS = ("min", "avg", "max", "sum")


@dataclass
class PrometheusClient:
    """
    Prometheus API client with injected httpx client.

    The httpx.AsyncClient should be pre-configured with the Prometheus server
    base_url (e.g., http://prometheus:9090).
    """

    http: httpx.AsyncClient

    async def range_query(
        self, query: str, start: datetime, end: datetime, step_seconds: int
    ) -> list[PrometheusRangeResult]:
        """
        Execute a range query.

        Raises:
            TransportError: On HTTP errors, malformed responses or
                Prometheus query errors (status != "success")
        """
        params = {
            "query": query,
            "start": start.timestamp(),
            "end": end.timestamp(),
            "step": step_seconds,
        }
        try:
            response = await self.http.get("/api/v1/query_range", params=params)
            response.raise_for_status()
            data = PrometheusRangeResponse(**response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            raise TransportError("prometheus", str(e)) from e

        if data.status != "success" or data.data is None:
            raise TransportError("prometheus", f"{data.errorType}: {data.error}")
        return data.data.result


def series_name(path: str, prefix: str = "") -> str:
    return prefix + path.replace(".", "_")


def expression(raw: str, label: str, entity_id: str, period_seconds: int, prefix: str = "") -> str:
    """PromQL expression of one raw metric such as "os.swap.in.avg"."""
    path, _, agg = raw.rpartition(".")
    if agg not in AGGREGATORS or not path:
        raise ValueError(f"unsupported metric {raw}")

    selector = f'{series_name(path, prefix)}{{{label}="{entity_id}"}}'
    inner = f"{agg}({agg}_over_time({selector}[{period_seconds}s]))"
    return f'label_replace({inner}, "{METRIC_LABEL}", "{raw}", "", "")'


@dataclass
class PrometheusProvider:
    """
    MetricProvider backed by Prometheus.

    Attributes:
        client: Prometheus API client
        label: Label selecting the database instance
        prefix: Prefix of exported series names
    """

    client: PrometheusClient
    label: str = "instance"
    prefix: str = ""

    async def get_resource_metrics(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
        period_seconds: int,
        metrics: list[str],
    ) -> dict[str, Samples]:
        query = " or ".join(
            expression(m, self.label, entity_id, period_seconds, self.prefix) for m in metrics
        )
        results = await self.client.range_query(query, start, end, period_seconds)

        samples: dict[str, Samples] = {}
        for result in results:
            name = result.metric.get(METRIC_LABEL)
            if name is None:
                logger.warning(f"Dropping series without {METRIC_LABEL} label: {result.metric}")
                continue
            samples[name] = [
                Sample(timestamp=datetime.fromtimestamp(ts, tz=timezone.utc), value=float(v))
                for ts, v in result.values
            ]
        return samples
