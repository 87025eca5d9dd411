"""
Performance Insights metric provider.

Fetches one batch of raw metrics with a single GetResourceMetrics call.
Response shape (boto3 "pi" client):

    {"MetricList": [
        {"Key": {"Metric": "os.cpuUtilization.total.avg"},
         "DataPoints": [{"Timestamp": datetime, "Value": 12.5}, ...]},
        ...
    ]}

Datapoints without a Value are kept as NaN samples.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from rds_health_aws._sdk import call
from rds_health_protocols import Sample, Samples

logger = logging.getLogger(__name__)

SERVICE_TYPE = "RDS"


@dataclass
class PerformanceInsightsProvider:
    """
    MetricProvider backed by AWS Performance Insights.

    Example:
        provider = PerformanceInsightsProvider(client=session.client("pi"))
        source = SamplingService(provider=provider)
    """

    client: Any

    async def get_resource_metrics(
        self,
        entity_id: str,
        start: datetime,
        end: datetime,
        period_seconds: int,
        metrics: list[str],
    ) -> dict[str, Samples]:
        response = await call(
            "pi",
            self.client.get_resource_metrics,
            ServiceType=SERVICE_TYPE,
            Identifier=entity_id,
            StartTime=start,
            EndTime=end,
            PeriodInSeconds=period_seconds,
            MetricQueries=[{"Metric": m} for m in metrics],
        )
        return parse_metric_list(response.get("MetricList", []))


def parse_metric_list(metric_list: list[dict[str, Any]]) -> dict[str, Samples]:
    result: dict[str, Samples] = {}
    for item in metric_list:
        name = item.get("Key", {}).get("Metric")
        if name is None:
            continue
        result[name] = [
            Sample(
                timestamp=point["Timestamp"],
                value=float(point["Value"]) if point.get("Value") is not None else math.nan,
            )
            for point in item.get("DataPoints", [])
        ]
    return result
