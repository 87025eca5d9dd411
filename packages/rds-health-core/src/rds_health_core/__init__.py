"""
RDS health core - evaluation engine for database health rules.

This package turns raw telemetry into health verdicts:
- stats: percentiles and min/avg/max summaries over series
- rules: metric catalog, rule evaluators and default rule sets
- sampling: concurrent batched fetching over a MetricProvider
- check: orchestration of evaluations against one entity
- status: verdicts and their worst-wins rollup
- service: node and region health operations
- show, cli: console rendering and the rds-health command
"""

from rds_health_core.cache import Cache
from rds_health_core.check import Check
from rds_health_core.sampling import CHUNK_SIZE, SamplingService, period_for
from rds_health_core.service import HealthService
from rds_health_core.stats import (
    MinMax,
    Percentile,
    min_max_hard,
    min_max_soft,
    percentile,
    percentile_of,
)
from rds_health_core.status import (
    Rule,
    Status,
    StatusCluster,
    StatusCode,
    StatusNode,
    StatusRegion,
    worst,
)

__version__ = "0.1.0"

__all__ = [
    "Cache",
    "Check",
    "CHUNK_SIZE",
    "SamplingService",
    "period_for",
    "HealthService",
    "MinMax",
    "Percentile",
    "min_max_hard",
    "min_max_soft",
    "percentile",
    "percentile_of",
    "Rule",
    "Status",
    "StatusCode",
    "StatusNode",
    "StatusCluster",
    "StatusRegion",
    "worst",
]
