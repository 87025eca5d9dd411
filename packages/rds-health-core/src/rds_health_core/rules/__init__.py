"""
Metric catalog and rule evaluators.

- Metric, Aggregator: raw series naming
- SingleMetricRule, PairMetricRule: rule families
- Evaluation: a rule bound to an operation, callable on fetched series
- catalog: the known metrics; checks: default rule sets
"""

from rds_health_core.rules.checks import HEALTH_CHECKS, HEALTH_RULE_IDS, USAGE_REPORT
from rds_health_core.rules.metric import Aggregator, Metric
from rds_health_core.rules.rule import (
    Combinator,
    Evaluation,
    MetricRule,
    Operation,
    PairMetricRule,
    SingleMetricRule,
    evaluate,
    sampling_interval,
)

__all__ = [
    "Aggregator",
    "Metric",
    "Combinator",
    "Evaluation",
    "MetricRule",
    "Operation",
    "PairMetricRule",
    "SingleMetricRule",
    "evaluate",
    "sampling_interval",
    "HEALTH_CHECKS",
    "HEALTH_RULE_IDS",
    "USAGE_REPORT",
]
