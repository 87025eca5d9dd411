"""
Rule definitions and their evaluation.

Two rule families are supported:
- SingleMetricRule: statistics over the min/avg/max series of one metric
- PairMetricRule: statistics over an element-wise combination of two
  metrics (e.g. a ratio), combined first and reduced afterwards

Each rule offers four operations, returning an Evaluation bound to the
rule. An Evaluation knows which raw series it needs (`metrics`) and turns
those series into a Status when called.

Threshold operations use a two-tier classification: breaching the soft
average raises a WARNING, breaching the extreme as well escalates to
FAILURE.
"""

import math
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from rds_health_core.rules.metric import Aggregator, Metric
from rds_health_core.stats import (
    NaN,
    MinMax,
    Percentile,
    min_max_hard,
    min_max_soft,
    percentile_of,
)
from rds_health_core.status import Rule, Status, StatusCode
from rds_health_protocols import Samples, values


class Operation(str, Enum):
    SHOW_MIN_MAX = "show_min_max"
    SHOW = "show"
    BELOW = "below"
    ABOVE = "above"


class Combinator(str, Enum):
    """Element-wise combination of two metric values."""

    SHARE = "share"  # 100 * l / (l + r)
    PERCENT = "percent"  # 100 * l / r

    def apply(self, lhm: float, rhm: float) -> float:
        if self is Combinator.SHARE:
            return _divide(100.0 * lhm, lhm + rhm)
        return _divide(100.0 * lhm, rhm)

    def combine(self, lhs: list[float], rhs: list[float]) -> list[float]:
        """Combine two series over their common prefix."""
        return [self.apply(l, r) for l, r in zip(lhs, rhs)]


def _divide(a: float, b: float) -> float:
    # float semantics: 0/0 is NaN, x/0 is a signed infinity
    if b == 0:
        if a == 0 or math.isnan(a):
            return NaN
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def sampling_interval(samples: Samples) -> timedelta:
    """Spacing of the first two samples, zero when there are fewer."""
    if len(samples) < 2:
        return timedelta(0)
    return samples[1].timestamp - samples[0].timestamp


class _Operations:
    """Operation constructors shared by both rule families."""

    def show_min_max(self) -> "Evaluation":
        return Evaluation(rule=self, operation=Operation.SHOW_MIN_MAX)

    def show(self, aggregator: Aggregator) -> "Evaluation":
        return Evaluation(rule=self, operation=Operation.SHOW, aggregator=aggregator)

    def below(self, t_avg: float, t_max: float) -> "Evaluation":
        """Healthy while the metric stays under the thresholds."""
        return Evaluation(rule=self, operation=Operation.BELOW, low=t_avg, high=t_max)

    def above(self, t_min: float, t_avg: float) -> "Evaluation":
        """Healthy while the metric stays over the thresholds."""
        return Evaluation(rule=self, operation=Operation.ABOVE, low=t_min, high=t_avg)


@dataclass(frozen=True)
class SingleMetricRule(_Operations):
    """
    Rule over a single metric.

    Attributes:
        metric: Base metric
        unit: Display unit (e.g. "%", "iops", "ms")
        about: One-line description used in reports
        id: Rule identifier (e.g. "C1"); empty for informational metrics
        description: Long explanation of what the metric means
    """

    metric: Metric
    unit: str
    about: str
    id: str = ""
    description: str = ""

    def expand(self, operation: Operation, aggregator: Aggregator | None = None) -> list[str]:
        if operation is Operation.SHOW:
            return [self.metric.agg(aggregator)]
        return self.metric.min_max()

    def series(self, samples: list[Samples]) -> list[list[float]]:
        return [values(s) for s in samples]


@dataclass(frozen=True)
class PairMetricRule(_Operations):
    """
    Rule over two metrics combined element-wise.

    Attributes:
        lhm: Left-hand metric (numerator)
        rhm: Right-hand metric
        combinator: How the values are combined
        unit: Display unit of the combined value
        about: One-line description used in reports
        id: Rule identifier (e.g. "P1")
        description: Long explanation of what the value means
    """

    lhm: Metric
    rhm: Metric
    combinator: Combinator
    unit: str
    about: str
    id: str = ""
    description: str = ""

    def expand(self, operation: Operation, aggregator: Aggregator | None = None) -> list[str]:
        if operation is Operation.SHOW:
            return [self.lhm.agg(aggregator), self.rhm.agg(aggregator)]
        return self.lhm.min_max() + self.rhm.min_max()

    def series(self, samples: list[Samples]) -> list[list[float]]:
        width = len(samples) // 2
        lhs = [values(s) for s in samples[:width]]
        rhs = [values(s) for s in samples[width:]]
        return [self.combinator.combine(l, r) for l, r in zip(lhs, rhs)]


MetricRule = SingleMetricRule | PairMetricRule


@dataclass(frozen=True)
class Evaluation:
    """
    A rule bound to one operation and its parameters.

    Attributes:
        rule: Rule being evaluated
        operation: Which operation to perform
        low: t_avg for BELOW, t_min for ABOVE
        high: t_max for BELOW, t_avg for ABOVE
        aggregator: Series reported by SHOW
    """

    rule: MetricRule
    operation: Operation
    low: float = NaN
    high: float = NaN
    aggregator: Aggregator | None = None

    @property
    def metrics(self) -> list[str]:
        """Raw series this evaluation needs, in the order it consumes them."""
        return self.rule.expand(self.operation, self.aggregator)

    def __call__(self, *samples: Samples) -> Status:
        return evaluate(self, list(samples))


def evaluate(evaluation: Evaluation, samples: list[Samples]) -> Status:
    """
    Evaluate a rule against fetched series.

    Args:
        evaluation: Rule and operation to evaluate
        samples: Series in the order given by evaluation.metrics;
            missing series may be passed as empty lists

    Returns:
        Status of the evaluation; degenerate input yields NaN statistics
    """
    rule = evaluation.rule
    operation = evaluation.operation
    interval = sampling_interval(samples[0]) if samples else timedelta(0)
    series = rule.series(samples)

    if operation is Operation.SHOW:
        seq = series[0] if series else []
        return Status(
            code=StatusCode.UNKNOWN,
            rule=Rule(unit=rule.unit, about=rule.about),
            interval=interval,
            aggregator=str(evaluation.aggregator),
            distribution=Percentile.of(seq),
        )

    mins, avgs, maxs = (series + [[], [], []])[:3]
    soft = min_max_soft(mins, avgs, maxs)

    if operation is Operation.SHOW_MIN_MAX:
        return Status(
            code=StatusCode.UNKNOWN,
            rule=Rule(unit=rule.unit, about=rule.about),
            interval=interval,
            hard_minmax=min_max_hard(mins, avgs, maxs),
            soft_minmax=soft,
        )

    if operation is Operation.BELOW:
        code = _below(soft, t_avg=evaluation.low, t_max=evaluation.high)
        rate = percentile_of(avgs, evaluation.low)
    else:
        code = _above(soft, t_min=evaluation.low, t_avg=evaluation.high)
        rate = 100.0 - percentile_of(avgs, evaluation.high)

    return Status(
        code=code,
        rule=Rule(id=rule.id, unit=rule.unit, about=rule.about),
        interval=interval,
        success_rate=rate,
        hard_minmax=min_max_hard(mins, avgs, maxs),
        soft_minmax=soft,
    )


def _below(soft: MinMax, t_avg: float, t_max: float) -> StatusCode:
    if soft.avg > t_avg:
        if soft.max > t_max:
            return StatusCode.FAILURE
        return StatusCode.WARNING
    return StatusCode.SUCCESS


def _above(soft: MinMax, t_min: float, t_avg: float) -> StatusCode:
    if soft.avg < t_avg:
        if soft.min < t_min:
            return StatusCode.FAILURE
        return StatusCode.WARNING
    return StatusCode.SUCCESS
