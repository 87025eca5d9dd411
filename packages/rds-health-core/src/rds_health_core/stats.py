"""
Statistics over telemetry series.

Provides the summaries used by rule evaluators:
- percentile(): linear-interpolated percentile of a series
- Percentile: fixed p50/p95/p99/p99.9 distribution
- min_max_hard(): min of minimums, mean of averages, max of maximums
- min_max_soft(): p95 of each series (robust against short spikes)
- percentile_of(): inverse percentile, the rank at which a value is reached

NaN entries mark missing datapoints and are ignored. A statistic over an
empty (or all-NaN) series is NaN, never an exception.
"""

import math
from dataclasses import dataclass
from statistics import mean
from typing import Any, Iterable

NaN = math.nan

SOFT_PERCENTILE = 95.0
"""Percentile used for the soft min/avg/max summary."""

PERCENTILE_STEP = 0.01
MAX_SEARCH_STEPS = math.ceil(math.log2(100.0 / PERCENTILE_STEP)) + 2
"""Upper bound on bisection steps for percentile_of (100 / 2^k < step)."""


def json_float(value: float) -> float | str:
    """JSON-safe float: NaN and infinities are encoded as strings."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return value


def _clean(seq: Iterable[float]) -> list[float]:
    return [x for x in seq if not math.isnan(x)]


def percentile(seq: Iterable[float], p: float) -> float:
    """
    Linear-interpolated percentile of a series.

    Args:
        seq: Series of values, NaN entries are ignored
        p: Percentile rank in [0, 100]

    Returns:
        The interpolated value, or NaN for an empty series
    """
    data = sorted(_clean(seq))
    if not data:
        return NaN

    p = min(max(p, 0.0), 100.0)
    rank = p / 100.0 * (len(data) - 1)
    lo = math.floor(rank)
    hi = math.ceil(rank)
    if lo == hi or data[lo] == data[hi]:
        return data[lo]
    return data[lo] + (data[hi] - data[lo]) * (rank - lo)


def percentile_of(seq: Iterable[float], x: float) -> float:
    """
    Inverse percentile: the rank in [0, 100] at which the series reaches x.

    Bisection over the rank with a fixed step. When no exact crossing
    exists the last midpoint examined is returned.
    """
    data = _clean(seq)
    if not data:
        return NaN

    lo, hi = 0.0, 100.0
    md = (lo + hi) / 2
    for _ in range(MAX_SEARCH_STEPS):
        if lo > hi:
            break
        md = (lo + hi) / 2
        p = percentile(data, md)
        if p < x:
            lo = md + PERCENTILE_STEP
        elif p > x:
            hi = md - PERCENTILE_STEP
        else:
            return md
    return md


def _mean(seq: Iterable[float]) -> float:
    data = _clean(seq)
    return mean(data) if data else NaN


def _min(seq: Iterable[float]) -> float:
    data = _clean(seq)
    return min(data) if data else NaN


def _max(seq: Iterable[float]) -> float:
    data = _clean(seq)
    return max(data) if data else NaN


@dataclass(frozen=True)
class MinMax:
    """Minimum, average and maximum of a metric."""

    min: float = NaN
    avg: float = NaN
    max: float = NaN

    def __str__(self) -> str:
        return f"min {fmt(self.min)} avg {fmt(self.avg)} max {fmt(self.max)}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": json_float(self.min),
            "avg": json_float(self.avg),
            "max": json_float(self.max),
        }


@dataclass(frozen=True)
class Percentile:
    """Distribution of a series at fixed percentile ranks."""

    p50: float = NaN
    p95: float = NaN
    p99: float = NaN
    p999: float = NaN

    @classmethod
    def of(cls, seq: Iterable[float]) -> "Percentile":
        data = _clean(seq)
        return cls(
            p50=percentile(data, 50.0),
            p95=percentile(data, 95.0),
            p99=percentile(data, 99.0),
            p999=percentile(data, 99.9),
        )

    def __str__(self) -> str:
        return (
            f"p50 {fmt(self.p50)} p95 {fmt(self.p95)} "
            f"p99 {fmt(self.p99)} p99.9 {fmt(self.p999)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "p50": json_float(self.p50),
            "p95": json_float(self.p95),
            "p99": json_float(self.p99),
            "p999": json_float(self.p999),
        }


def min_max_hard(
    mins: Iterable[float], avgs: Iterable[float], maxs: Iterable[float]
) -> MinMax:
    """Absolute extremes and the overall mean."""
    return MinMax(min=_min(mins), avg=_mean(avgs), max=_max(maxs))


def min_max_soft(
    mins: Iterable[float], avgs: Iterable[float], maxs: Iterable[float]
) -> MinMax:
    """95th percentile of each series."""
    return MinMax(
        min=percentile(mins, SOFT_PERCENTILE),
        avg=percentile(avgs, SOFT_PERCENTILE),
        max=percentile(maxs, SOFT_PERCENTILE),
    )


def fmt(value: float, width: int = 0, precision: int = 2) -> str:
    """Render a float for text output; NaN renders as "NaN"."""
    if math.isnan(value):
        return f"{'NaN':>{width}}"
    return f"{value:>{width}.{precision}f}"
