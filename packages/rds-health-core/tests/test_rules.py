"""
Tests for rule definitions and their evaluation.

These tests verify:
- Raw metric expansion of single and pair rules
- Two-tier Below/Above classification on soft statistics
- Pair rules combine series element-wise before reducing
- Degenerate input yields NaN instead of raising
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from rds_health_core.rules import (
    HEALTH_CHECKS,
    HEALTH_RULE_IDS,
    USAGE_REPORT,
    Aggregator,
    Combinator,
    Metric,
    Operation,
)
from rds_health_core.rules import catalog
from rds_health_core.rules.catalog import (
    DB_CACHE_HIT_RATIO,
    DB_XACT_COMMIT,
    OS_CPU_UTIL,
    SQL_EFFICIENCY,
)
from rds_health_core.status import StatusCode
from rds_health_protocols import Sample

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def series(*values: float, step: int = 60) -> list[Sample]:
    """Samples spaced `step` seconds apart."""
    return [Sample(T0 + timedelta(seconds=i * step), float(v)) for i, v in enumerate(values)]


class TestMetric:
    """Tests for metric naming."""

    def test_min_max_expansion(self):
        assert Metric("os.swap.in").min_max() == [
            "os.swap.in.min",
            "os.swap.in.avg",
            "os.swap.in.max",
        ]

    def test_aggregator_suffix(self):
        assert Metric("db.Temp.temp_bytes").agg(Aggregator.SUM) == "db.Temp.temp_bytes.sum"

    def test_single_rule_metrics(self):
        assert OS_CPU_UTIL.below(40, 60).metrics == [
            "os.cpuUtilization.total.min",
            "os.cpuUtilization.total.avg",
            "os.cpuUtilization.total.max",
        ]
        assert OS_CPU_UTIL.show(Aggregator.SUM).metrics == ["os.cpuUtilization.total.sum"]

    def test_pair_rule_metrics(self):
        assert DB_CACHE_HIT_RATIO.show_min_max().metrics == [
            "db.Cache.blks_hit.min",
            "db.Cache.blks_hit.avg",
            "db.Cache.blks_hit.max",
            "db.IO.blk_read.min",
            "db.IO.blk_read.avg",
            "db.IO.blk_read.max",
        ]
        assert DB_CACHE_HIT_RATIO.show(Aggregator.AVG).metrics == [
            "db.Cache.blks_hit.avg",
            "db.IO.blk_read.avg",
        ]


class TestBelow:
    """Tests for the below() two-tier threshold."""

    def test_warning_when_average_exceeds(self):
        status = OS_CPU_UTIL.below(4.0, 10.0)(series(1, 2, 3), series(5, 5, 5), series(9, 9, 9))
        assert status.code == StatusCode.WARNING
        assert status.soft_minmax.avg == 5
        assert status.rule.id == "C1"

    def test_failure_when_maximum_exceeds_too(self):
        status = OS_CPU_UTIL.below(4.0, 8.0)(series(1, 2, 3), series(5, 5, 5), series(9, 9, 9))
        assert status.code == StatusCode.FAILURE

    def test_success_when_average_holds(self):
        status = OS_CPU_UTIL.below(6.0, 8.0)(series(1, 2, 3), series(5, 5, 5), series(9, 9, 9))
        assert status.code == StatusCode.SUCCESS

    def test_maximum_alone_does_not_warn(self):
        status = OS_CPU_UTIL.below(6.0, 8.0)(series(1, 1), series(2, 2), series(50, 50))
        assert status.code == StatusCode.SUCCESS

    def test_success_rate_is_share_below_threshold(self):
        avgs = series(*range(101))
        status = OS_CPU_UTIL.below(37.5, 100.0)(avgs, avgs, avgs)
        assert status.success_rate == pytest.approx(37.5, abs=0.05)

    def test_interval_from_first_two_samples(self):
        status = OS_CPU_UTIL.below(40, 60)(series(1, 2, step=300), series(1, 2), series(1, 2))
        assert status.interval == timedelta(seconds=300)


class TestAbove:
    """Tests for the above() two-tier threshold."""

    def test_failure_when_average_and_minimum_fall(self):
        status = DB_XACT_COMMIT.above(3.0, 5.0)(series(1, 1, 1), series(2, 2, 2), series(4, 4, 4))
        assert status.code == StatusCode.FAILURE

    def test_warning_when_only_average_falls(self):
        status = DB_XACT_COMMIT.above(3.0, 5.0)(series(4, 4, 4), series(4, 4, 4), series(6, 6, 6))
        assert status.code == StatusCode.WARNING

    def test_success_rate_is_complement(self):
        avgs = series(*range(101))
        status = DB_XACT_COMMIT.above(0.0, 25.0)(avgs, avgs, avgs)
        assert status.code == StatusCode.SUCCESS
        assert status.success_rate == pytest.approx(75.0, abs=0.05)


class TestPairRules:
    """Tests for pair rules."""

    def test_share_of_two_metrics(self):
        hit, read = series(80), series(20)
        status = DB_CACHE_HIT_RATIO.show_min_max()(hit, hit, hit, read, read, read)
        assert status.code == StatusCode.UNKNOWN
        assert status.soft_minmax.avg == pytest.approx(80.0)
        assert status.hard_minmax.avg == pytest.approx(80.0)

    def test_combines_before_reducing(self):
        lhm, rhm = series(1, 3), series(1, 1)
        status = DB_CACHE_HIT_RATIO.show_min_max()(lhm, lhm, lhm, rhm, rhm, rhm)
        # [50%, 75%] averages to 62.5%; reducing first would give 66.7%
        assert status.hard_minmax.avg == pytest.approx(62.5)

    def test_above_on_pair(self):
        hit, read = series(50, 50), series(50, 50)
        status = DB_CACHE_HIT_RATIO.above(80.0, 90.0)(hit, hit, hit, read, read, read)
        assert status.code == StatusCode.FAILURE
        assert status.rule.id == "P1"

    def test_division_by_zero_is_not_an_error(self):
        assert Combinator.PERCENT.apply(5.0, 0.0) == math.inf
        assert math.isnan(Combinator.SHARE.apply(0.0, 0.0))

        fetched, returned = series(0, 0), series(0, 0)
        status = SQL_EFFICIENCY.show_min_max()(fetched, fetched, fetched, returned, returned, returned)
        assert math.isnan(status.soft_minmax.avg)

    def test_combines_over_common_prefix(self):
        assert Combinator.PERCENT.combine([1.0, 2.0, 3.0], [4.0, 4.0]) == [25.0, 50.0]


class TestReporting:
    """Tests for show() and show_min_max()."""

    def test_show_min_max_is_unknown_with_both_summaries(self):
        status = OS_CPU_UTIL.show_min_max()(series(1, 2), series(3, 5), series(7, 9))
        assert status.code == StatusCode.UNKNOWN
        assert status.hard_minmax.min == 1
        assert status.hard_minmax.avg == 4
        assert status.hard_minmax.max == 9
        assert status.soft_minmax is not None
        assert status.rule.id == ""

    def test_show_reports_distribution(self):
        status = OS_CPU_UTIL.show(Aggregator.SUM)(series(*range(1, 101)))
        assert status.code == StatusCode.UNKNOWN
        assert status.aggregator == "sum"
        assert status.distribution.p50 == pytest.approx(50.5)

    def test_empty_series_yield_nan(self):
        status = OS_CPU_UTIL.below(40, 60)([], [], [])
        assert math.isnan(status.soft_minmax.avg)
        assert math.isnan(status.success_rate)
        assert status.interval == timedelta(0)


class TestCatalog:
    """Tests for the catalog and default rule sets."""

    def test_rule_ids_are_unique(self):
        ids = [r.id for r in catalog.CATALOG if r.id]
        assert len(ids) == len(set(ids))

    def test_lookup_by_id(self):
        assert catalog.by_id("D3") is catalog.DB_STORAGE_AWAIT
        with pytest.raises(KeyError):
            catalog.by_id("Z9")

    def test_health_check_order(self):
        assert HEALTH_RULE_IDS == tuple("C1 C2 M1 M2 D1 D2 D3 P1 P2 P3 P4 P5".split())
        assert all(e.operation in (Operation.BELOW, Operation.ABOVE) for e in HEALTH_CHECKS)

    def test_usage_report_is_informational(self):
        assert len(USAGE_REPORT) == 17
        assert all(e.operation is Operation.SHOW_MIN_MAX for e in USAGE_REPORT)
