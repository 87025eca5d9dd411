"""
Tests for series statistics.

These tests verify:
- Linear-interpolated percentiles
- Hard and soft min/avg/max summaries
- Inverse percentile search
- NaN handling: ignored in input, produced for empty input
"""

import math

import pytest

from rds_health_core.stats import (
    MinMax,
    Percentile,
    fmt,
    min_max_hard,
    min_max_soft,
    percentile,
    percentile_of,
)

NaN = float("nan")


class TestPercentile:
    """Tests for percentile()."""

    def test_median_of_odd_series(self):
        assert percentile([5, 1, 3, 2, 4], 50) == 3

    def test_interpolates_between_ranks(self):
        assert percentile([1, 2, 3, 4], 50) == 2.5

    def test_bounds_are_extremes(self):
        seq = [7, 3, 9, 1]
        assert percentile(seq, 0) == 1
        assert percentile(seq, 100) == 9

    def test_single_value(self):
        assert percentile([42.0], 95) == 42.0

    def test_empty_series_is_nan(self):
        assert math.isnan(percentile([], 50))

    def test_nan_entries_are_ignored(self):
        assert percentile([NaN, 1, 3], 50) == 2
        assert math.isnan(percentile([NaN, NaN], 50))

    def test_distribution(self):
        dist = Percentile.of(range(1, 101))
        assert dist.p50 == pytest.approx(50.5)
        assert dist.p95 == pytest.approx(95.05)
        assert dist.p999 <= 100


class TestMinMax:
    """Tests for hard and soft summaries."""

    def test_hard_min_max(self):
        mm = min_max_hard([1, 2], [3, 5], [7, 9])
        assert mm == MinMax(min=1, avg=4, max=9)

    def test_hard_min_max_empty(self):
        mm = min_max_hard([], [], [])
        assert math.isnan(mm.min) and math.isnan(mm.avg) and math.isnan(mm.max)

    def test_soft_min_max_of_constant_series(self):
        mm = min_max_soft([1, 1, 1], [5, 5, 5], [9, 9, 9])
        assert mm == MinMax(min=1, avg=5, max=9)

    @pytest.mark.parametrize(
        "seq",
        [[1.0], [0.5, 100.0], [3, 1, 4, 1, 5, 9, 2, 6], list(range(50))],
    )
    def test_soft_stays_within_extremes(self, seq):
        mm = min_max_soft(seq, seq, seq)
        for value in (mm.min, mm.avg, mm.max):
            assert min(seq) <= value <= max(seq)

    def test_soft_ignores_short_spike(self):
        avgs = [10.0] * 99 + [1000.0]
        assert min_max_soft(avgs, avgs, avgs).avg < 20.0
        assert min_max_hard(avgs, avgs, avgs).max == 1000.0

    def test_to_dict_encodes_nan(self):
        assert MinMax().to_dict() == {"min": "NaN", "avg": "NaN", "max": "NaN"}
        assert MinMax(1.0, 2.0, 3.0).to_dict() == {"min": 1.0, "avg": 2.0, "max": 3.0}


class TestPercentileOf:
    """Tests for the inverse percentile search."""

    def test_recovers_rank_of_linear_series(self):
        seq = [float(i) for i in range(101)]
        rank = percentile_of(seq, 37.5)
        assert rank == pytest.approx(37.5, abs=0.05)
        assert percentile(seq, rank) == pytest.approx(37.5, abs=0.05)

    def test_value_below_series_is_near_zero(self):
        assert percentile_of([5, 5, 5], 4) < 1.0

    def test_value_above_series_is_near_hundred(self):
        assert percentile_of([5, 5, 5], 6) > 99.0

    def test_empty_series_is_nan(self):
        assert math.isnan(percentile_of([], 1.0))


class TestFormatting:
    def test_nan_renders_distinctly(self):
        assert fmt(NaN) == "NaN"
        assert fmt(0.0) == "0.00"

    def test_width(self):
        assert fmt(1.5, 6) == "  1.50"
        assert fmt(NaN, 6) == "   NaN"
