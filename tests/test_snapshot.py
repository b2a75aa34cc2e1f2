#!/usr/bin/env python3
"""
Unit tests for Snapshot statistics.
"""

import math

import pytest

from metrics_influxdb.metrics.snapshot import Snapshot


class TestSnapshot:
    """Tests for Snapshot."""

    @pytest.fixture
    def snapshot(self):
        return Snapshot([5, 1, 4, 2, 3])

    def test_values_are_sorted(self, snapshot):
        assert list(snapshot.values) == [1, 2, 3, 4, 5]
        assert snapshot.size == 5
        assert len(snapshot) == 5

    def test_min_max_mean(self, snapshot):
        assert snapshot.min == 1
        assert snapshot.max == 5
        assert snapshot.mean == pytest.approx(3.0)

    def test_std_dev_is_sample_std_dev(self, snapshot):
        assert snapshot.std_dev == pytest.approx(math.sqrt(2.5))

    def test_quantiles_interpolate(self, snapshot):
        """Positions are q * (n + 1), interpolated between neighbours."""
        assert snapshot.median == pytest.approx(3.0)
        assert snapshot.p75 == pytest.approx(4.5)

    def test_quantiles_clamp_to_extremes(self, snapshot):
        assert snapshot.get_value(0.0) == 1
        assert snapshot.p95 == 5
        assert snapshot.p99 == 5
        assert snapshot.p999 == 5

    def test_quantile_out_of_range(self, snapshot):
        with pytest.raises(ValueError):
            snapshot.get_value(1.5)

    def test_empty_snapshot_is_all_zero(self):
        """Test that an empty snapshot reports zeros instead of NaN."""
        snapshot = Snapshot([])
        assert snapshot.size == 0
        assert snapshot.min == 0.0
        assert snapshot.max == 0.0
        assert snapshot.mean == 0.0
        assert snapshot.std_dev == 0.0
        assert snapshot.median == 0.0
        assert snapshot.p999 == 0.0

    def test_single_value(self):
        snapshot = Snapshot([7])
        assert snapshot.std_dev == 0.0
        assert snapshot.median == 7
        assert snapshot.p99 == 7

    def test_values_returns_copy(self, snapshot):
        values = snapshot.values
        values[0] = 100
        assert snapshot.min == 1
