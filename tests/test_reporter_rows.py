#!/usr/bin/env python3
"""
Unit tests for column schemas, point buffers and row extraction.
"""

from unittest.mock import Mock

import pytest

from metrics_influxdb.client.errors import SchemaMismatchError
from metrics_influxdb.config.reporter_config import ReporterConfig
from metrics_influxdb.config.units import TimeUnit
from metrics_influxdb.metrics.instruments import Counter, Gauge, Histogram, Meter, Timer
from metrics_influxdb.metrics.snapshot import Snapshot
from metrics_influxdb.reporter.columns import MetricKind, TAG_COLUMNS
from metrics_influxdb.reporter.extractor import SnapshotExtractor
from metrics_influxdb.reporter.points import PointBuffer

from conftest import FakeClock


def _meter_mock(count=7, m1=1.0, m5=2.0, m15=3.0, mean=4.0, spec=Meter):
    meter = Mock(spec=spec)
    meter.count = count
    meter.one_minute_rate = m1
    meter.five_minute_rate = m5
    meter.fifteen_minute_rate = m15
    meter.mean_rate = mean
    return meter


class TestMetricKind:
    """Tests for column schemas."""

    def test_reporting_order(self):
        assert list(MetricKind) == [
            MetricKind.GAUGE,
            MetricKind.COUNTER,
            MetricKind.HISTOGRAM,
            MetricKind.METER,
            MetricKind.TIMER,
        ]

    def test_suffixes(self):
        assert MetricKind.GAUGE.suffix == ".value"
        assert MetricKind.COUNTER.suffix == ".count"
        assert MetricKind.HISTOGRAM.suffix == ".histogram"
        assert MetricKind.METER.suffix == ".meter"
        assert MetricKind.TIMER.suffix == ".timer"

    def test_columns(self):
        assert MetricKind.GAUGE.columns == ("time", "host", "environment", "component", "value")
        assert MetricKind.COUNTER.columns == ("time", "host", "environment", "component", "count")
        assert MetricKind.METER.columns == (
            "time", "host", "environment", "component", "count",
            "1m-rate", "5m-rate", "15m-rate", "mean-rate",
        )
        assert MetricKind.HISTOGRAM.columns == (
            "time", "host", "environment", "component", "count",
            "min", "max", "mean", "std-dev",
            "50-pct", "75-pct", "95-pct", "99-pct", "999-pct",
        )
        assert MetricKind.TIMER.columns == MetricKind.HISTOGRAM.columns + (
            "1m-rate", "5m-rate", "15m-rate", "mean-rate",
        )

    def test_every_schema_starts_with_tags(self):
        for kind in MetricKind:
            assert kind.columns[:4] == TAG_COLUMNS


class TestPointBuffer:
    """Tests for PointBuffer."""

    def test_write_overwrites_in_place(self):
        """Test that each kind has one slot reused across writes."""
        buffer = PointBuffer()
        rows = buffer.write(MetricKind.COUNTER, 1, "h", "e", "c", 5)
        slot = rows[0]
        assert rows == [[1, "h", "e", "c", 5]]

        rows_again = buffer.write(MetricKind.COUNTER, 2, "h", "e", "c", 6)
        assert rows_again is rows
        assert rows_again[0] is slot
        assert slot == [2, "h", "e", "c", 6]

    def test_kinds_have_separate_slots(self):
        buffer = PointBuffer()
        counter_rows = buffer.write(MetricKind.COUNTER, 1, "h", "e", "c", 5)
        gauge_rows = buffer.write(MetricKind.GAUGE, 1, "h", "e", "c", "x")
        assert counter_rows[0][4] == 5
        assert gauge_rows[0][4] == "x"

    def test_slot_width_matches_schema(self):
        buffer = PointBuffer()
        for kind in MetricKind:
            rows = buffer.write(kind, *range(len(kind.columns)))
            assert len(rows[0]) == len(kind.columns)

    def test_wrong_width_rejected(self):
        buffer = PointBuffer()
        with pytest.raises(SchemaMismatchError):
            buffer.write(MetricKind.COUNTER, 1, "h", "e", "c")


class TestSnapshotExtractor:
    """Tests for SnapshotExtractor."""

    @pytest.fixture
    def extractor(self):
        config = ReporterConfig.create(
            environment="prod",
            component="web",
            host="h1",
            rate_unit=TimeUnit.MINUTES,
            duration_unit=TimeUnit.MILLISECONDS,
        )
        return SnapshotExtractor(config)

    def test_gauge_passthrough(self, extractor):
        assert extractor.gauge(Gauge(lambda: 42), 1000) == (1000, "h1", "prod", "web", 42)
        assert extractor.gauge(Gauge(lambda: "ok"), 1000)[4] == "ok"
        assert extractor.gauge(Gauge(lambda: False), 1000)[4] is False

    def test_counter(self, extractor):
        counter = Counter()
        counter.inc(5)
        assert extractor.counter(counter, 1000) == (1000, "h1", "prod", "web", 5)

    def test_meter_rates_converted(self, extractor):
        """Rates are per second times seconds per rate unit (minutes here)."""
        row = extractor.meter(_meter_mock(), 1000)
        assert row == (1000, "h1", "prod", "web", 7, 60.0, 120.0, 180.0, 240.0)

    def test_histogram_unconverted(self, extractor):
        histogram = Histogram()
        for v in (1, 2, 3, 4, 5):
            histogram.update(v)
        row = extractor.histogram(histogram, 1000)
        assert row[:4] == (1000, "h1", "prod", "web")
        assert row[4] == 5
        assert row[5:10] == pytest.approx((1.0, 5.0, 3.0, 1.5811388, 3.0))
        assert row[10] == pytest.approx(4.5)
        assert row[11:] == (5.0, 5.0, 5.0)

    def test_timer_durations_and_rates_converted(self, extractor):
        timer = _meter_mock(spec=Timer)
        timer.snapshot.return_value = Snapshot([1_000_000, 3_000_000])
        row = extractor.timer(timer, 1000)
        assert len(row) == len(MetricKind.TIMER.columns)
        assert row[4] == 2
        assert row[5] == pytest.approx(1.0)   # min ms
        assert row[6] == pytest.approx(3.0)   # max ms
        assert row[7] == pytest.approx(2.0)   # mean ms
        assert row[14:] == (60.0, 120.0, 180.0, 240.0)

    def test_extract_dispatches_by_kind(self, extractor):
        counter = Counter()
        counter.inc(3)
        assert extractor.extract(MetricKind.COUNTER, counter, 5) == (5, "h1", "prod", "web", 3)

    def test_rows_match_schema_width(self, extractor):
        """Every extracted row has exactly one value per column."""
        clock = FakeClock()
        metrics = {
            MetricKind.GAUGE: Gauge(lambda: 1),
            MetricKind.COUNTER: Counter(),
            MetricKind.HISTOGRAM: Histogram(),
            MetricKind.METER: Meter(clock),
            MetricKind.TIMER: Timer(clock),
        }
        for kind, metric in metrics.items():
            assert len(extractor.extract(kind, metric, 1)) == len(kind.columns)

    def test_errors_propagate(self, extractor):
        """Test that an instrument failure is not swallowed at this layer."""
        with pytest.raises(RuntimeError):
            extractor.gauge(Gauge(Mock(side_effect=RuntimeError("boom"))), 1)
