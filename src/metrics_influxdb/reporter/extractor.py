"""Converts instruments into rows matching their kind's column schema."""

from __future__ import annotations

from typing import Any, Callable, Dict, Tuple

from ..config.reporter_config import ReporterConfig
from ..metrics.instruments import Counter, Gauge, Histogram, Meter, Timer
from ..metrics.snapshot import Snapshot
from .columns import MetricKind

Row = Tuple[Any, ...]


class SnapshotExtractor:
    """
    Reads an instrument once and lays its values out in column order.

    Every row starts with (timestamp, host, environment, component). Meter and
    timer rates are converted from events per second to the configured rate
    unit; timer durations from nanoseconds to the configured duration unit.
    Gauge, counter and histogram values are passed through unchanged.

    Nothing is caught here: an instrument that fails to read fails the cycle.
    """

    def __init__(self, config: ReporterConfig):
        self.config = config
        self._rate_factor = config.rate_factor
        self._duration_factor = config.duration_factor
        self._extractors: Dict[MetricKind, Callable[[Any, int], Row]] = {
            MetricKind.GAUGE: self.gauge,
            MetricKind.COUNTER: self.counter,
            MetricKind.HISTOGRAM: self.histogram,
            MetricKind.METER: self.meter,
            MetricKind.TIMER: self.timer,
        }

    def extract(self, kind: MetricKind, metric: Any, timestamp: int) -> Row:
        return self._extractors[kind](metric, timestamp)

    def _tags(self, timestamp: int) -> Row:
        return (timestamp, self.config.host, self.config.environment, self.config.component)

    def convert_rate(self, rate: float) -> float:
        return rate * self._rate_factor

    def convert_duration(self, duration: float) -> float:
        return duration * self._duration_factor

    def gauge(self, gauge: Gauge, timestamp: int) -> Row:
        return self._tags(timestamp) + (gauge.value,)

    def counter(self, counter: Counter, timestamp: int) -> Row:
        return self._tags(timestamp) + (counter.count,)

    def _rates(self, metered: Any) -> Row:
        return (
            self.convert_rate(metered.one_minute_rate),
            self.convert_rate(metered.five_minute_rate),
            self.convert_rate(metered.fifteen_minute_rate),
            self.convert_rate(metered.mean_rate),
        )

    def meter(self, meter: Meter, timestamp: int) -> Row:
        return self._tags(timestamp) + (meter.count,) + self._rates(meter)

    @staticmethod
    def _snapshot_values(snapshot: Snapshot, convert: Callable[[float], float]) -> Row:
        return (
            snapshot.size,
            convert(snapshot.min),
            convert(snapshot.max),
            convert(snapshot.mean),
            convert(snapshot.std_dev),
            convert(snapshot.median),
            convert(snapshot.p75),
            convert(snapshot.p95),
            convert(snapshot.p99),
            convert(snapshot.p999),
        )

    def histogram(self, histogram: Histogram, timestamp: int) -> Row:
        snapshot = histogram.snapshot()
        return self._tags(timestamp) + self._snapshot_values(snapshot, lambda v: v)

    def timer(self, timer: Timer, timestamp: int) -> Row:
        snapshot = timer.snapshot()
        return (
            self._tags(timestamp)
            + self._snapshot_values(snapshot, self.convert_duration)
            + self._rates(timer)
        )
