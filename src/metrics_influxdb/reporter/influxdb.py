"""Reporter that publishes registry metrics to InfluxDB.

One report() call is one cycle:

    reset the pending request
    for each kind (gauges, counters, histograms, meters, timers), by name:
        extract a row -> write it to the point buffer -> append a series
    send the request as one complete batch

Every point of a cycle carries the same timestamp. If anything in the cycle
fails, the whole batch is discarded and a single warning is logged; the next
cycle starts from a clean request.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Mapping, Optional, Union

from ..client.base import Influxdb
from ..config.reporter_config import ReporterConfig
from ..config.units import TimeUnit
from ..metrics.clock import Clock
from ..metrics.instruments import Counter, Gauge, Histogram, Meter, Timer
from ..metrics.registry import MetricFilter, MetricRegistry
from .columns import MetricKind
from .extractor import SnapshotExtractor
from .points import PointBuffer
from .stats import ReporterStats
from .scheduled import ScheduledReporter

logger = logging.getLogger(__name__)

REPORTER_NAME = "influxdb-reporter"


class InfluxdbReporter(ScheduledReporter):
    """
    Publishes metric values to an InfluxDB server.

    Usage:
        reporter = (
            InfluxdbReporter.for_registry(registry)
            .prefixed_with("app")
            .with_environment("prod")
            .with_component("web")
            .build(InfluxdbHttp.from_env())
        )
        reporter.start(period_s=60)
    """

    def __init__(
        self,
        registry: MetricRegistry,
        influxdb: Influxdb,
        config: Optional[ReporterConfig] = None,
        stats: Optional[ReporterStats] = None,
    ):
        """
        Args:
            registry: Registry polled by scheduled reports
            influxdb: Transport the batches are written to
            config: Tagging and unit settings (defaults resolve the local host)
            stats: Outcome counters; a private registry is created when None
        """
        self._config = config or ReporterConfig.create()
        super().__init__(registry, REPORTER_NAME, self._config.metric_filter)
        self.influxdb = influxdb
        self.stats = stats or ReporterStats()

        self._extractor = SnapshotExtractor(self._config)
        self._points = PointBuffer()
        # Serializes cycles: the point buffer and the pending request are shared
        self._cycle_lock = threading.Lock()

    @classmethod
    def for_registry(cls, registry: MetricRegistry) -> "InfluxdbReporterBuilder":
        return InfluxdbReporterBuilder(registry)

    @property
    def config(self) -> ReporterConfig:
        return self._config

    @property
    def clock(self) -> Clock:
        return self.config.clock

    def report(
        self,
        gauges: Mapping[str, Gauge],
        counters: Mapping[str, Counter],
        histograms: Mapping[str, Histogram],
        meters: Mapping[str, Meter],
        timers: Mapping[str, Timer],
    ) -> bool:
        """
        Run one reporting cycle over the given metrics.

        Each map is reported in name order regardless of its own ordering.
        Never raises.

        Returns:
            True if the batch was written, False if the cycle was discarded
        """
        with self._cycle_lock:
            started = time.perf_counter()
            try:
                timestamp = self.clock.time()
                self.influxdb.reset_request()
                series_count = 0
                for kind, metrics in (
                    (MetricKind.GAUGE, gauges),
                    (MetricKind.COUNTER, counters),
                    (MetricKind.HISTOGRAM, histograms),
                    (MetricKind.METER, meters),
                    (MetricKind.TIMER, timers),
                ):
                    for name in sorted(metrics):
                        self._report_metric(kind, name, metrics[name], timestamp)
                        series_count += 1
                self.influxdb.send_request(True, False)
            except Exception as e:
                self._discard_request()
                self.stats.record_failure(time.perf_counter() - started)
                logger.warning(f"Unable to report to InfluxDB. Discarding data. ({e})", exc_info=True)
                return False

            self.stats.record_success(series_count, time.perf_counter() - started)
            logger.debug(f"Reported {series_count} series to InfluxDB at {timestamp}")
            return True

    def _report_metric(self, kind: MetricKind, name: str, metric: Any, timestamp: int) -> None:
        values = self._extractor.extract(kind, metric, timestamp)
        rows = self._points.write(kind, *values)
        self.influxdb.append_series(self.config.prefix, name, kind.suffix, kind.columns, rows)

    def _discard_request(self) -> None:
        try:
            self.influxdb.reset_request()
        except Exception as e:
            logger.debug(f"Failed to reset InfluxDB request after a failed cycle: {e}")

    def close(self) -> None:
        super().close()
        self.influxdb.close()

    def get_health(self) -> dict:
        return {
            "reporter": self.name,
            "running": self.is_running,
            "host": self.config.host,
            "transport": self.influxdb.get_health(),
            **self.stats.summary(),
        }


class InfluxdbReporterBuilder:
    """
    Builder for InfluxdbReporter. Defaults to no prefix, the default clock,
    rates per second, durations in milliseconds and no filtering.
    """

    def __init__(self, registry: MetricRegistry):
        self.registry = registry
        self.clock: Optional[Clock] = None
        self.prefix: Optional[str] = None
        self.environment: Optional[str] = None
        self.component: Optional[str] = None
        self.host: Optional[str] = None
        self.rate_unit: TimeUnit = TimeUnit.SECONDS
        self.duration_unit: TimeUnit = TimeUnit.MILLISECONDS
        self.metric_filter: MetricFilter = MetricFilter.ALL
        self.stats: Optional[ReporterStats] = None

    def with_clock(self, clock: Clock) -> "InfluxdbReporterBuilder":
        self.clock = clock
        return self

    def prefixed_with(self, prefix: str) -> "InfluxdbReporterBuilder":
        """Prefix all series names with the given string."""
        self.prefix = prefix
        return self

    def with_environment(self, environment: str) -> "InfluxdbReporterBuilder":
        """Tag points with the environment (production, test, development, ...)."""
        self.environment = environment
        return self

    def with_component(self, component: str) -> "InfluxdbReporterBuilder":
        """Tag points with the component (web, database, engine, agent, ...)."""
        self.component = component
        return self

    def with_host(self, host: str) -> "InfluxdbReporterBuilder":
        """Tag points with this host name instead of looking it up."""
        self.host = host
        return self

    def convert_rates_to(self, rate_unit: Union[str, TimeUnit]) -> "InfluxdbReporterBuilder":
        self.rate_unit = TimeUnit.parse(rate_unit)
        return self

    def convert_durations_to(self, duration_unit: Union[str, TimeUnit]) -> "InfluxdbReporterBuilder":
        self.duration_unit = TimeUnit.parse(duration_unit)
        return self

    def filter(self, metric_filter: MetricFilter) -> "InfluxdbReporterBuilder":
        """Only report metrics which match the given filter."""
        self.metric_filter = metric_filter
        return self

    def with_stats(self, stats: ReporterStats) -> "InfluxdbReporterBuilder":
        self.stats = stats
        return self

    def build(self, influxdb: Influxdb) -> InfluxdbReporter:
        config = ReporterConfig.create(
            prefix=self.prefix,
            environment=self.environment,
            component=self.component,
            rate_unit=self.rate_unit,
            duration_unit=self.duration_unit,
            metric_filter=self.metric_filter,
            clock=self.clock,
            host=self.host,
        )
        return InfluxdbReporter(self.registry, influxdb, config, self.stats)
