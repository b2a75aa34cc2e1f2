#!/usr/bin/env python3
"""
metrics_influxdb

Periodically publishes in-process metrics (gauges, counters, histograms,
meters, timers) to InfluxDB as one batched series write per reporting cycle.

Architecture:
- metrics/: instruments and the MetricRegistry they are registered in
- reporter/: column schemas, row extraction, point buffers, InfluxdbReporter
- client/: batch builder, InfluxDB transports (HTTP, logging, no-op), errors
- config/: ReporterConfig, InfluxdbConfig, TimeUnit
- logging_setup.py: stdout logging configuration for entrypoints

Usage:
    from metrics_influxdb import InfluxdbHttp, InfluxdbReporter, get_global_registry

    registry = get_global_registry()
    registry.counter("requests").inc()

    reporter = (
        InfluxdbReporter.for_registry(registry)
        .prefixed_with("app")
        .with_environment("prod")
        .with_component("web")
        .build(InfluxdbHttp.from_env())
    )
    reporter.start(period_s=60)
"""

from .config.units import TimeUnit
from .config.reporter_config import ReporterConfig, UNKNOWN_HOST
from .config.influxdb_config import InfluxdbConfig
from .metrics import (
    Clock,
    Counter,
    Gauge,
    Histogram,
    Meter,
    MetricFilter,
    MetricRegistry,
    Timer,
    get_global_registry,
    reset_global_registry,
    set_global_registry,
)
from .client import (
    Influxdb,
    InfluxdbError,
    InfluxdbHttp,
    InfluxdbTransportError,
    InfluxdbWriteError,
    LoggingInfluxdb,
    NoOpInfluxdb,
    SchemaMismatchError,
)
from .reporter import (
    InfluxdbReporter,
    InfluxdbReporterBuilder,
    MetricKind,
    ReporterStats,
    ScheduledReporter,
)

__version__ = "0.3.0"

__all__ = [
    "TimeUnit",
    "ReporterConfig",
    "UNKNOWN_HOST",
    "InfluxdbConfig",
    "Clock",
    "Counter",
    "Gauge",
    "Histogram",
    "Meter",
    "MetricFilter",
    "MetricRegistry",
    "Timer",
    "get_global_registry",
    "reset_global_registry",
    "set_global_registry",
    "Influxdb",
    "InfluxdbError",
    "InfluxdbHttp",
    "InfluxdbTransportError",
    "InfluxdbWriteError",
    "LoggingInfluxdb",
    "NoOpInfluxdb",
    "SchemaMismatchError",
    "InfluxdbReporter",
    "InfluxdbReporterBuilder",
    "MetricKind",
    "ReporterStats",
    "ScheduledReporter",
]
