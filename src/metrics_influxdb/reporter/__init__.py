"""Reporting engine: column schemas, row extraction, point buffers and reporters."""

from .columns import (
    MetricKind,
    TAG_COLUMNS,
    COLUMNS_GAUGE,
    COLUMNS_COUNTER,
    COLUMNS_HISTOGRAM,
    COLUMNS_METER,
    COLUMNS_TIMER,
)
from .points import PointBuffer
from .extractor import SnapshotExtractor
from .stats import ReporterStats
from .scheduled import ScheduledReporter
from .influxdb import InfluxdbReporter, InfluxdbReporterBuilder

__all__ = [
    "MetricKind",
    "TAG_COLUMNS",
    "COLUMNS_GAUGE",
    "COLUMNS_COUNTER",
    "COLUMNS_HISTOGRAM",
    "COLUMNS_METER",
    "COLUMNS_TIMER",
    "PointBuffer",
    "SnapshotExtractor",
    "ReporterStats",
    "ScheduledReporter",
    "InfluxdbReporter",
    "InfluxdbReporterBuilder",
]
