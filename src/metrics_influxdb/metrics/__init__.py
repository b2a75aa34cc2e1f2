"""
In-process metric instruments (`metrics_influxdb.metrics`).

- clock.py: wall-clock and monotonic time source
- snapshot.py: numpy-backed statistics over reservoir samples
- instruments.py: Gauge, Counter, Histogram, Meter, Timer
- registry.py: MetricRegistry, MetricFilter and the global registry singleton

Usage:
    from metrics_influxdb.metrics import get_global_registry

    registry = get_global_registry()
    registry.counter("requests").inc()
    with registry.timer("db.query").time():
        run_query()
"""

from .clock import Clock, default_clock
from .snapshot import Snapshot
from .instruments import (
    Metric,
    Gauge,
    Counter,
    Histogram,
    EWMA,
    Meter,
    Timer,
    TimerContext,
)
from .registry import (
    MetricFilter,
    MetricRegistry,
    get_global_registry,
    reset_global_registry,
    set_global_registry,
)

__all__ = [
    "Clock",
    "default_clock",
    "Snapshot",
    "Metric",
    "Gauge",
    "Counter",
    "Histogram",
    "EWMA",
    "Meter",
    "Timer",
    "TimerContext",
    "MetricFilter",
    "MetricRegistry",
    "get_global_registry",
    "reset_global_registry",
    "set_global_registry",
]
