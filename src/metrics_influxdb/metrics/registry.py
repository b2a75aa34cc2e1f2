"""Metric registry and the global registry singleton.

The registry maps unique dotted names to instruments. Reporters read it
through the get_*() accessors, which return plain dicts ordered by name with
a MetricFilter applied.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from .clock import Clock, default_clock
from .instruments import Counter, Gauge, Histogram, Meter, Metric, Timer

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=Metric)


class MetricFilter:
    """
    Predicate deciding whether a metric is reported.

    Wraps any callable taking (name, metric) and returning a bool.
    """

    def __init__(self, predicate: Callable[[str, Metric], bool]):
        self._predicate = predicate

    def matches(self, name: str, metric: Metric) -> bool:
        return bool(self._predicate(name, metric))

    __call__ = matches

    @classmethod
    def starts_with(cls, prefix: str) -> "MetricFilter":
        return cls(lambda name, metric: name.startswith(prefix))

    @classmethod
    def contains(cls, fragment: str) -> "MetricFilter":
        return cls(lambda name, metric: fragment in name)


MetricFilter.ALL = MetricFilter(lambda name, metric: True)


class MetricRegistry:
    """Thread-safe registry of named instruments."""

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or default_clock()
        self._lock = threading.Lock()
        self._metrics: Dict[str, Metric] = {}

    @staticmethod
    def name(*parts: Any) -> str:
        """Join non-empty name parts with dots: name("db", None, "queries") -> "db.queries"."""
        return ".".join(str(p) for p in parts if p is not None and str(p) != "")

    def register(self, name: str, metric: M) -> M:
        """
        Register an instrument under a unique name.

        Raises:
            ValueError: if the name is already taken
        """
        if not isinstance(metric, Metric):
            raise TypeError(f"{metric!r} is not a metric")
        with self._lock:
            if name in self._metrics:
                raise ValueError(f"A metric named {name} already exists")
            self._metrics[name] = metric
        logger.debug(f"Registered {name} as {type(metric).__name__}")
        return metric

    def remove(self, name: str) -> bool:
        with self._lock:
            return self._metrics.pop(name, None) is not None

    def remove_matching(self, metric_filter: MetricFilter) -> None:
        with self._lock:
            for name in [n for n, m in self._metrics.items() if metric_filter.matches(n, m)]:
                del self._metrics[name]

    def _get_or_add(self, name: str, kind: Type[M], factory: Callable[[], M]) -> M:
        with self._lock:
            existing = self._metrics.get(name)
            if existing is None:
                metric = factory()
                self._metrics[name] = metric
                return metric
        if isinstance(existing, kind):
            return existing
        raise ValueError(f"{name} is already used for a different type of metric")

    def counter(self, name: str) -> Counter:
        return self._get_or_add(name, Counter, Counter)

    def histogram(self, name: str) -> Histogram:
        return self._get_or_add(name, Histogram, Histogram)

    def meter(self, name: str) -> Meter:
        return self._get_or_add(name, Meter, lambda: Meter(self._clock))

    def timer(self, name: str) -> Timer:
        return self._get_or_add(name, Timer, lambda: Timer(self._clock))

    def gauge(self, name: str, supplier: Callable[[], Any]) -> Gauge:
        return self._get_or_add(name, Gauge, lambda: Gauge(supplier))

    @property
    def names(self) -> list:
        with self._lock:
            return sorted(self._metrics)

    def _get_metrics(self, kind: Type[M], metric_filter: Optional[MetricFilter]) -> Dict[str, M]:
        metric_filter = metric_filter or MetricFilter.ALL
        with self._lock:
            items = list(self._metrics.items())
        return {
            name: metric
            for name, metric in sorted(items, key=lambda item: item[0])
            if isinstance(metric, kind) and metric_filter.matches(name, metric)
        }

    def get_gauges(self, metric_filter: Optional[MetricFilter] = None) -> Dict[str, Gauge]:
        return self._get_metrics(Gauge, metric_filter)

    def get_counters(self, metric_filter: Optional[MetricFilter] = None) -> Dict[str, Counter]:
        return self._get_metrics(Counter, metric_filter)

    def get_histograms(self, metric_filter: Optional[MetricFilter] = None) -> Dict[str, Histogram]:
        return self._get_metrics(Histogram, metric_filter)

    def get_meters(self, metric_filter: Optional[MetricFilter] = None) -> Dict[str, Meter]:
        return self._get_metrics(Meter, metric_filter)

    def get_timers(self, metric_filter: Optional[MetricFilter] = None) -> Dict[str, Timer]:
        return self._get_metrics(Timer, metric_filter)

    def __len__(self) -> int:
        return len(self._metrics)


# Global singleton instance
_global_registry: Optional[MetricRegistry] = None
_registry_lock = threading.Lock()


def get_global_registry() -> MetricRegistry:
    """
    Get or create the process-wide MetricRegistry.

    The first call creates the instance; subsequent calls return the same one.
    """
    global _global_registry

    if _global_registry is None:
        with _registry_lock:
            # Double-check under the lock
            if _global_registry is None:
                _global_registry = MetricRegistry()

    return _global_registry


def reset_global_registry() -> None:
    """Drop the global registry so the next get_global_registry() starts empty (useful for testing)."""
    global _global_registry

    with _registry_lock:
        _global_registry = None


def set_global_registry(registry: MetricRegistry) -> None:
    """Install a custom registry as the global singleton."""
    global _global_registry

    with _registry_lock:
        _global_registry = registry
