"""Periodic reporting of a MetricRegistry on a background thread."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ..config.reporter_config import report_period_from_env
from ..metrics.instruments import Counter, Gauge, Histogram, Meter, Timer
from ..metrics.registry import MetricFilter, MetricRegistry

logger = logging.getLogger(__name__)


class ScheduledReporter(ABC):
    """
    Base class for reporters that poll a registry every `period` seconds.

    Subclasses implement report(), which receives the five filtered metric
    maps. The background loop waits `period` seconds after each report
    finishes before starting the next one, so two reports never overlap.
    """

    def __init__(self, registry: MetricRegistry, name: str, metric_filter: Optional[MetricFilter] = None):
        self.registry = registry
        self.name = name
        self.metric_filter = metric_filter or MetricFilter.ALL

        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()
        self._period: float = 60.0
        self._report_on_stop = False

    @abstractmethod
    def report(
        self,
        gauges: Mapping[str, Gauge],
        counters: Mapping[str, Counter],
        histograms: Mapping[str, Histogram],
        meters: Mapping[str, Meter],
        timers: Mapping[str, Timer],
    ) -> bool:
        """Report the given metrics; returns True when the report was delivered."""
        pass

    def report_registry(self) -> bool:
        """Report the current registry contents that match the filter."""
        return self.report(
            self.registry.get_gauges(self.metric_filter),
            self.registry.get_counters(self.metric_filter),
            self.registry.get_histograms(self.metric_filter),
            self.registry.get_meters(self.metric_filter),
            self.registry.get_timers(self.metric_filter),
        )

    # ---------- background loop ----------

    def _loop(self, stop: threading.Event) -> None:
        while not stop.wait(self._period):
            try:
                self.report_registry()
            except Exception:
                # Never crash the thread
                logger.error(f"Reporter {self.name} raised during a scheduled report", exc_info=True)

    def start(self, period_s: Optional[float] = None, report_on_stop: bool = False) -> None:
        """
        Start reporting every `period_s` seconds.

        Args:
            period_s: Delay between the end of one report and the start of the next
                (default: METRICS_REPORT_PERIOD_S, or 60)
            report_on_stop: Run one last report when stop() is called
        """
        if period_s is None:
            period_s = report_period_from_env()
        if period_s <= 0:
            raise ValueError(f"period_s must be positive, got {period_s}")
        if self.is_running:
            logger.debug(f"Reporter {self.name} already running")
            return
        self._period = float(period_s)
        self._report_on_stop = report_on_stop
        # A loop left running by a timed-out stop() keeps its own, already set event
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._loop, args=(self._stop,), name=self.name, daemon=True)
        self._thread.start()
        logger.info(f"Reporter {self.name} started, reporting every {self._period:g}s")

    def stop(self, timeout_s: float = 5.0) -> None:
        was_running = self.is_running
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout_s)
            if self._thread.is_alive():
                logger.warning(f"Reporter {self.name} did not stop within {timeout_s}s")
        self._thread = None
        if was_running:
            if self._report_on_stop:
                self.report_registry()
            logger.info(f"Reporter {self.name} stopped")

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def close(self) -> None:
        self.stop()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
