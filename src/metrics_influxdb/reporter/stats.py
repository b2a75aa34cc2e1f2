from __future__ import annotations

from typing import Any, Dict, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram  # no global default registry use


class ReporterStats:
    """
    Outcome counters for the reporter itself, kept in a private Prometheus
    registry.

    Nothing is served from here; an application that wants to expose these can
    pass its own registry or scrape `registry` elsewhere.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.reports = Counter(
            "metrics_influxdb_reports_total",
            "Reporting cycles by outcome",
            ["outcome"],
            registry=self.registry,
        )
        self.series = Counter(
            "metrics_influxdb_series_total",
            "Series written in successful cycles",
            registry=self.registry,
        )
        self.duration = Histogram(
            "metrics_influxdb_report_duration_seconds",
            "Wall time of a reporting cycle, collection and write",
            registry=self.registry,
        )

    def record_success(self, series_count: int, duration_s: float) -> None:
        self.reports.labels(outcome="success").inc()
        self.series.inc(series_count)
        self.duration.observe(duration_s)

    def record_failure(self, duration_s: float) -> None:
        self.reports.labels(outcome="failure").inc()
        self.duration.observe(duration_s)

    def _sample(self, name: str, labels: Optional[Dict[str, str]] = None) -> float:
        value = self.registry.get_sample_value(name, labels or {})
        return value or 0.0

    def summary(self) -> Dict[str, Any]:
        return {
            "successful_reports": int(self._sample("metrics_influxdb_reports_total", {"outcome": "success"})),
            "failed_reports": int(self._sample("metrics_influxdb_reports_total", {"outcome": "failure"})),
            "series_written": int(self._sample("metrics_influxdb_series_total")),
        }
