"""
Reporter configuration.

Static, per-process tagging data and unit-conversion policy, fixed when the
reporter is built.

Environment Variables:
    METRICS_PREFIX: Prefix for every series name (default: none)
    METRICS_ENVIRONMENT: Environment label, e.g. "prod" (default: "")
    METRICS_COMPONENT: Component label, e.g. "web" (default: "")
    METRICS_RATE_UNIT: Unit rates are reported per (default: "seconds")
    METRICS_DURATION_UNIT: Unit durations are reported in (default: "milliseconds")
    METRICS_REPORT_PERIOD_S: Seconds between scheduled reports (default: 60)
"""
from __future__ import annotations

import logging
import os
import socket
from dataclasses import dataclass, field
from typing import Optional, Union

from ..metrics.clock import Clock, default_clock
from ..metrics.registry import MetricFilter
from .units import TimeUnit

logger = logging.getLogger(__name__)

UNKNOWN_HOST = "unknown.host"
NAME_SEPARATOR = "."


def resolve_hostname() -> str:
    """
    Look up the local host name once.

    Never raises: on failure the UNKNOWN_HOST sentinel is returned and the
    failure is logged.
    """
    try:
        hostname = socket.gethostname()
    except OSError as e:
        logger.warning(f"Unable to resolve local host name, using {UNKNOWN_HOST}: {e}")
        return UNKNOWN_HOST
    if not hostname:
        logger.warning(f"Local host name is empty, using {UNKNOWN_HOST}")
        return UNKNOWN_HOST
    return hostname


def normalize_prefix(prefix: Optional[str]) -> str:
    """Strip the prefix and make sure a non-empty one ends with the name separator."""
    if prefix is None:
        return ""
    prefix = prefix.strip()
    if prefix and not prefix.endswith(NAME_SEPARATOR):
        prefix += NAME_SEPARATOR
    return prefix


@dataclass(frozen=True)
class ReporterConfig:
    """Immutable tagging and conversion settings shared by every point in every cycle."""

    host: str = UNKNOWN_HOST
    environment: str = ""
    component: str = ""
    prefix: str = ""
    rate_unit: TimeUnit = TimeUnit.SECONDS
    duration_unit: TimeUnit = TimeUnit.MILLISECONDS
    metric_filter: MetricFilter = field(default=MetricFilter.ALL, compare=False)
    clock: Clock = field(default_factory=default_clock, compare=False)

    @classmethod
    def create(
        cls,
        prefix: Optional[str] = None,
        environment: Optional[str] = None,
        component: Optional[str] = None,
        rate_unit: Union[str, TimeUnit] = TimeUnit.SECONDS,
        duration_unit: Union[str, TimeUnit] = TimeUnit.MILLISECONDS,
        metric_filter: Optional[MetricFilter] = None,
        clock: Optional[Clock] = None,
        host: Optional[str] = None,
    ) -> "ReporterConfig":
        """
        Build a configuration, normalizing labels and resolving the host.

        Args:
            prefix: Prefix for all series names; "." is appended when missing
            environment: Environment label (production, test, development, ...)
            component: Component label (web, database, agent, ...)
            rate_unit: Unit rates are converted to (events per unit)
            duration_unit: Unit durations are converted to
            metric_filter: Only metrics matching this filter are reported
            clock: Time source for point timestamps
            host: Host name to tag points with; looked up locally when None
        """
        return cls(
            host=host if host is not None else resolve_hostname(),
            environment=environment or "",
            component=component or "",
            prefix=normalize_prefix(prefix),
            rate_unit=TimeUnit.parse(rate_unit),
            duration_unit=TimeUnit.parse(duration_unit),
            metric_filter=metric_filter or MetricFilter.ALL,
            clock=clock or default_clock(),
        )

    @classmethod
    def from_env(cls) -> "ReporterConfig":
        """Create configuration from environment variables."""
        return cls.create(
            prefix=os.getenv("METRICS_PREFIX"),
            environment=os.getenv("METRICS_ENVIRONMENT", ""),
            component=os.getenv("METRICS_COMPONENT", ""),
            rate_unit=os.getenv("METRICS_RATE_UNIT", "seconds"),
            duration_unit=os.getenv("METRICS_DURATION_UNIT", "milliseconds"),
        )

    @property
    def rate_factor(self) -> float:
        return self.rate_unit.rate_factor

    @property
    def duration_factor(self) -> float:
        return self.duration_unit.duration_factor


def report_period_from_env() -> float:
    return float(os.getenv("METRICS_REPORT_PERIOD_S", "60"))
