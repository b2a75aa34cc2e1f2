import os

# ----------------------------------------------------------------------
# Environment MUST be set before any imports happen
# ----------------------------------------------------------------------

os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest

from metrics_influxdb.client.base import Influxdb
from metrics_influxdb.config.reporter_config import ReporterConfig
from metrics_influxdb.metrics.clock import Clock
from metrics_influxdb.metrics.registry import MetricRegistry


class FakeClock(Clock):
    """Clock whose wall time and monotonic ticks only move when told to."""

    def __init__(self, time_ms: int = 1000, tick_ns: int = 0):
        self.time_ms = time_ms
        self.tick_ns = tick_ns

    def time(self) -> int:
        return self.time_ms

    def tick(self) -> int:
        return self.tick_ns

    def advance(self, seconds: float) -> None:
        self.time_ms += int(seconds * 1000)
        self.tick_ns += int(seconds * 1_000_000_000)


class RecordingInfluxdb(Influxdb):
    """Transport that keeps every batch it was asked to send."""

    def __init__(self):
        super().__init__()
        self.sent = []
        self.send_calls = []
        self.fail_next = 0

    def _write(self, batch, complete, keep_alive):
        self.send_calls.append((complete, keep_alive))
        if self.fail_next:
            self.fail_next -= 1
            raise ConnectionError("influxdb unreachable")
        self.sent.append([
            (s.name, tuple(s.columns), [list(r) for r in s.rows]) for s in batch
        ])


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return MetricRegistry(clock=clock)


@pytest.fixture
def transport():
    return RecordingInfluxdb()


@pytest.fixture
def config(clock):
    return ReporterConfig.create(
        prefix="app",
        environment="prod",
        component="web",
        host="h1",
        clock=clock,
    )
