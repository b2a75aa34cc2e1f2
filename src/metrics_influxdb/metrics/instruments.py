"""In-process metric instruments.

Instruments are updated by application code and read by reporters through
their read-only accessors (count, value, snapshot(), rates). All updates are
thread-safe.
"""

from __future__ import annotations

import math
import threading
from collections import deque
from typing import Any, Callable, Optional

from ..config.units import TimeUnit
from .clock import Clock, default_clock
from .snapshot import Snapshot

DEFAULT_RESERVOIR_SIZE = 1028


class Metric:
    """Marker base class for everything a MetricRegistry can hold."""


class Gauge(Metric):
    """
    A gauge reads its value from a callable each time it is asked.

    The value is whatever the callable returns; reporters pass it through
    without conversion.
    """

    def __init__(self, supplier: Callable[[], Any]):
        self._supplier = supplier

    @property
    def value(self) -> Any:
        return self._supplier()


class Counter(Metric):
    def __init__(self):
        self._lock = threading.Lock()
        self._count = 0

    def inc(self, n: int = 1) -> None:
        with self._lock:
            self._count += n

    def dec(self, n: int = 1) -> None:
        with self._lock:
            self._count -= n

    @property
    def count(self) -> int:
        return self._count


class Histogram(Metric):
    """
    Records samples into a bounded sliding-window reservoir.

    count is the total number of updates ever made; the snapshot only covers
    the most recent reservoir_size samples.
    """

    def __init__(self, reservoir_size: int = DEFAULT_RESERVOIR_SIZE):
        self._lock = threading.Lock()
        self._count = 0
        self._samples: deque = deque(maxlen=reservoir_size)

    def update(self, value: float) -> None:
        with self._lock:
            self._count += 1
            self._samples.append(value)

    @property
    def count(self) -> int:
        return self._count

    def snapshot(self) -> Snapshot:
        with self._lock:
            samples = list(self._samples)
        return Snapshot(samples)


class EWMA:
    """
    Exponentially-weighted moving average of an event rate.

    update() accumulates events; tick() must be called every TICK_INTERVAL
    seconds to fold them into the average.
    """

    TICK_INTERVAL = 5
    SECONDS_PER_MINUTE = 60.0

    def __init__(self, alpha: float, interval_s: float = TICK_INTERVAL):
        self._alpha = alpha
        self._interval_ns = interval_s * TimeUnit.SECONDS.nanos
        self._uncounted = 0
        self._rate = 0.0
        self._initialized = False
        self._lock = threading.Lock()

    @classmethod
    def for_minutes(cls, minutes: int) -> "EWMA":
        alpha = 1 - math.exp(-cls.TICK_INTERVAL / cls.SECONDS_PER_MINUTE / minutes)
        return cls(alpha)

    def update(self, n: int) -> None:
        with self._lock:
            self._uncounted += n

    def tick(self) -> None:
        with self._lock:
            count, self._uncounted = self._uncounted, 0
            instant_rate = count / self._interval_ns
            if self._initialized:
                self._rate += self._alpha * (instant_rate - self._rate)
            else:
                self._rate = instant_rate
                self._initialized = True

    def get_rate(self, unit: TimeUnit = TimeUnit.SECONDS) -> float:
        return self._rate * unit.nanos


class Meter(Metric):
    """Measures the rate of events: mean rate plus 1, 5 and 15 minute moving averages, per second."""

    _TICK_INTERVAL_NS = EWMA.TICK_INTERVAL * TimeUnit.SECONDS.nanos

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or default_clock()
        self._lock = threading.Lock()
        self._count = 0
        self._m1 = EWMA.for_minutes(1)
        self._m5 = EWMA.for_minutes(5)
        self._m15 = EWMA.for_minutes(15)
        self._start_time = self._clock.tick()
        self._last_tick = self._start_time

    def mark(self, n: int = 1) -> None:
        self._tick_if_necessary()
        with self._lock:
            self._count += n
        self._m1.update(n)
        self._m5.update(n)
        self._m15.update(n)

    def _tick_if_necessary(self) -> None:
        with self._lock:
            now = self._clock.tick()
            age = now - self._last_tick
            if age <= self._TICK_INTERVAL_NS:
                return
            self._last_tick = now - age % self._TICK_INTERVAL_NS
            required_ticks = age // self._TICK_INTERVAL_NS
        for _ in range(int(required_ticks)):
            self._m1.tick()
            self._m5.tick()
            self._m15.tick()

    @property
    def count(self) -> int:
        return self._count

    @property
    def mean_rate(self) -> float:
        if self._count == 0:
            return 0.0
        elapsed_ns = self._clock.tick() - self._start_time
        if elapsed_ns <= 0:
            return 0.0
        return self._count / elapsed_ns * TimeUnit.SECONDS.nanos

    @property
    def one_minute_rate(self) -> float:
        self._tick_if_necessary()
        return self._m1.get_rate(TimeUnit.SECONDS)

    @property
    def five_minute_rate(self) -> float:
        self._tick_if_necessary()
        return self._m5.get_rate(TimeUnit.SECONDS)

    @property
    def fifteen_minute_rate(self) -> float:
        self._tick_if_necessary()
        return self._m15.get_rate(TimeUnit.SECONDS)


class Timer(Metric):
    """
    A histogram of durations (recorded in nanoseconds) plus a meter of how
    often they occur.

    Usage:
        with timer.time():
            handle_request()
    """

    def __init__(self, clock: Optional[Clock] = None, reservoir_size: int = DEFAULT_RESERVOIR_SIZE):
        self._clock = clock or default_clock()
        self._histogram = Histogram(reservoir_size)
        self._meter = Meter(self._clock)

    def update(self, duration: float, unit: TimeUnit = TimeUnit.NANOSECONDS) -> None:
        nanos = unit.to_nanos(duration)
        if nanos < 0:
            return
        self._histogram.update(nanos)
        self._meter.mark()

    def time(self) -> "TimerContext":
        return TimerContext(self, self._clock)

    @property
    def count(self) -> int:
        return self._histogram.count

    def snapshot(self) -> Snapshot:
        return self._histogram.snapshot()

    @property
    def mean_rate(self) -> float:
        return self._meter.mean_rate

    @property
    def one_minute_rate(self) -> float:
        return self._meter.one_minute_rate

    @property
    def five_minute_rate(self) -> float:
        return self._meter.five_minute_rate

    @property
    def fifteen_minute_rate(self) -> float:
        return self._meter.fifteen_minute_rate


class TimerContext:
    def __init__(self, timer: Timer, clock: Clock):
        self._timer = timer
        self._clock = clock
        self._start = clock.tick()
        self._stopped = False

    def stop(self) -> int:
        """Record the elapsed time once and return it in nanoseconds."""
        elapsed = self._clock.tick() - self._start
        if not self._stopped:
            self._stopped = True
            self._timer.update(elapsed, TimeUnit.NANOSECONDS)
        return elapsed

    def __enter__(self) -> "TimerContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
