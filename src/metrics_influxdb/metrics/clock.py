from __future__ import annotations

import time


class Clock:
    """
    Source of time for instruments and reporters.

    time() is wall-clock milliseconds since the epoch and is what reporters
    stamp points with. tick() is a monotonic nanosecond counter used for
    measuring durations and ageing rates.
    """

    def time(self) -> int:
        return int(time.time() * 1000)

    def tick(self) -> int:
        return time.monotonic_ns()


_default_clock = Clock()


def default_clock() -> Clock:
    return _default_clock
