"""Time units used for rate and duration conversion."""

from __future__ import annotations

from enum import Enum
from typing import Union


class TimeUnit(Enum):
    """A unit of time, valued in nanoseconds."""

    NANOSECONDS = 1
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000
    SECONDS = 1_000_000_000
    MINUTES = 60 * 1_000_000_000
    HOURS = 60 * 60 * 1_000_000_000
    DAYS = 24 * 60 * 60 * 1_000_000_000

    @property
    def nanos(self) -> int:
        return self.value

    @property
    def seconds(self) -> float:
        """Number of seconds in one unit."""
        return self.value / TimeUnit.SECONDS.value

    def to_nanos(self, duration: float) -> int:
        return int(duration * self.value)

    @property
    def rate_factor(self) -> float:
        """Multiplier turning a per-second rate into a per-unit rate."""
        return self.seconds

    @property
    def duration_factor(self) -> float:
        """Multiplier turning nanoseconds into this unit."""
        return 1.0 / self.value

    @classmethod
    def parse(cls, value: Union[str, "TimeUnit"]) -> "TimeUnit":
        """
        Parse a unit from its name ("seconds", "MILLISECONDS") or short
        form ("s", "ms", "us", "ns", "m", "h", "d").

        Raises:
            ValueError: if the value does not name a known unit
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        if key in _SHORT_NAMES:
            return _SHORT_NAMES[key]
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError(f"Unknown time unit: {value!r}") from None


_SHORT_NAMES = {
    "ns": TimeUnit.NANOSECONDS,
    "us": TimeUnit.MICROSECONDS,
    "ms": TimeUnit.MILLISECONDS,
    "s": TimeUnit.SECONDS,
    "m": TimeUnit.MINUTES,
    "h": TimeUnit.HOURS,
    "d": TimeUnit.DAYS,
}
