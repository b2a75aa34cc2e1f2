"""Column schemas and series suffixes for each metric kind."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

TAG_COLUMNS: Tuple[str, ...] = ("time", "host", "environment", "component")

_SNAPSHOT_COLUMNS = (
    "count", "min", "max", "mean", "std-dev",
    "50-pct", "75-pct", "95-pct", "99-pct", "999-pct",
)
_RATE_COLUMNS = ("1m-rate", "5m-rate", "15m-rate", "mean-rate")

COLUMNS_GAUGE = TAG_COLUMNS + ("value",)
COLUMNS_COUNTER = TAG_COLUMNS + ("count",)
COLUMNS_HISTOGRAM = TAG_COLUMNS + _SNAPSHOT_COLUMNS
COLUMNS_METER = TAG_COLUMNS + ("count",) + _RATE_COLUMNS
COLUMNS_TIMER = TAG_COLUMNS + _SNAPSHOT_COLUMNS + _RATE_COLUMNS


class MetricKind(Enum):
    """
    The five reported metric kinds, in reporting order.

    Each kind carries the suffix appended to series names and its column
    schema.
    """

    GAUGE = (".value", COLUMNS_GAUGE)
    COUNTER = (".count", COLUMNS_COUNTER)
    HISTOGRAM = (".histogram", COLUMNS_HISTOGRAM)
    METER = (".meter", COLUMNS_METER)
    TIMER = (".timer", COLUMNS_TIMER)

    def __init__(self, suffix: str, columns: Tuple[str, ...]):
        self.suffix = suffix
        self.columns = columns

    @property
    def width(self) -> int:
        return len(self.columns)
