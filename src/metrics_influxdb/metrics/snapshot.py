"""Point-in-time statistics over a set of recorded samples."""

from __future__ import annotations

from typing import Iterable

import numpy as np


class Snapshot:
    """
    Statistical view of a histogram or timer reservoir.

    Quantiles use the q * (n + 1) sample position, interpolated between
    neighbours and clamped to the smallest and largest sample. An empty
    snapshot reports zero for every statistic.
    """

    def __init__(self, values: Iterable[float]):
        self._values = np.sort(np.fromiter(values, dtype=np.float64))

    @property
    def size(self) -> int:
        return int(self._values.size)

    @property
    def values(self) -> np.ndarray:
        return self._values.copy()

    def get_value(self, quantile: float) -> float:
        if not 0.0 <= quantile <= 1.0:
            raise ValueError(f"{quantile} is not in [0..1]")
        if self._values.size == 0:
            return 0.0
        return float(np.quantile(self._values, quantile, method="weibull"))

    @property
    def min(self) -> float:
        if self._values.size == 0:
            return 0.0
        return float(self._values[0])

    @property
    def max(self) -> float:
        if self._values.size == 0:
            return 0.0
        return float(self._values[-1])

    @property
    def mean(self) -> float:
        if self._values.size == 0:
            return 0.0
        return float(self._values.mean())

    @property
    def std_dev(self) -> float:
        # sample standard deviation
        if self._values.size <= 1:
            return 0.0
        return float(self._values.std(ddof=1))

    @property
    def median(self) -> float:
        return self.get_value(0.5)

    @property
    def p75(self) -> float:
        return self.get_value(0.75)

    @property
    def p95(self) -> float:
        return self.get_value(0.95)

    @property
    def p99(self) -> float:
        return self.get_value(0.99)

    @property
    def p999(self) -> float:
        return self.get_value(0.999)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Snapshot(size={self.size}, min={self.min}, max={self.max}, mean={self.mean})"
