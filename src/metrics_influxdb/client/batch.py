"""Batch builder: accumulates named series for one write request.

A batch is the set of series collected during one reporting cycle. It is
reset at the start of the cycle, filled with append_series(), serialized to
the InfluxDB JSON series format and discarded after the write, whatever its
outcome.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Sequence

import numpy as np
from pydantic import BaseModel

from .errors import SchemaMismatchError


class SeriesPayload(BaseModel):
    """One entry of the JSON body posted to /db/<database>/series."""

    name: str
    columns: List[str]
    points: List[List[Any]]


def to_wire_value(value: Any) -> Any:
    """
    Convert a row value into something JSON can carry.

    numpy scalars become Python scalars and non-finite floats become None
    since JSON has no NaN or infinity.
    """
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


@dataclass
class Series:
    prefix: str
    metric_name: str
    suffix: str
    columns: Sequence[str]
    rows: List[List[Any]] = field(default_factory=list)

    @property
    def name(self) -> str:
        return f"{self.prefix}{self.metric_name}{self.suffix}"

    def to_payload(self) -> SeriesPayload:
        return SeriesPayload(
            name=self.name,
            columns=list(self.columns),
            points=[[to_wire_value(v) for v in row] for row in self.rows],
        )


class Batch:
    """Ordered collection of series staged for a single write."""

    def __init__(self):
        self._series: List[Series] = []

    def reset(self) -> None:
        self._series.clear()

    def append_series(
        self,
        prefix: str,
        name: str,
        suffix: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
    ) -> Series:
        """
        Stage one series.

        Every row must have exactly one value per column. Rows are copied, so
        the caller may reuse its row buffers as soon as this returns. Series
        are kept in call order and never deduplicated.

        Raises:
            SchemaMismatchError: if a row's length differs from len(columns)
        """
        width = len(columns)
        for row in rows:
            if len(row) != width:
                raise SchemaMismatchError(f"{prefix}{name}{suffix}", width, len(row))
        series = Series(
            prefix=prefix,
            metric_name=name,
            suffix=suffix,
            columns=tuple(columns),
            rows=[list(row) for row in rows],
        )
        self._series.append(series)
        return series

    @property
    def series(self) -> List[Series]:
        return list(self._series)

    @property
    def point_count(self) -> int:
        return sum(len(s.rows) for s in self._series)

    def is_empty(self) -> bool:
        return not self._series

    def to_payload(self) -> List[SeriesPayload]:
        return [s.to_payload() for s in self._series]

    def to_json(self) -> str:
        return json.dumps([p.model_dump() for p in self.to_payload()], separators=(",", ":"))

    def __len__(self) -> int:
        return len(self._series)

    def __iter__(self) -> Iterator[Series]:
        return iter(list(self._series))
