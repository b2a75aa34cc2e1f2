"""Reusable per-kind row buffers."""

from __future__ import annotations

from typing import Any, Dict, List

from ..client.errors import SchemaMismatchError
from .columns import MetricKind


class PointBuffer:
    """
    One row slot per metric kind, overwritten in place every time a metric of
    that kind is written.

    write() returns the single-row list the batch builder consumes. Its
    contents are only valid until the next write of the same kind, so this
    buffer must only be used by one reporting cycle at a time.
    """

    def __init__(self):
        self._slots: Dict[MetricKind, List[Any]] = {kind: [None] * kind.width for kind in MetricKind}
        self._rows: Dict[MetricKind, List[List[Any]]] = {kind: [slot] for kind, slot in self._slots.items()}

    def write(self, kind: MetricKind, *values: Any) -> List[List[Any]]:
        slot = self._slots[kind]
        if len(values) != len(slot):
            raise SchemaMismatchError(kind.name.lower(), len(slot), len(values))
        slot[:] = values
        return self._rows[kind]
