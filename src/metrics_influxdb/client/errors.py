"""Exceptions raised by InfluxDB transports and the batch builder."""

from __future__ import annotations

from typing import Optional


class InfluxdbError(Exception):
    """Base class for InfluxDB client errors."""


class InfluxdbTransportError(InfluxdbError):
    """The write could not reach the server (connection, timeout, protocol error)."""


class InfluxdbWriteError(InfluxdbError):
    """The server answered the write with a non-success status."""

    def __init__(self, status_code: int, body: str = "", url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        message = f"InfluxDB write failed with HTTP {status_code}"
        if body:
            message += f": {body[:200]}"
        super().__init__(message)


class SchemaMismatchError(InfluxdbError):
    """
    A row does not have one value per column.

    This is an internal consistency failure: the column schemas and the row
    extractors disagree. It is always checked and never recoverable.
    """

    def __init__(self, series_name: str, expected: int, actual: int):
        self.series_name = series_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Series {series_name!r} has {expected} columns but a row with {actual} values"
        )
