"""InfluxDB transports and the series batch builder."""

from .errors import (
    InfluxdbError,
    InfluxdbTransportError,
    InfluxdbWriteError,
    SchemaMismatchError,
)
from .batch import Batch, Series, SeriesPayload
from .base import Influxdb, NoOpInfluxdb, LoggingInfluxdb
from .http import InfluxdbHttp

__all__ = [
    "InfluxdbError",
    "InfluxdbTransportError",
    "InfluxdbWriteError",
    "SchemaMismatchError",
    "Batch",
    "Series",
    "SeriesPayload",
    "Influxdb",
    "NoOpInfluxdb",
    "LoggingInfluxdb",
    "InfluxdbHttp",
]
