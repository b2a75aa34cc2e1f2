"""InfluxDB transports.

A transport stages series for one request and writes them as a single unit:

    client.reset_request()
    client.append_series(prefix, name, suffix, columns, rows)
    ...
    client.send_request(complete=True, keep_alive=False)

Subclasses only implement _write(); staging and the request lifecycle live in
the base class.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

from .batch import Batch

logger = logging.getLogger(__name__)


class Influxdb(ABC):
    """Base class for InfluxDB transports."""

    def __init__(self):
        self._batch = Batch()
        self._requests_sent = 0
        self._requests_failed = 0

    @property
    def batch(self) -> Batch:
        """Series staged for the pending request."""
        return self._batch

    def reset_request(self) -> None:
        """Clear the pending request."""
        self._batch.reset()

    def append_series(
        self,
        prefix: str,
        name: str,
        suffix: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
    ) -> None:
        """
        Stage one series for the pending request.

        Raises:
            SchemaMismatchError: if a row does not have one value per column
        """
        self._batch.append_series(prefix, name, suffix, columns, rows)

    def send_request(self, complete: bool = True, keep_alive: bool = False) -> None:
        """
        Write every staged series as one request.

        The pending request is cleared afterwards whether or not the write
        succeeded. An empty request is not sent.

        Args:
            complete: The staged series form a self-contained batch
            keep_alive: Keep the connection open for further requests

        Raises:
            InfluxdbError: if the write fails
        """
        if self._batch.is_empty():
            logger.debug("No series staged, skipping write")
            return
        try:
            self._write(self._batch, complete, keep_alive)
            self._requests_sent += 1
        except Exception:
            self._requests_failed += 1
            raise
        finally:
            self._batch.reset()

    @abstractmethod
    def _write(self, batch: Batch, complete: bool, keep_alive: bool) -> None:
        """Write the batch to the server."""
        pass

    def close(self) -> None:
        """Release any held connections."""
        pass

    def get_health(self) -> Dict[str, Any]:
        """
        Get transport health status.

        Returns:
            Dictionary with health information including:
            - type: Transport class name
            - available: Whether the transport is configured
            - requests_sent: Successful writes so far
            - requests_failed: Failed writes so far
        """
        return {
            "type": type(self).__name__,
            "available": True,
            "requests_sent": self._requests_sent,
            "requests_failed": self._requests_failed,
        }

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class NoOpInfluxdb(Influxdb):
    """Transport that discards every request."""

    def _write(self, batch: Batch, complete: bool, keep_alive: bool) -> None:
        pass


class LoggingInfluxdb(Influxdb):
    """Transport that logs the JSON body of each request instead of sending it."""

    def __init__(self, log_level: int = logging.INFO):
        """
        Initialize logging transport.

        Args:
            log_level: Logging level (default: logging.INFO)
        """
        super().__init__()
        self.log_level = log_level

    def _write(self, batch: Batch, complete: bool, keep_alive: bool) -> None:
        logger.log(self.log_level, f"InfluxDB batch ({len(batch)} series): {batch.to_json()}")
