"""HTTP transport for the InfluxDB series write API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..config.influxdb_config import InfluxdbConfig
from .base import Influxdb
from .batch import Batch
from .errors import InfluxdbTransportError, InfluxdbWriteError

logger = logging.getLogger(__name__)


class InfluxdbHttp(Influxdb):
    """
    Writes batches with POST <base_url>/db/<database>/series.

    The body is the JSON list of series; credentials and time precision travel
    as query parameters. A client passed in by the caller is used as-is and
    never closed by this transport; otherwise one is created on demand and
    closed after each write made with keep_alive=False.
    """

    def __init__(self, config: Optional[InfluxdbConfig] = None, http_client: Optional[httpx.Client] = None):
        super().__init__()
        self.config = config or InfluxdbConfig()
        self._http: Optional[httpx.Client] = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_env(cls) -> "InfluxdbHttp":
        return cls(InfluxdbConfig.from_env())

    def _create_client(self) -> httpx.Client:
        timeout = self.config.timeout_s
        return httpx.Client(
            base_url=self.config.base_url,
            timeout=httpx.Timeout(
                connect=min(timeout, 5.0),
                read=timeout,
                write=min(timeout, 5.0),
                pool=min(timeout, 5.0),
            ),
        )

    @property
    def http(self) -> httpx.Client:
        if self._http is None:
            self._http = self._create_client()
        return self._http

    @property
    def url(self) -> str:
        return f"{self.config.base_url}{self.config.series_path}"

    def _write(self, batch: Batch, complete: bool, keep_alive: bool) -> None:
        body = batch.to_json()
        try:
            response = self.http.post(
                self.url,
                content=body,
                params=self.config.get_query_params(),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as e:
            raise InfluxdbTransportError(f"{e.__class__.__name__} writing to {self.url}: {e}") from e
        finally:
            if not keep_alive:
                self._close_owned_client()

        if not response.is_success:
            raise InfluxdbWriteError(response.status_code, response.text, self.url)

        logger.debug(
            f"Wrote {len(batch)} series ({batch.point_count} points) to {self.url} "
            f"[complete={complete}, status={response.status_code}]"
        )

    def _close_owned_client(self) -> None:
        if self._owns_client and self._http is not None:
            self._http.close()
            self._http = None

    def close(self) -> None:
        self._close_owned_client()

    def get_health(self) -> Dict[str, Any]:
        health = super().get_health()
        health.update({
            "url": self.url,
            "database": self.config.database,
        })
        return health
