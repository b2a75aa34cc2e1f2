"""
InfluxDB endpoint configuration.

Environment Variables:
    INFLUXDB_SCHEME: "http" or "https" (default: "http")
    INFLUXDB_HOST: Server host (default: "localhost")
    INFLUXDB_PORT: Server port (default: 8086)
    INFLUXDB_DATABASE: Database the series are written to (default: "metrics")
    INFLUXDB_USERNAME: User name (default: "root")
    INFLUXDB_PASSWORD: Password (default: "root")
    INFLUXDB_TIMEOUT_S: Request timeout in seconds (default: 5.0)
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict

# Points are stamped with Clock.time(), which is in milliseconds
TIME_PRECISION = "ms"


@dataclass(frozen=True)
class InfluxdbConfig:
    """Connection settings for the InfluxDB HTTP write API."""

    host: str = "localhost"
    port: int = 8086
    database: str = "metrics"
    username: str = "root"
    password: str = field(default="root", repr=False)
    timeout_s: float = 5.0
    scheme: str = "http"

    def __post_init__(self):
        """Validate configuration."""
        if self.scheme not in ("http", "https"):
            raise ValueError(f"scheme must be http or https, got {self.scheme!r}")
        if not self.database:
            raise ValueError("database must not be empty")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")

    @classmethod
    def from_env(cls) -> "InfluxdbConfig":
        """Create configuration from environment variables."""
        return cls(
            host=os.getenv("INFLUXDB_HOST", "localhost"),
            port=int(os.getenv("INFLUXDB_PORT", "8086")),
            database=os.getenv("INFLUXDB_DATABASE", "metrics"),
            username=os.getenv("INFLUXDB_USERNAME", "root"),
            password=os.getenv("INFLUXDB_PASSWORD", "root"),
            timeout_s=float(os.getenv("INFLUXDB_TIMEOUT_S", "5.0")),
            scheme=os.getenv("INFLUXDB_SCHEME", "http").lower(),
        )

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def series_path(self) -> str:
        return f"/db/{self.database}/series"

    def get_query_params(self) -> Dict[str, str]:
        """Query parameters for a series write."""
        return {
            "u": self.username,
            "p": self.password,
            "time_precision": TIME_PRECISION,
        }
