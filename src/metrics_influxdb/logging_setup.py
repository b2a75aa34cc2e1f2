from __future__ import annotations
import io
import json
import logging
import os
from logging import Filter
from logging.config import dictConfig

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class HttpxRequestFilter(Filter):
    """
    Filter to suppress the per-request INFO lines httpx emits.

    Every reporting cycle makes one write request, so at INFO level httpx
    would log a line per cycle. Warnings and errors still pass.
    """
    def filter(self, record):
        if record.name.startswith(("httpx", "httpcore")) and record.levelno < logging.WARNING:
            if "HTTP Request:" in record.getMessage():
                return False
        return True


_STDOUT_ONLY = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "std": {"format": "%(asctime)s %(levelname)s %(name)s %(message)s"}
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "std",
            "level": DEFAULT_LEVEL,
            "filters": ["httpx_request_filter"],
        }
    },
    "filters": {
        "httpx_request_filter": {
            "()": "metrics_influxdb.logging_setup.HttpxRequestFilter",
        }
    },
    "root": {"level": DEFAULT_LEVEL, "handlers": ["stdout"]},
}


def _remove_file_handlers():
    root = logging.getLogger()
    for h in list(root.handlers):
        if hasattr(h, "baseFilename"):
            root.removeHandler(h)
            h.close()


def setup_logging(config_path_env: str = "METRICS_INFLUXDB_LOGCFG"):
    """
    Call this from your entrypoint before starting a reporter.
    - If METRICS_INFLUXDB_LOGCFG points to a YAML/JSON dictConfig file, we load it.
    - Otherwise we force a stdout-only config and remove any pre-attached FileHandlers.
    """
    cfg_path = os.getenv(config_path_env, "").strip()
    if cfg_path and os.path.exists(cfg_path):
        with open(cfg_path, "r", encoding="utf-8") as f:
            text = f.read()
        try:
            # Try JSON first
            dictConfig(json.loads(text))
        except json.JSONDecodeError:
            # Fall back to YAML
            import yaml
            dictConfig(yaml.safe_load(io.StringIO(text)))
        return

    # No external config → enforce stdout-only and remove any file handlers
    _remove_file_handlers()
    dictConfig(_STDOUT_ONLY)


def set_reporter_log_level(level: str = "INFO") -> logging.Logger:
    """
    Set the level of the metrics_influxdb loggers only.

    Assumes `setup_logging()` (or the host application) configured the root
    handler; records propagate there.

    Args:
        level (str): Log level, e.g. "DEBUG" to see every successful cycle

    Returns:
        logging.Logger: The package logger
    """
    logger = logging.getLogger("metrics_influxdb")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = True
    return logger
