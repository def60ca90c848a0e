"""
Logging setup shared by the CLI, the query server, the browser and the prefetcher.

Records go to stderr either as one readable line or, with `LOG_JSON=true`,
as one JSON object per line. Fields passed through `extra=` become
top-level keys of the JSON object, so `log.info("Prefetch finished",
extra={"pages": 10})` can be filtered on `pages` downstream.

The HTTP client and the ASGI server log every request at INFO. They are
held at WARNING unless the root level is DEBUG.
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}

CHATTY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as JSON string."""
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    for key, value in vars(record).items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            payload[key] = value
    if isinstance(getattr(record, "extra", None), dict):
        payload.update(record.extra)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def logging_config(level: str = "INFO", json_logs: bool = False) -> Dict[str, Any]:
    """
    Build the `dictConfig` mapping for the given level and output format.

    Parameters
    ----------
    level : str
        Root level name, e.g. "DEBUG" or "WARNING".
    json_logs : bool
        Emit JSON lines instead of the console format.

    Returns
    -------
    dict
        A schema version 1 configuration.
    """
    level = level.upper()
    chatty_level = "DEBUG" if level == "DEBUG" else "WARNING"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": "%H:%M:%S"},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "json" if json_logs else "console",
            }
        },
        "loggers": {name: {"level": chatty_level} for name in CHATTY_LOGGERS},
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str = "INFO", json_logs: bool = False, force: bool = True) -> None:
    """Install the handlers; with `force=False` an already configured root is left alone."""
    if not force and logging.getLogger().handlers:
        return
    logging.config.dictConfig(logging_config(level, json_logs))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["CHATTY_LOGGERS", "JsonFormatter", "configure_logging", "get_logger", "logging_config"]
