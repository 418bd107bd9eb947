"""
Logging setup shared by the CLI, the services and the stores.

Batch events are logged with their context in `extra=` (kind, size, index,
value, count). The console format prints the message only; the JSON format
(`LOG_JSON=true`) lifts every `extra=` field into the payload:

    {"level": "WARNING", "logger": "cargo_ledger.services.batch",
     "message": "[BATCH REJECTED] ship", "kind": "ship", "index": 1, "value": 0.0}
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    payload: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    for key, value in vars(record).items():
        if key not in _RESERVED_ATTRS and not key.startswith("_"):
            payload[key] = value
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    # Older call sites pass a single nested dict as `extra={"extra": {...}}`.
    if isinstance(getattr(record, "extra", None), dict):
        payload.update(record.extra)
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with `extra=` fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Install a single stderr handler on the root logger.

    Parameters
    ----------
    level : str
        Level name, usually `LOG_LEVEL`.
    json_logs : bool
        Emit `JsonFormatter` output instead of the console format.
    force : bool
        Replace an existing configuration. With False, a root logger that
        already has handlers is left alone.
    """
    if not force and logging.getLogger().handlers:
        return

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_logs else "console",
                    "level": level,
                    "stream": "ext://sys.stderr",
                }
            },
            "root": {"handlers": ["stderr"], "level": level},
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
