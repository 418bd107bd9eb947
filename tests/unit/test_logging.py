from __future__ import annotations

import json
import logging
import sys

from cargo_ledger.utils.logging import JsonFormatter, _json_formatter, configure_logging

EXPECTED_COUNT = 2
EXPECTED_INDEX = 1


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.count = EXPECTED_COUNT
    record.kind = "ship"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["count"] == EXPECTED_COUNT
    assert payload["kind"] == "ship"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"index": EXPECTED_INDEX}

    payload = json.loads(_json_formatter(record))

    assert payload["index"] == EXPECTED_INDEX
    assert "extra" not in payload


def test_json_formatter_renders_exception_info() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord(
            name="test.logger",
            level=logging.ERROR,
            pathname=__file__,
            lineno=1,
            msg="failed",
            args=(),
            exc_info=sys.exc_info(),
        )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "ERROR"
    assert "ValueError: boom" in payload["exc_info"]


def test_configure_logging_without_force_keeps_existing_handlers(monkeypatch) -> None:
    root = logging.getLogger()
    existing = logging.NullHandler()
    monkeypatch.setattr(root, "handlers", [existing])

    configure_logging(level="DEBUG", json_logs=True, force=False)

    assert root.handlers == [existing]
