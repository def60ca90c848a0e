from __future__ import annotations

import json
import logging

from userpager.utils.logging import CHATTY_LOGGERS, _json_formatter, logging_config

EXPECTED_PAGE = 3
EXPECTED_DELAY = 0.75


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.page = EXPECTED_PAGE
    record.operation = "listPage"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["page"] == EXPECTED_PAGE
    assert payload["operation"] == "listPage"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"delay_seconds": EXPECTED_DELAY}

    payload = json.loads(_json_formatter(record))

    assert payload["delay_seconds"] == EXPECTED_DELAY


def test_chatty_loggers_follow_debug_only() -> None:
    quiet = logging_config("info")
    verbose = logging_config("DEBUG", json_logs=True)

    assert quiet["root"]["level"] == "INFO"
    assert quiet["handlers"]["stderr"]["formatter"] == "console"
    assert {cfg["level"] for cfg in quiet["loggers"].values()} == {"WARNING"}
    assert set(quiet["loggers"]) == set(CHATTY_LOGGERS)
    assert verbose["handlers"]["stderr"]["formatter"] == "json"
    assert {cfg["level"] for cfg in verbose["loggers"].values()} == {"DEBUG"}
