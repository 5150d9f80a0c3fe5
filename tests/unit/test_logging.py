"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from test_driven_state.logging import JsonFormatter, configure_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_json_formatter_promotes_replay_context() -> None:
    record = logging.LogRecord(
        name="test_driven_state.verification",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Trace diverged: %s",
        args=("No transition from @ to x",),
        exc_info=None,
    )
    record.trace = "Trace 1"
    record.from_state = "@"
    record.to_state = "x"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "test_driven_state.verification"
    assert payload["message"] == "Trace diverged: No transition from @ to x"
    assert payload["trace"] == "Trace 1"
    assert payload["from_state"] == "@"
    assert payload["to_state"] == "x"
    assert "extra" not in payload
    assert "exception" not in payload


def test_json_formatter_reprs_unserializable_extra() -> None:
    record = logging.LogRecord(
        name="test_driven_state.verification",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Replayed trace",
        args=(),
        exc_info=None,
    )
    record.passed = 3
    record.marker = object()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["extra"]["passed"] == 3
    assert payload["extra"]["marker"].startswith("<object object")
    assert "trace" not in payload


def test_configure_logging_replaces_handlers(restore_root_logger: None) -> None:
    configure_logging("debug")
    configure_logging("warning", json_output=False)

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_configure_logging_uses_json_by_default(restore_root_logger: None) -> None:
    configure_logging("info")

    assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)
