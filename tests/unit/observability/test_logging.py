"""
cheevo-lint - unit tests for observability logging

File: tests/unit/observability/test_logging.py
Last updated: 2026-10-19

Purpose
- Validate the process-wide log sink and structlog routing.

What this test file should cover
- JSON line validity and extra-field capture from structlog events.
- Text line rendering.
- Level filtering, handler replacement and shutdown behavior.

Functional requirements
- Offline operation; output is captured in memory streams.

Non-functional requirements
- Deterministic and non-flaky.
"""

from __future__ import annotations

import io
import json
import logging
from typing import TYPE_CHECKING

import pytest
import structlog

from cheevo_lint.observability import (
    LoggingConfig,
    get_active_logger,
    setup_logging,
    shutdown_logging,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _cleanup_logging() -> Iterator[None]:
    yield
    shutdown_logging()


def _lines(stream: io.StringIO) -> list[str]:
    return [line for line in stream.getvalue().splitlines() if line.strip()]


def test_structlog_events_become_json_lines() -> None:
    stream = io.StringIO()
    setup_logging(LoggingConfig(level="INFO", json=True, stream=stream))

    structlog.get_logger("cheevo_lint.tests").info(
        "asset_assessed", kind="achievement", issue_codes=["ONE_CONDITION"], subject_id=7
    )
    structlog.get_logger("cheevo_lint.tests").debug("feedback_rule_evaluated", rule="x")

    (line,) = _lines(stream)
    event = json.loads(line)
    assert event["message"] == "asset_assessed"
    assert event["level"] == "INFO"
    assert event["logger"] == "cheevo_lint.tests"
    assert event["timestamp"].endswith("Z")
    assert event["fields"] == {
        "kind": "achievement",
        "issue_codes": ["ONE_CONDITION"],
        "subject_id": 7,
    }


def test_text_lines_sort_extra_fields() -> None:
    stream = io.StringIO()
    setup_logging(LoggingConfig(level="DEBUG", stream=stream))

    logging.getLogger("cheevo_lint.tests").warning(
        "input_rejected", extra={"path": "set.json", "count": 3}
    )

    assert _lines(stream) == ["WARNING cheevo_lint.tests: input_rejected count=3 path=set.json"]


def test_exceptions_are_included_in_json() -> None:
    stream = io.StringIO()
    setup_logging(LoggingConfig(level="ERROR", json=True, stream=stream))

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logging.getLogger("cheevo_lint").exception("internal_error")

    event = json.loads(_lines(stream)[0])
    assert event["message"] == "internal_error"
    assert "RuntimeError: boom" in event["exception"]


def test_setup_replaces_previous_handler_and_shutdown_detaches() -> None:
    first = setup_logging(LoggingConfig(stream=io.StringIO()))
    second = setup_logging(LoggingConfig(stream=io.StringIO()))

    logger = get_active_logger()
    assert logger is not None
    assert first.is_shutdown
    assert not second.is_shutdown
    assert len(logger.handlers) == 1
    assert logger.propagate is False

    shutdown_logging()

    assert second.is_shutdown
    assert get_active_logger() is None
    assert logger.handlers == []
    shutdown_logging()


def test_unknown_level_is_rejected() -> None:
    with pytest.raises(ValueError, match="unsupported logging level"):
        setup_logging(LoggingConfig(level="LOUD", stream=io.StringIO()))


def test_config_from_mapping() -> None:
    config = LoggingConfig.from_mapping({"level": "DEBUG", "json": True})

    assert config.level == "DEBUG"
    assert config.json is True
    assert LoggingConfig.from_mapping({}) == LoggingConfig()
