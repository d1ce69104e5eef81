"""Unit tests for logging configuration."""

from __future__ import annotations

import json
import logging
import logging.handlers
from collections.abc import Iterator
from io import StringIO
from pathlib import Path

import pytest
import structlog

from taskforge.config import LoggingConfig
from taskforge.logging import (
    add_correlation_id,
    bind_manager_context,
    correlation_scope,
    get_correlation_id,
    get_logger,
    new_correlation_id,
    set_correlation_id,
    setup_logging,
)


def _reset() -> None:
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    set_correlation_id(None)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Reset logging configuration around each test."""
    _reset()
    yield
    _reset()


@pytest.fixture
def capture_stream() -> StringIO:
    return StringIO()


@pytest.fixture
def json_config() -> LoggingConfig:
    return LoggingConfig(level="INFO", format="json", file=None)


def _capture(stream: StringIO) -> None:
    logging.getLogger().handlers[0].stream = stream


def test_json_output_format(json_config: LoggingConfig, capture_stream: StringIO) -> None:
    """Test that JSON format produces valid JSON output."""
    setup_logging(json_config)
    _capture(capture_stream)

    get_logger("test.module").info("task_created", task_id=1, title="Deploy")

    log_entry = json.loads(capture_stream.getvalue().strip())
    assert log_entry["event"] == "task_created"
    assert log_entry["task_id"] == 1
    assert log_entry["title"] == "Deploy"
    assert log_entry["level"] == "info"
    assert log_entry["logger"] == "test.module"
    assert "timestamp" in log_entry


def test_json_output_keeps_unicode(json_config: LoggingConfig, capture_stream: StringIO) -> None:
    setup_logging(json_config)
    _capture(capture_stream)

    get_logger("test.module").info("display", priority="วิกฤต 🔴")

    assert "วิกฤต 🔴" in capture_stream.getvalue()


def test_console_output_format(capture_stream: StringIO) -> None:
    """Test that console format produces human-readable output."""
    setup_logging(LoggingConfig(level="DEBUG", format="console"))
    _capture(capture_stream)

    get_logger("test.module").debug("task_transition", to_status="Done")

    output = capture_stream.getvalue()
    assert "task_transition" in output
    assert "to_status" in output
    with pytest.raises(json.JSONDecodeError):
        json.loads(output.strip())


def test_log_level_filtering(json_config: LoggingConfig, capture_stream: StringIO) -> None:
    setup_logging(json_config)
    _capture(capture_stream)

    logger = get_logger("test.module")
    logger.debug("debug_message")
    logger.info("info_message")

    lines = capture_stream.getvalue().strip().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["event"] == "info_message"


def test_correlation_id_binding(json_config: LoggingConfig, capture_stream: StringIO) -> None:
    setup_logging(json_config)
    _capture(capture_stream)

    set_correlation_id("batch-42")
    assert get_correlation_id() == "batch-42"
    get_logger("test.module").info("with_correlation")

    assert json.loads(capture_stream.getvalue().strip())["correlation_id"] == "batch-42"


def test_correlation_id_processor() -> None:
    assert add_correlation_id(None, "info", {"event": "x"}) == {"event": "x"}

    set_correlation_id("abc")
    assert add_correlation_id(None, "info", {"event": "x"}) == {
        "event": "x",
        "correlation_id": "abc",
    }


def test_correlation_scope_nests_and_restores() -> None:
    with correlation_scope("outer") as outer:
        assert outer == "outer"
        with correlation_scope() as inner:
            assert inner != "outer"
            assert get_correlation_id() == inner
        assert get_correlation_id() == "outer"
    assert get_correlation_id() is None


def test_correlation_scope_restores_on_error() -> None:
    with pytest.raises(RuntimeError):
        with correlation_scope("doomed"):
            raise RuntimeError("boom")
    assert get_correlation_id() is None


def test_new_correlation_id_is_unique() -> None:
    first, second = new_correlation_id(), new_correlation_id("undo")
    assert first.startswith("cmd-")
    assert second.startswith("undo-")
    assert first != second


def test_explicit_correlation_id_wins() -> None:
    with correlation_scope("ambient"):
        event = add_correlation_id(None, "info", {"event": "x", "correlation_id": "explicit"})
    assert event["correlation_id"] == "explicit"


def test_manager_context_binding(json_config: LoggingConfig, capture_stream: StringIO) -> None:
    setup_logging(json_config)
    _capture(capture_stream)

    bind_manager_context("board-1")
    get_logger("test.module").info("bound")

    assert json.loads(capture_stream.getvalue().strip())["manager_id"] == "board-1"


def test_file_rotation_handler_configuration(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "taskforge.log"
    setup_logging(
        LoggingConfig(level="INFO", file=log_file, rotation_size_mb=2, retention_count=3)
    )

    handler = logging.getLogger().handlers[0]
    assert isinstance(handler, logging.handlers.RotatingFileHandler)
    assert handler.maxBytes == 2 * 1024 * 1024
    assert handler.backupCount == 3
    assert log_file.parent.is_dir()

    get_logger("test.module").info("written")
    handler.flush()
    assert "written" in log_file.read_text(encoding="utf-8")


def test_exception_formatting(json_config: LoggingConfig, capture_stream: StringIO) -> None:
    setup_logging(json_config)
    _capture(capture_stream)

    try:
        raise RuntimeError("observer blew up")
    except RuntimeError:
        get_logger("test.module").exception("observer_failed")

    log_entry = json.loads(capture_stream.getvalue().strip())
    assert log_entry["level"] == "error"
    assert "observer blew up" in log_entry["exception"]
