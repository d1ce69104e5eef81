"""Structured logging for Taskforge.

structlog does the emitting; stdlib ``logging`` only supplies the
handler (stdout, or a size-rotated file). Two pieces of context ride
along on every event:

- ``correlation_id``: set by ``correlation_scope``. CommandHistory opens
  one per execute, undo and redo, so the manager and observer events a
  single command triggers can be grouped.
- ``manager_id``: bound by ``bind_manager_context``, used by the CLI to
  tag everything a run does with the manager it drives.

Example usage:
    >>> setup_logging(LoggingConfig(format="console"))
    >>> with correlation_scope() as cid:
    ...     history.execute_command(command, manager)
"""

from __future__ import annotations

import contextvars
import logging
import logging.handlers
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from taskforge.config import LoggingConfig

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor copying the active correlation id into the event."""
    correlation_id = _correlation_id.get()
    if correlation_id is not None:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    _correlation_id.set(correlation_id)


def new_correlation_id(prefix: str = "cmd") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Make ``correlation_id`` (or a fresh one) active until the block exits.

    The previous id, if any, is restored afterwards, so scopes nest.
    """
    cid = correlation_id or new_correlation_id()
    token = _correlation_id.set(cid)
    try:
        yield cid
    finally:
        _correlation_id.reset(token)


def bind_manager_context(manager_id: str) -> None:
    """Tag all subsequent events in this context with ``manager_id``."""
    structlog.contextvars.bind_contextvars(manager_id=manager_id)


def _build_handler(config: LoggingConfig) -> logging.Handler:
    if config.file is None:
        return logging.StreamHandler(sys.stdout)

    config.file.parent.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        filename=config.file,
        maxBytes=config.rotation_size_mb * 1024 * 1024,
        backupCount=config.retention_count,
        encoding="utf-8",
    )


def _build_processors(config: LoggingConfig) -> list[Any]:
    # Display names are Thai and emoji, keep them readable in JSON
    renderer: Any = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if config.format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def setup_logging(config: LoggingConfig) -> None:
    """Install the root handler and configure structlog from ``config``.

    Calling it again replaces the previous handler and processor chain.
    """
    level = getattr(logging, config.level)

    handler = _build_handler(config)
    handler.setLevel(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)

    structlog.configure(
        processors=_build_processors(config),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
