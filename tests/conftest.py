"""Shared pytest fixtures for Taskforge tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from taskforge.builder import TaskBuilder
from taskforge.manager import TaskManager
from taskforge.models.task import Task


class RecordingObserver:
    """Observer that appends every event to a shared log."""

    def __init__(self, name: str = "recorder", log: list[tuple[Any, ...]] | None = None):
        self.name = name
        self.events: list[tuple[Any, ...]] = log if log is not None else []

    def on_task_created(self, task: Task) -> None:
        self.events.append((self.name, "created", task))

    def on_task_updated(self, old_task: Task, new_task: Task) -> None:
        self.events.append((self.name, "updated", old_task, new_task))

    def on_task_deleted(self, task: Task) -> None:
        self.events.append((self.name, "deleted", task))


@pytest.fixture
def manager() -> TaskManager:
    """Create an empty TaskManager with default configuration."""
    return TaskManager()


@pytest.fixture
def recorder(manager: TaskManager) -> RecordingObserver:
    """Register a RecordingObserver on the manager fixture."""
    observer = RecordingObserver()
    manager.add_observer(observer)
    return observer


@pytest.fixture
def make_builder() -> Callable[..., TaskBuilder]:
    """Factory for builders with a title and optional overrides."""

    def _make(title: str = "Test Task", **fields: Any) -> TaskBuilder:
        builder = TaskBuilder().title(title)
        for name, value in fields.items():
            getattr(builder, name)(value)
        return builder

    return _make


@pytest.fixture
def recorder_factory() -> type[RecordingObserver]:
    """Expose RecordingObserver for tests that need several of them."""
    return RecordingObserver
