"""Unit tests for the built-in observers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from taskforge.models.task import Task, TaskPriority, TaskStatus
from taskforge.observers import Notification, TaskLogger, TaskNotifier, TaskObserver


@pytest.fixture
def critical_task() -> Task:
    return Task(id=1, title="Outage", priority=TaskPriority.critical, assignee="Ops")


class TestTaskLogger:
    """Test that TaskLogger emits one structured event per hook."""

    def test_is_observer(self) -> None:
        assert isinstance(TaskLogger(), TaskObserver)

    def test_created(self, critical_task: Task) -> None:
        with capture_logs() as logs:
            TaskLogger().on_task_created(critical_task)

        assert logs == [
            {
                "event": "task_created",
                "log_level": "info",
                "component": "TaskLogger",
                "task_id": 1,
                "title": "Outage",
                "priority": "Critical",
            }
        ]

    def test_updated(self, critical_task: Task) -> None:
        new_task = critical_task.clone()
        new_task.status = TaskStatus.in_progress

        with capture_logs() as logs:
            TaskLogger().on_task_updated(critical_task, new_task)

        assert logs[0]["event"] == "task_updated"
        assert logs[0]["from_status"] == "Todo"
        assert logs[0]["to_status"] == "InProgress"

    def test_deleted(self, critical_task: Task) -> None:
        with capture_logs() as logs:
            TaskLogger().on_task_deleted(critical_task)

        assert logs[0]["event"] == "task_deleted"
        assert logs[0]["task_id"] == 1


class TestTaskNotifier:
    """Test the conditional alerts raised by TaskNotifier."""

    def test_critical_created_alert(self, critical_task: Task) -> None:
        notifier = TaskNotifier()
        with capture_logs() as logs:
            notifier.on_task_created(critical_task)

        assert [n.kind for n in notifier.notifications] == ["critical-created"]
        assert "Outage" in notifier.notifications[0].message
        assert logs[0]["event"] == "critical_task_created"
        assert logs[0]["log_level"] == "warning"

    @pytest.mark.parametrize(
        "priority", [TaskPriority.low, TaskPriority.medium, TaskPriority.high]
    )
    def test_non_critical_created_is_silent(self, priority: TaskPriority) -> None:
        notifier = TaskNotifier()
        with capture_logs() as logs:
            notifier.on_task_created(Task(id=2, title="Routine", priority=priority))

        assert notifier.notifications == []
        assert logs == []

    def test_completed_notification(self) -> None:
        old = Task(id=3, title="Ship", status=TaskStatus.review)
        new = old.clone()
        new.status = TaskStatus.done

        notifier = TaskNotifier()
        notifier.on_task_updated(old, new)

        assert notifier.notifications == [
            Notification(kind="completed", task_id=3, message="Task 'Ship' completed")
        ]

    def test_other_updates_are_silent(self) -> None:
        old = Task(id=3, title="Ship")
        new = old.clone()
        new.status = TaskStatus.in_progress

        notifier = TaskNotifier()
        notifier.on_task_updated(old, new)
        assert notifier.notifications == []

    def test_deleted_notice(self, critical_task: Task) -> None:
        notifier = TaskNotifier()
        notifier.on_task_deleted(critical_task)
        assert notifier.notifications[0].kind == "deleted"

    @pytest.mark.parametrize("kind", ["critical_created", "critical", ""])
    def test_notification_rejects_unknown_kind(self, kind: str) -> None:
        with pytest.raises(ValidationError):
            Notification(kind=kind, task_id=1, message="x")
