"""Observer bus hooks and the two built-in observers.

Observers are called synchronously by the TaskManager in registration
order and receive deep copies of the affected tasks. A hook that raises is
logged and skipped by the manager; it never aborts the operation.
"""

from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

import structlog
from pydantic import BaseModel, Field

from taskforge.models.task import Task, TaskPriority, TaskStatus

logger = structlog.get_logger(__name__)


@runtime_checkable
class TaskObserver(Protocol):
    """Protocol for task event subscribers."""

    def on_task_created(self, task: Task) -> None:
        ...

    def on_task_updated(self, old_task: Task, new_task: Task) -> None:
        ...

    def on_task_deleted(self, task: Task) -> None:
        ...


class TaskLogger:
    """Emits one structured log entry per task event."""

    def __init__(self) -> None:
        self.logger = logger.bind(component="TaskLogger")

    def on_task_created(self, task: Task) -> None:
        self.logger.info(
            "task_created",
            task_id=task.id,
            title=task.title,
            priority=task.priority.value,
        )

    def on_task_updated(self, old_task: Task, new_task: Task) -> None:
        self.logger.info(
            "task_updated",
            task_id=new_task.id,
            title=new_task.title,
            from_status=old_task.status.value,
            to_status=new_task.status.value,
        )

    def on_task_deleted(self, task: Task) -> None:
        self.logger.info("task_deleted", task_id=task.id, title=task.title)


NotificationKind = Literal["critical-created", "completed", "deleted"]


class Notification(BaseModel):
    """A notice raised by TaskNotifier.

    Attributes:
        kind: ``critical-created`` and ``completed`` are the alerts the
            notifier exists for. ``deleted`` is an extra notice on removal.
        task_id: Id of the task the notice is about
        message: Human-readable text
    """

    kind: NotificationKind = Field(..., description="critical-created, completed or deleted")
    task_id: int
    message: str


class TaskNotifier:
    """Raises alerts for critical tasks, completions and removals.

    Every notice is logged and also appended to ``notifications`` so
    callers can inspect what was sent.
    """

    def __init__(self) -> None:
        self.logger = logger.bind(component="TaskNotifier")
        self.notifications: list[Notification] = []

    def on_task_created(self, task: Task) -> None:
        if task.priority == TaskPriority.critical:
            self._notify(
                "critical-created",
                task,
                f"Critical task created: {task.title}! Immediate action required",
            )
            self.logger.warning("critical_task_created", task_id=task.id, title=task.title)

    def on_task_updated(self, old_task: Task, new_task: Task) -> None:
        if new_task.status == TaskStatus.done and old_task.status != TaskStatus.done:
            self._notify("completed", new_task, f"Task '{new_task.title}' completed")
            self.logger.info("task_completed", task_id=new_task.id, title=new_task.title)

    def on_task_deleted(self, task: Task) -> None:
        self._notify("deleted", task, f"Task '{task.title}' removed")
        self.logger.info("task_removed", task_id=task.id, title=task.title)

    def _notify(self, kind: NotificationKind, task: Task, message: str) -> None:
        self.notifications.append(Notification(kind=kind, task_id=task.id, message=message))
