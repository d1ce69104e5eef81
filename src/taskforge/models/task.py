"""Task model for Taskforge.

Defines the Task record and the TaskPriority and TaskStatus enums. A Task
is a plain value: the TaskManager owns the live copies and hands out
deep copies to observers, sort strategies and list queries.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class TaskPriority(enum.Enum):
    """Importance of a task.

    The value is the canonical name used in error messages and logs;
    ``display`` is the decorated form shown to users.
    """

    low = "Low"
    medium = "Medium"
    high = "High"
    critical = "Critical"

    @property
    def display(self) -> str:
        return _PRIORITY_DISPLAY[self]

    def __str__(self) -> str:
        return self.display


class TaskStatus(enum.Enum):
    """State machine for task lifecycle.

    States:
        todo: Task created, not yet started.
        in_progress: Someone is actively working on the task.
        review: Work complete, pending review.
        done: Task successfully completed (terminal).
        cancelled: Task abandoned (terminal).
    """

    todo = "Todo"
    in_progress = "InProgress"
    review = "Review"
    done = "Done"
    cancelled = "Cancelled"

    @property
    def display(self) -> str:
        return _STATUS_DISPLAY[self]

    def __str__(self) -> str:
        return self.display


_PRIORITY_DISPLAY: dict[TaskPriority, str] = {
    TaskPriority.low: "ต่ำ 🟢",
    TaskPriority.medium: "ปานกลาง 🟡",
    TaskPriority.high: "สูง 🟠",
    TaskPriority.critical: "วิกฤต 🔴",
}

_STATUS_DISPLAY: dict[TaskStatus, str] = {
    TaskStatus.todo: "รอดำเนินการ 📝",
    TaskStatus.in_progress: "กำลังทำ ⚡",
    TaskStatus.review: "รอตรวจสอบ 👀",
    TaskStatus.done: "เสร็จแล้ว ✅",
    TaskStatus.cancelled: "ยกเลิก ❌",
}


class Task(BaseModel):
    """A work item tracked by a TaskManager.

    Attributes:
        id: Non-zero identifier assigned by the manager.
        title: Short description of the task.
        description: Detailed description, possibly empty.
        priority: Importance of the task.
        status: Current state in the task lifecycle.
        assignee: Optional person responsible for the task.
        estimated_hours: Optional non-negative effort estimate.
        tags: Ordered labels; duplicates are kept.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(..., gt=0, frozen=True)
    title: str
    description: str = ""
    priority: TaskPriority = TaskPriority.medium
    status: TaskStatus = TaskStatus.todo
    assignee: str | None = None
    estimated_hours: int | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)

    def clone(self) -> Task:
        """Return an independent deep copy of this task."""
        return self.model_copy(deep=True)
