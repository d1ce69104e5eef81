"""Interchangeable orderings over task collections.

A sort strategy is any object with ``sort(tasks)`` (in-place reorder) and
``name()``. The manager hands strategies a snapshot ordered by id, and
``list.sort`` is stable, so ties always fall back to ascending id.
"""

from __future__ import annotations

import math
from typing import Protocol, runtime_checkable

from taskforge.models.task import Task, TaskPriority, TaskStatus

PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.critical: 0,
    TaskPriority.high: 1,
    TaskPriority.medium: 2,
    TaskPriority.low: 3,
}

STATUS_RANK: dict[TaskStatus, int] = {
    TaskStatus.in_progress: 0,
    TaskStatus.review: 1,
    TaskStatus.todo: 2,
    TaskStatus.done: 3,
    TaskStatus.cancelled: 4,
}


@runtime_checkable
class SortStrategy(Protocol):
    """Protocol for task ordering strategies."""

    def sort(self, tasks: list[Task]) -> None:
        """Reorder ``tasks`` in place."""
        ...

    def name(self) -> str:
        """Return a stable human-readable label."""
        ...


class PrioritySorter:
    """Most important first: critical, high, medium, low."""

    def sort(self, tasks: list[Task]) -> None:
        tasks.sort(key=lambda t: PRIORITY_RANK[t.priority])

    def name(self) -> str:
        return "เรียงตามความสำคัญ"


class StatusSorter:
    """Active work first: in progress, review, todo, done, cancelled."""

    def sort(self, tasks: list[Task]) -> None:
        tasks.sort(key=lambda t: STATUS_RANK[t.status])

    def name(self) -> str:
        return "เรียงตามสถานะ"


class DurationSorter:
    """Shortest estimate first; tasks without an estimate go last."""

    def sort(self, tasks: list[Task]) -> None:
        tasks.sort(
            key=lambda t: math.inf if t.estimated_hours is None else t.estimated_hours
        )

    def name(self) -> str:
        return "เรียงตามระยะเวลา"
