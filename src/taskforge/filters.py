"""Lazy filtering over task iterables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from taskforge.models.task import Task, TaskPriority, TaskStatus


class TaskFilter:
    """Iterator yielding tasks that match every configured criterion.

    Example:
        >>> urgent = TaskFilter(manager.list_all()).with_priority(TaskPriority.high)
        >>> [t.title for t in urgent]
    """

    def __init__(self, tasks: Iterable[Task]):
        self._tasks = iter(tasks)
        self._priority: TaskPriority | None = None
        self._status: TaskStatus | None = None

    def with_priority(self, priority: TaskPriority) -> TaskFilter:
        self._priority = priority
        return self

    def with_status(self, status: TaskStatus) -> TaskFilter:
        self._status = status
        return self

    def __iter__(self) -> Iterator[Task]:
        return self

    def __next__(self) -> Task:
        for task in self._tasks:
            if self._priority is not None and task.priority != self._priority:
                continue
            if self._status is not None and task.status != self._status:
                continue
            return task
        raise StopIteration
