"""Fluent construction of Task records.

Example:
    >>> task = (
    ...     TaskBuilder()
    ...     .id(1)
    ...     .title("Ship release")
    ...     .priority(TaskPriority.high)
    ...     .tags(["release", "ops"])
    ...     .build()
    ... )
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from taskforge.errors import TaskBuildError
from taskforge.models.task import Task, TaskPriority, TaskStatus


class TaskBuilder:
    """Stepwise Task construction with defaults.

    Every setter returns the builder so calls can be chained. Title and id
    are required at build time; everything else has a default (empty
    description, medium priority, todo status, no tags).
    """

    def __init__(self) -> None:
        self._id: int | None = None
        self._title: str | None = None
        self._description: str | None = None
        self._priority = TaskPriority.medium
        self._status = TaskStatus.todo
        self._assignee: str | None = None
        self._estimated_hours: int | None = None
        self._tags: list[str] = []

    def id(self, task_id: int) -> TaskBuilder:
        self._id = task_id
        return self

    def title(self, title: Any) -> TaskBuilder:
        self._title = str(title)
        return self

    def description(self, description: Any) -> TaskBuilder:
        self._description = str(description)
        return self

    def priority(self, priority: TaskPriority) -> TaskBuilder:
        self._priority = priority
        return self

    def status(self, status: TaskStatus) -> TaskBuilder:
        self._status = status
        return self

    def assignee(self, assignee: Any) -> TaskBuilder:
        self._assignee = str(assignee)
        return self

    def estimated_hours(self, hours: int) -> TaskBuilder:
        self._estimated_hours = hours
        return self

    def tag(self, tag: Any) -> TaskBuilder:
        self._tags.append(str(tag))
        return self

    def tags(self, tags: Iterable[Any]) -> TaskBuilder:
        self._tags.extend(str(t) for t in tags)
        return self

    def copy(self) -> TaskBuilder:
        """Return an independent copy of this builder."""
        return copy.deepcopy(self)

    def build(self) -> Task:
        """Build the Task.

        Returns:
            A fully populated Task.

        Raises:
            TaskBuildError: If the id or title is missing, or a field value
                is out of range.
        """
        if self._id is None:
            raise TaskBuildError("ID is required", field="id")
        if self._title is None:
            raise TaskBuildError("Title is required", field="title")

        try:
            return Task(
                id=self._id,
                title=self._title,
                description=self._description or "",
                priority=self._priority,
                status=self._status,
                assignee=self._assignee,
                estimated_hours=self._estimated_hours,
                tags=list(self._tags),
            )
        except ValidationError as e:
            first = e.errors()[0]
            field = str(first["loc"][0]) if first["loc"] else None
            raise TaskBuildError(f"Invalid {field}: {first['msg']}", field=field) from e

    def __repr__(self) -> str:
        return (
            f"TaskBuilder(id={self._id!r}, title={self._title!r}, "
            f"priority={self._priority.value}, status={self._status.value})"
        )
