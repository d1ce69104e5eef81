"""Two-phase task validation.

``UnvalidatedTask`` wraps any built task. The only way to obtain a
``ValidatedTask`` is ``UnvalidatedTask.validate()``; code that must only
run checked tasks takes a ``ValidatedTask`` parameter and a type checker
rejects an unvalidated one.

Example:
    >>> checked = UnvalidatedTask(task).validate()
    >>> checked.execute()
    'Executing validated task: Ship release'
"""

from __future__ import annotations

from typing import final

from taskforge.errors import TaskValidationError
from taskforge.models.task import Task, TaskPriority

_VALIDATE_KEY = object()


@final
class UnvalidatedTask:
    """A task that has not been checked yet."""

    __slots__ = ("_task",)

    def __init__(self, task: Task):
        self._task = task

    @property
    def task(self) -> Task:
        return self._task

    def validate(self) -> ValidatedTask:
        """Check the wrapped task against the semantic rules.

        Rules:
            - the title is non-empty after trimming whitespace
            - a critical task has an assignee

        Returns:
            A ValidatedTask carrying a copy of the task.

        Raises:
            TaskValidationError: If a rule is violated. This wrapper is
                left intact so the caller can fix the task and retry.
        """
        if not self._task.title.strip():
            raise TaskValidationError("Title cannot be empty")

        if self._task.priority == TaskPriority.critical and self._task.assignee is None:
            raise TaskValidationError("Critical tasks must have an assignee")

        return ValidatedTask(self._task.clone(), _key=_VALIDATE_KEY)

    def __repr__(self) -> str:
        return f"UnvalidatedTask(id={self._task.id}, title={self._task.title!r})"


@final
class ValidatedTask:
    """A task that passed ``UnvalidatedTask.validate()``.

    Holds its own copy of the task; ``task`` returns a further copy, so
    the checked state cannot be changed after validation.
    """

    __slots__ = ("_task",)

    def __init__(self, task: Task, *, _key: object = None):
        if _key is not _VALIDATE_KEY:
            raise TypeError("ValidatedTask can only be created by UnvalidatedTask.validate()")
        self._task = task

    @property
    def task(self) -> Task:
        return self._task.clone()

    def execute(self) -> str:
        return f"Executing validated task: {self._task.title}"

    def __repr__(self) -> str:
        return f"ValidatedTask(id={self._task.id}, title={self._task.title!r})"
