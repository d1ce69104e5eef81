"""Exception hierarchy for Taskforge.

Every fallible operation raises a subclass of TaskforgeError whose message
is a short, stable, human-readable string. Callers may match on the
exception type or on ``str(error)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskforge.models.task import TaskStatus


class TaskforgeError(Exception):
    """Base class for all Taskforge errors."""


class TaskBuildError(TaskforgeError, ValueError):
    """Raised when a TaskBuilder is missing a required field.

    Attributes:
        field: Name of the offending field, if known.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class TaskNotFoundError(TaskforgeError, LookupError):
    """Raised when an operation references an id the manager does not hold.

    Attributes:
        task_id: The id that was looked up.
    """

    def __init__(self, task_id: int | None = None):
        self.task_id = task_id
        super().__init__("Task not found")


class InvalidTransitionError(TaskforgeError):
    """Raised when an invalid status transition is attempted.

    Attributes:
        current: The current task status.
        target: The attempted target status.
        task_id: The ID of the task that failed to transition.
    """

    def __init__(
        self,
        current: TaskStatus,
        target: TaskStatus,
        task_id: int | None = None,
    ):
        self.current = current
        self.target = target
        self.task_id = task_id
        super().__init__(f"Cannot transition from {current.value} to {target.value}")


class HistoryError(TaskforgeError):
    """Raised when the command history cannot move its cursor."""


class NothingToUndoError(HistoryError):
    def __init__(self) -> None:
        super().__init__("Nothing to undo")


class NothingToRedoError(HistoryError):
    def __init__(self) -> None:
        super().__init__("Nothing to redo")


class TaskValidationError(TaskforgeError, ValueError):
    """Raised when an unvalidated task fails a semantic rule."""


class ReentrantCallError(TaskforgeError, RuntimeError):
    """Raised when an observer calls a mutating manager operation mid fan-out.

    Attributes:
        operation: Name of the rejected manager operation.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Re-entrant call to {operation} during observer notification")
