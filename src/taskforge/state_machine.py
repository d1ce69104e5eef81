"""Task status state machine for Taskforge.

This module holds the authoritative table of legal status transitions.
Both ``TaskManager.update_status`` and ``UpdateTaskStatusCommand`` consult
``validate_transition``, so the rules live in exactly one place.
"""

from __future__ import annotations

from taskforge.errors import InvalidTransitionError
from taskforge.models.task import TaskStatus

# Authoritative state machine definition. Order within each tuple is the
# order reported by allowed_transitions().
VALID_TRANSITIONS: dict[TaskStatus, tuple[TaskStatus, ...]] = {
    TaskStatus.todo: (TaskStatus.in_progress, TaskStatus.cancelled),
    TaskStatus.in_progress: (TaskStatus.review, TaskStatus.done, TaskStatus.cancelled),
    TaskStatus.review: (TaskStatus.done, TaskStatus.in_progress),
    TaskStatus.done: (),  # Terminal state - no transitions allowed
    TaskStatus.cancelled: (),  # Terminal state - no transitions allowed
}


def validate_transition(current: TaskStatus, target: TaskStatus) -> bool:
    """Validate if a state transition is allowed.

    Args:
        current: Current task status.
        target: Target task status.

    Returns:
        True if the transition is valid according to VALID_TRANSITIONS.
    """
    return target in VALID_TRANSITIONS.get(current, ())


def allowed_transitions(current: TaskStatus) -> list[TaskStatus]:
    """List the statuses reachable in one step from ``current``."""
    return list(VALID_TRANSITIONS.get(current, ()))


def is_terminal(status: TaskStatus) -> bool:
    return not VALID_TRANSITIONS.get(status)


def ensure_transition(
    current: TaskStatus,
    target: TaskStatus,
    task_id: int | None = None,
) -> None:
    """Raise unless ``current -> target`` is a legal transition.

    Raises:
        InvalidTransitionError: If the transition is not valid.
    """
    if not validate_transition(current, target):
        raise InvalidTransitionError(current, target, task_id)
