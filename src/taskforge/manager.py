"""Task manager: the single writer for a set of tasks.

The manager assigns ids, enforces the status state machine, and fans every
create, update and delete out to its observers in registration order.
Everything it hands out (query results, sorted snapshots, observer
payloads) is a deep copy; mutating one never touches manager state.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from taskforge.builder import TaskBuilder
from taskforge.config import ManagerConfig
from taskforge.errors import ReentrantCallError, TaskNotFoundError
from taskforge.models.task import Task, TaskStatus
from taskforge.observers import TaskObserver
from taskforge.sorting import SortStrategy
from taskforge.state_machine import ensure_transition

logger = structlog.get_logger(__name__)


class TaskManager:
    """Owns tasks, assigns ids, and mediates every mutation.

    Attributes:
        config: Manager behaviour settings.
        next_id: The id the next created task will receive. Starts at 1
            and only ever grows, even across deletes.
        manager_id: Short random tag identifying this manager in logs.
    """

    def __init__(self, config: ManagerConfig | None = None):
        self.config = config or ManagerConfig()
        self.manager_id = uuid.uuid4().hex[:8]
        self.next_id = 1
        self._tasks: dict[int, Task] = {}
        self._observers: list[TaskObserver] = []
        self._notifying = False
        self.logger = logger.bind(component="TaskManager", manager_id=self.manager_id)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, observer: TaskObserver) -> None:
        """Register ``observer`` for every subsequent event.

        Raises:
            TypeError: If ``observer`` lacks one of the three hooks.
        """
        if not isinstance(observer, TaskObserver):
            raise TypeError(f"{type(observer).__name__} does not implement TaskObserver")
        self._observers.append(observer)
        self.logger.debug("observer_added", observer=type(observer).__name__)

    @property
    def observers(self) -> list[TaskObserver]:
        return list(self._observers)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, builder: TaskBuilder) -> int:
        """Create a task from a builder and return its new id.

        The builder is copied before the id is injected, so the caller's
        builder is left untouched and can be reused.

        Raises:
            TaskBuildError: If the builder is missing a title.
            ReentrantCallError: If called from inside an observer hook.
        """
        self._guard("create")
        task_id = self.next_id
        self.next_id += 1

        task = builder.copy().id(task_id).build()
        self._tasks[task_id] = task

        self.logger.debug("task_stored", task_id=task_id, title=task.title)
        self._notify("on_task_created", task.clone())
        return task_id

    def update_status(self, task_id: int, new_status: TaskStatus) -> None:
        """Move a task to ``new_status`` if the state machine allows it.

        Raises:
            TaskNotFoundError: If no task has ``task_id``.
            InvalidTransitionError: If the transition is not valid.
            ReentrantCallError: If called from inside an observer hook.
        """
        self._guard("update_status")
        task = self._require(task_id)
        ensure_transition(task.status, new_status, task_id)
        self._apply_status(task, new_status)

    def revert_status(self, task_id: int, previous_status: TaskStatus) -> None:
        """Restore a status recorded before an earlier update.

        With ``privileged_undo`` disabled this is the same as
        ``update_status``. With it enabled the transition table is not
        consulted, so terminal and backward moves are allowed.
        """
        if not self.config.privileged_undo:
            self.update_status(task_id, previous_status)
            return

        self._guard("revert_status")
        task = self._require(task_id)
        self._apply_status(task, previous_status)

    def delete(self, task_id: int) -> None:
        """Remove a task.

        Raises:
            TaskNotFoundError: If no task has ``task_id``.
            ReentrantCallError: If called from inside an observer hook.
        """
        self._guard("delete")
        task = self._tasks.pop(task_id, None)
        if task is None:
            raise TaskNotFoundError(task_id)

        self.logger.debug("task_removed", task_id=task_id)
        self._notify("on_task_deleted", task)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return task.clone() if task is not None else None

    def list_all(self) -> list[Task]:
        """Return a snapshot of every task, ordered by id."""
        return [self._tasks[k].clone() for k in sorted(self._tasks)]

    def list_by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self.list_all() if t.status == status]

    def list_by_assignee(self, assignee: str) -> list[Task]:
        return [t for t in self.list_all() if t.assignee == assignee]

    def sorted(self, strategy: SortStrategy) -> list[Task]:
        """Return a snapshot ordered by ``strategy``.

        The snapshot starts in id order, so stable strategies break ties
        by ascending id.
        """
        tasks = self.list_all()
        strategy.sort(tasks)
        return tasks

    def statistics(self) -> dict[str, Any]:
        """Summarise the current tasks.

        Returns:
            Dictionary with ``total``, ``by_status`` (canonical status name
            to count, every status present) and ``completion_ratio``.
        """
        by_status = {status.value: 0 for status in TaskStatus}
        for task in self._tasks.values():
            by_status[task.status.value] += 1

        total = len(self._tasks)
        done = by_status[TaskStatus.done.value]
        return {
            "total": total,
            "by_status": by_status,
            "completion_ratio": done / total if total else 0.0,
        }

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, task_id: int) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _apply_status(self, task: Task, new_status: TaskStatus) -> None:
        old_task = task.clone()
        task.status = new_status

        self.logger.info(
            "task_transition",
            task_id=task.id,
            from_status=old_task.status.value,
            to_status=new_status.value,
        )
        self._notify("on_task_updated", old_task, task.clone())

    def _guard(self, operation: str) -> None:
        if self._notifying and self.config.detect_reentrancy:
            raise ReentrantCallError(operation)

    def _notify(self, hook: str, *tasks: Task) -> None:
        """Invoke ``hook`` on every observer, isolating observer failures.

        Each observer gets its own copies so one observer cannot alter
        what the next one sees.
        """
        with self._notifying_scope():
            for observer in self._observers:
                try:
                    callback: Callable[..., None] = getattr(observer, hook)
                    callback(*(t.clone() for t in tasks))
                except Exception:
                    self.logger.exception(
                        "observer_failed",
                        observer=type(observer).__name__,
                        hook=hook,
                    )

    @contextmanager
    def _notifying_scope(self) -> Iterator[None]:
        previous = self._notifying
        self._notifying = True
        try:
            yield
        finally:
            self._notifying = previous
