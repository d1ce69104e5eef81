"""Reversible manager operations and the undo/redo history.

A command captures whatever pre-state it needs during ``execute`` so that
``undo`` can reverse it later. CommandHistory keeps a linear log with a
cursor pointing at the most recently executed command; executing a new
command while the cursor is behind the tail discards the redoable tail.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from taskforge.builder import TaskBuilder
from taskforge.errors import NothingToRedoError, NothingToUndoError, TaskNotFoundError
from taskforge.logging import correlation_scope
from taskforge.manager import TaskManager
from taskforge.models.task import TaskStatus

logger = structlog.get_logger(__name__)


@runtime_checkable
class Command(Protocol):
    """Protocol for reversible operations against a TaskManager."""

    def execute(self, manager: TaskManager) -> None:
        ...

    def undo(self, manager: TaskManager) -> None:
        ...

    def description(self) -> str:
        ...


class CreateTaskCommand:
    """Create a task from a builder template.

    Every execute creates a brand-new task from a copy of the template, so
    redo after undo yields a fresh id.
    """

    def __init__(self, builder: TaskBuilder):
        self._template = builder.copy()
        self.created_id: int | None = None

    def execute(self, manager: TaskManager) -> None:
        self.created_id = manager.create(self._template.copy())

    def undo(self, manager: TaskManager) -> None:
        if self.created_id is None:
            raise NothingToUndoError()
        manager.delete(self.created_id)
        self.created_id = None

    def description(self) -> str:
        return "Create Task"


class UpdateTaskStatusCommand:
    """Move one task to a new status, remembering the status it left."""

    def __init__(self, task_id: int, new_status: TaskStatus):
        self.task_id = task_id
        self.new_status = new_status
        self.previous_status: TaskStatus | None = None

    def execute(self, manager: TaskManager) -> None:
        task = manager.get(self.task_id)
        if task is None:
            raise TaskNotFoundError(self.task_id)
        manager.update_status(self.task_id, self.new_status)
        self.previous_status = task.status

    def undo(self, manager: TaskManager) -> None:
        if self.previous_status is None:
            raise NothingToUndoError()
        manager.revert_status(self.task_id, self.previous_status)
        self.previous_status = None

    def description(self) -> str:
        return f"Update Task {self.task_id} Status"


class CommandHistory:
    """Linear undo/redo log over executed commands.

    ``cursor`` is the index of the most recently executed command, or None
    when nothing is executed. Commands after the cursor are in their
    pre-execute state and can be redone until a new command is executed.
    Each execute, undo and redo runs under its own correlation id, which
    tags every event the command causes.
    """

    def __init__(self) -> None:
        self._commands: list[Command] = []
        self._cursor: int | None = None
        self.logger = logger.bind(component="CommandHistory")

    @property
    def cursor(self) -> int | None:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor is not None

    @property
    def can_redo(self) -> bool:
        return self._next_index() < len(self._commands)

    def execute_command(self, command: Command, manager: TaskManager) -> None:
        """Execute ``command`` and record it.

        If the command raises, the log and cursor are left unchanged and
        the error propagates.
        """
        with correlation_scope() as cid:
            command.execute(manager)

            # Drop the redoable tail before appending
            del self._commands[self._next_index():]
            self._commands.append(command)
            self._cursor = len(self._commands) - 1

            self.logger.info(
                "command_executed",
                command=command.description(),
                cursor=self._cursor,
                correlation_id=cid,
            )

    def undo(self, manager: TaskManager) -> str:
        """Undo the command at the cursor and step the cursor back.

        Returns:
            A label naming the undone command.

        Raises:
            NothingToUndoError: If nothing has been executed.
        """
        if self._cursor is None:
            raise NothingToUndoError()

        command = self._commands[self._cursor]
        description = command.description()
        with correlation_scope() as cid:
            command.undo(manager)

            self._cursor = self._cursor - 1 if self._cursor > 0 else None
            self.logger.info(
                "command_undone", command=description, cursor=self._cursor, correlation_id=cid
            )
        return f"Undid: {description}"

    def redo(self, manager: TaskManager) -> str:
        """Re-execute the command after the cursor.

        Returns:
            A label naming the redone command.

        Raises:
            NothingToRedoError: If the cursor is already at the tail.
        """
        next_index = self._next_index()
        if next_index >= len(self._commands):
            raise NothingToRedoError()

        command = self._commands[next_index]
        description = command.description()
        with correlation_scope() as cid:
            command.execute(manager)

            self._cursor = next_index
            self.logger.info(
                "command_redone", command=description, cursor=self._cursor, correlation_id=cid
            )
        return f"Redid: {description}"

    def history(self) -> list[str]:
        return [command.description() for command in self._commands]

    def __len__(self) -> int:
        return len(self._commands)

    def _next_index(self) -> int:
        return 0 if self._cursor is None else self._cursor + 1
