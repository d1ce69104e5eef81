"""Taskforge - In-memory task management core.

This package provides a task model with builder construction, a status
state machine, pluggable sort strategies, an observer notification bus,
undo/redo command history, and a two-phase validation pipeline.
"""

from taskforge.builder import TaskBuilder
from taskforge.commands import (
    Command,
    CommandHistory,
    CreateTaskCommand,
    UpdateTaskStatusCommand,
)
from taskforge.errors import (
    HistoryError,
    InvalidTransitionError,
    NothingToRedoError,
    NothingToUndoError,
    ReentrantCallError,
    TaskBuildError,
    TaskforgeError,
    TaskNotFoundError,
    TaskValidationError,
)
from taskforge.filters import TaskFilter
from taskforge.manager import TaskManager
from taskforge.models.task import Task, TaskPriority, TaskStatus
from taskforge.observers import TaskLogger, TaskNotifier, TaskObserver
from taskforge.sorting import DurationSorter, PrioritySorter, SortStrategy, StatusSorter
from taskforge.validation import UnvalidatedTask, ValidatedTask

__version__ = "0.1.0"

__all__ = [
    "Command",
    "CommandHistory",
    "CreateTaskCommand",
    "DurationSorter",
    "HistoryError",
    "InvalidTransitionError",
    "NothingToRedoError",
    "NothingToUndoError",
    "PrioritySorter",
    "ReentrantCallError",
    "SortStrategy",
    "StatusSorter",
    "Task",
    "TaskBuildError",
    "TaskBuilder",
    "TaskFilter",
    "TaskLogger",
    "TaskManager",
    "TaskNotFoundError",
    "TaskNotifier",
    "TaskObserver",
    "TaskPriority",
    "TaskStatus",
    "TaskValidationError",
    "TaskforgeError",
    "UnvalidatedTask",
    "UpdateTaskStatusCommand",
    "ValidatedTask",
]
