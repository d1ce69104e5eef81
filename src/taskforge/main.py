"""Main CLI entry point for Taskforge.

This module provides a Typer application that exercises the task core
end to end and prints the results with rich.

Usage:
    taskforge demo
    taskforge transitions
    taskforge --config taskforge.toml --verbose demo
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from taskforge.builder import TaskBuilder
from taskforge.commands import CommandHistory, CreateTaskCommand, UpdateTaskStatusCommand
from taskforge.config import TaskforgeConfig, load_config
from taskforge.errors import TaskforgeError
from taskforge.filters import TaskFilter
from taskforge.logging import bind_manager_context, get_logger, setup_logging
from taskforge.manager import TaskManager
from taskforge.models.task import Task, TaskPriority, TaskStatus
from taskforge.observers import TaskLogger, TaskNotifier
from taskforge.sorting import DurationSorter, PrioritySorter, StatusSorter
from taskforge.state_machine import allowed_transitions
from taskforge.validation import UnvalidatedTask

app = typer.Typer(
    name="taskforge",
    help="Taskforge: in-memory task management core",
    no_args_is_help=True,
)

console = Console()
logger = get_logger(__name__)


class AppContext:
    """Application context shared across CLI commands.

    Attributes:
        config: Loaded Taskforge configuration
    """

    def __init__(self, config: TaskforgeConfig):
        self.config = config

    def new_manager(self) -> TaskManager:
        return TaskManager(self.config.manager)


_app_context: AppContext | None = None


def get_app_context() -> AppContext:
    """Get the shared application context.

    Raises:
        RuntimeError: If context has not been initialized
    """
    if _app_context is None:
        raise RuntimeError("Application context not initialized. Call initialize_context first.")
    return _app_context


def initialize_context(config: TaskforgeConfig) -> AppContext:
    global _app_context
    _app_context = AppContext(config)
    return _app_context


def _task_table(title: str, tasks: list[Task]) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Priority")
    table.add_column("Status")
    table.add_column("Assignee")
    table.add_column("Hours", justify="right")
    table.add_column("Tags")

    for task in tasks:
        table.add_row(
            str(task.id),
            task.title,
            task.priority.display,
            task.status.display,
            task.assignee or "-",
            "?" if task.estimated_hours is None else str(task.estimated_hours),
            ", ".join(task.tags),
        )
    return table


def _demo_builders() -> list[TaskBuilder]:
    return [
        TaskBuilder()
        .title("Build user management API")
        .description("REST endpoints for user CRUD operations")
        .priority(TaskPriority.high)
        .assignee("Alice")
        .estimated_hours(8)
        .tags(["backend", "api", "user-management"]),
        TaskBuilder()
        .title("Fix dashboard chart rendering")
        .description("Charts on the dashboard show stale values")
        .priority(TaskPriority.medium)
        .assignee("Bob")
        .estimated_hours(4)
        .tag("frontend")
        .tag("bugfix"),
        TaskBuilder()
        .title("Security incident on production")
        .description("Server under attack, patch immediately")
        .priority(TaskPriority.critical)
        .assignee("Charlie")
        .estimated_hours(2)
        .tags(["security", "urgent", "hotfix"]),
    ]


@app.command()
def demo() -> None:
    """Walk through builder, strategies, state machine, undo/redo and validation."""
    ctx = get_app_context()
    manager = ctx.new_manager()
    bind_manager_context(manager.manager_id)
    notifier = TaskNotifier()
    manager.add_observer(TaskLogger())
    manager.add_observer(notifier)

    history = CommandHistory()
    try:
        for builder in _demo_builders():
            history.execute_command(CreateTaskCommand(builder), manager)

        for strategy in (PrioritySorter(), StatusSorter(), DurationSorter()):
            console.print(_task_table(strategy.name(), manager.sorted(strategy)))

        for task_id, status in (
            (1, TaskStatus.in_progress),
            (2, TaskStatus.in_progress),
            (1, TaskStatus.review),
            (1, TaskStatus.done),
        ):
            history.execute_command(UpdateTaskStatusCommand(task_id, status), manager)
    except TaskforgeError as e:
        console.print(f"[red]Demo failed:[/red] {e}")
        raise typer.Exit(code=1)

    # Undo/redo may legitimately fail on a non-reversible transition
    for step in (history.undo, history.undo, history.redo):
        try:
            console.print(f"[green]{step(manager)}[/green]")
        except TaskforgeError as e:
            console.print(f"[yellow]{step.__name__} failed:[/yellow] {e}")

    console.print(_task_table("After undo/redo", manager.list_all()))

    sample = (
        TaskBuilder()
        .id(999)
        .title("Phantom type check")
        .priority(TaskPriority.low)
        .assignee("Tester")
        .build()
    )
    try:
        console.print(UnvalidatedTask(sample).validate().execute())
    except TaskforgeError as e:
        console.print(f"[red]Validation failed:[/red] {e}")

    high = list(TaskFilter(manager.list_all()).with_priority(TaskPriority.high))
    console.print(_task_table("High priority", high))

    stats = manager.statistics()
    console.print(
        Panel(
            f"[bold]Total:[/bold] {stats['total']}\n"
            f"[bold]Done:[/bold] {stats['by_status'][TaskStatus.done.value]}\n"
            f"[bold]In progress:[/bold] {stats['by_status'][TaskStatus.in_progress.value]}\n"
            f"[bold]Completion:[/bold] {stats['completion_ratio'] * 100:.1f}%\n"
            f"[bold]Notifications:[/bold] {len(notifier.notifications)}",
            title="Summary",
            border_style="green",
        )
    )


@app.command()
def transitions() -> None:
    """Print the task status transition table."""
    table = Table(title="Status transitions")
    table.add_column("From", style="cyan")
    table.add_column("Allowed next states")

    for status in TaskStatus:
        targets = allowed_transitions(status)
        table.add_row(
            status.value,
            ", ".join(t.value for t in targets) if targets else "[dim](terminal)[/dim]",
        )
    console.print(table)


@app.callback()
def main_callback(
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (TOML format)",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options and initialize application context.

    Args:
        config_path: Optional path to TOML configuration file
        verbose: Enable debug-level logging
    """
    try:
        config = load_config(config_path)
    except Exception as e:
        console.print(f"[red]Error loading configuration:[/red] {e}")
        raise typer.Exit(code=1)

    if verbose:
        config.logging.level = "DEBUG"
    setup_logging(config.logging)

    initialize_context(config)
    logger.debug("cli_initialized", config_path=str(config_path) if config_path else None)


if __name__ == "__main__":
    app()
