"""Task management CLI commands.

Commands for listing, adding and moving tasks through their workflow.
"""

from datetime import UTC, datetime
from typing import Optional

import typer
from rich.table import Table

from taskflow.domain.analytics import TaskSnapshot, is_overdue
from taskflow.domain.shared import Priority
from taskflow.domain.task import TaskStatus
from taskflow.interfaces.cli.common import (
    console,
    format_date,
    get_workspace,
    print_success,
    require_user,
    unwrap,
    user_option,
)

app = typer.Typer(help="Task management commands")


@app.command("list")
def list_tasks(
    project: Optional[str] = typer.Option(None, "--project", "-p", help="Only this project"),
    status: Optional[TaskStatus] = typer.Option(None, "--status", "-s"),
    mine: bool = typer.Option(False, "--mine", help="Only tasks assigned to you"),
    user: str = user_option,
) -> None:
    """List tasks, highest priority first. Overdue due dates are marked with '!'."""
    user_id = require_user(user)
    tasks = unwrap(
        get_workspace().list_tasks(
            user_id,
            project_id=project,
            assignee_id=user_id if mine else None,
            status=status,
        )
    )

    if not tasks:
        typer.echo("No tasks found.")
        return

    now = datetime.now(UTC)
    table = Table("ID", "Title", "Status", "Priority", "Due")
    for task in tasks:
        due = format_date(task.due_date)
        if is_overdue(TaskSnapshot.from_task(task), now):
            due = f"[red]{due} ![/red]"
        table.add_row(task.id, task.title, task.status.value, task.priority.value, due)
    console.print(table)


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title"),
    project: str = typer.Option(..., "--project", "-p", help="Project ID"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority"),
    due: Optional[datetime] = typer.Option(
        None, "--due", help="Due date (YYYY-MM-DD)", formats=["%Y-%m-%d"]
    ),
    hours: Optional[float] = typer.Option(None, "--hours", help="Estimated hours"),
    assignee: Optional[str] = typer.Option(None, "--assignee", "-a", help="Assignee user ID"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    user: str = user_option,
) -> None:
    """Add a task to a project.

    Example:
        taskflow task add "Write launch post" -p <project-id> --due 2026-11-01 -t marketing
    """
    user_id = require_user(user)
    task = unwrap(
        get_workspace().create_task(
            user_id,
            project,
            title,
            priority=priority,
            due_date=due.replace(tzinfo=UTC) if due else None,
            estimated_hours=hours,
            assignee_id=assignee,
            tags=tag or [],
        )
    )
    print_success(f"Added task: {task.title}")
    typer.echo(f"ID: {task.id}")


@app.command("status")
def set_status(
    task_id: str = typer.Argument(..., help="Task ID"),
    status: TaskStatus = typer.Argument(..., help="New status"),
    hours: Optional[float] = typer.Option(None, "--hours", help="Actual hours spent"),
    user: str = user_option,
) -> None:
    """Move a task to a new status.

    Example:
        taskflow task status <task-id> DONE --hours 3.5
    """
    user_id = require_user(user)
    changes: dict = {"status": status}
    if hours is not None:
        changes["actual_hours"] = hours

    task = unwrap(get_workspace().update_task(task_id, user_id, changes))
    print_success(f"{task.title}: {task.status.value}")
