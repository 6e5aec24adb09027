"""CLI interface for TaskFlow using Typer.

Usage:
    taskflow serve                    # Run the HTTP API
    taskflow user add NAME EMAIL      # Register a user
    taskflow project list             # Projects with progress
    taskflow project health ID        # Health score and weekly productivity
    taskflow task list --mine         # Your tasks, highest priority first
    taskflow analytics                # Cross-project dashboard

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (user, project, task)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
from datetime import UTC, datetime
from typing import Optional

import typer

from taskflow import __version__
from taskflow.interfaces.cli.commands import project, task, user
from taskflow.interfaces.cli.common import (
    format_delta,
    get_workspace,
    print_header,
    require_user,
    unwrap,
    user_option,
)
from taskflow.interfaces.display import round_half_up

app = typer.Typer(
    name="taskflow",
    help="Project and task dashboard with health analytics",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"taskflow version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """TaskFlow - projects, tasks and health analytics.

    Track project progress, overdue work and week-over-week productivity
    from the terminal or over HTTP.
    """
    pass


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(user.app, name="user")
app.add_typer(project.app, name="project")
app.add_typer(task.app, name="task")


# =============================================================================
# Top-Level Commands
# =============================================================================


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
    log_level: str = typer.Option("info", "--log-level", help="Logging level"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn
    from rich.logging import RichHandler

    from taskflow.interfaces.api import create_app

    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    uvicorn.run(create_app(), host=host, port=port, log_level=log_level.lower())


@app.command("analytics")
def analytics(user: str = user_option) -> None:
    """Show dashboard analytics across all your projects."""
    user_id = require_user(user)
    workspace = get_workspace()
    now = datetime.now(UTC)
    summary = unwrap(workspace.dashboard_summary(user_id, now))
    stats = unwrap(workspace.dashboard_analytics(user_id, now))

    print_header("Dashboard")
    typer.echo(
        f"Projects: {summary.project_count} "
        f"({stats.projects.active} active, {stats.projects.completed} completed, "
        f"{stats.projects.on_hold} on hold)"
    )
    typer.echo(
        f"Tasks:    {summary.active_task_count} active, "
        f"{summary.completed_task_count} done, {summary.overdue_task_count} overdue"
    )
    typer.echo(
        f"This week: {stats.completed_this_week} completed, "
        f"last week: {stats.completed_last_week} "
        f"({format_delta(stats.weekly_productivity_delta)})"
    )
    typer.echo(f"On-time completion: {round_half_up(stats.on_time_completion_rate)}%")
    typer.echo(
        f"Hours logged: {stats.total_hours_logged:.1f} "
        f"(avg {stats.average_hours_per_task:.1f} per task)"
    )


__all__ = ["app"]
