"""Project management CLI commands.

Commands for creating, listing and inspecting projects, including the
health report.
"""

from datetime import UTC, datetime
from typing import Optional

import typer
from rich.table import Table

from taskflow.domain.project import ProjectStatus
from taskflow.domain.shared import Priority
from taskflow.interfaces.cli.common import (
    console,
    format_date,
    format_delta,
    get_workspace,
    print_header,
    print_success,
    require_user,
    unwrap,
    user_option,
)
from taskflow.interfaces.display import round_half_up

app = typer.Typer(help="Project management commands")


# =============================================================================
# Commands
# =============================================================================


@app.command("list")
def list_projects(user: str = user_option) -> None:
    """List projects you own or belong to, with progress."""
    user_id = require_user(user)
    summaries = unwrap(get_workspace().list_project_summaries(user_id))

    if not summaries:
        typer.echo("No projects yet. Create one with: taskflow project create NAME")
        return

    table = Table("ID", "Name", "Status", "Priority", "Tasks", "Progress")
    for s in summaries:
        table.add_row(
            s.id,
            s.name,
            s.status.value,
            s.priority.value,
            f"{s.completed_tasks}/{s.task_count}",
            f"{s.progress_percent}%",
        )
    console.print(table)


@app.command("create")
def create(
    name: str = typer.Argument(..., help="Project name"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority"),
    status: ProjectStatus = typer.Option(ProjectStatus.PLANNING, "--status"),
    end_date: Optional[datetime] = typer.Option(
        None, "--end-date", help="Deadline (YYYY-MM-DD)", formats=["%Y-%m-%d"]
    ),
    user: str = user_option,
) -> None:
    """Create a new project.

    Example:
        taskflow project create "Website redesign" --priority HIGH --end-date 2026-12-31
    """
    user_id = require_user(user)
    project = unwrap(
        get_workspace().create_project(
            user_id,
            name,
            description=description,
            priority=priority,
            status=status,
            end_date=end_date.replace(tzinfo=UTC) if end_date else None,
        )
    )
    print_success(f"Created project: {project.name}")
    typer.echo(f"ID: {project.id}")


@app.command("show")
def show(
    project_id: str = typer.Argument(..., help="Project ID"),
    user: str = user_option,
) -> None:
    """Show project details, team and recent activity."""
    user_id = require_user(user)
    workspace = get_workspace()
    project = unwrap(workspace.get_project(project_id, user_id))
    activity = unwrap(workspace.recent_activity(project_id, user_id))

    print_header(project.name)
    if project.description:
        typer.echo(project.description)
        typer.echo("")
    typer.echo(f"Status:   {project.status.value}")
    typer.echo(f"Priority: {project.priority.value}")
    typer.echo(f"Dates:    {format_date(project.start_date)} -> {format_date(project.end_date)}")
    typer.echo(f"Owner:    {project.owner_id}")
    typer.echo(f"Team:     {project.team_size()} people")
    for member in project.members:
        typer.echo(f"  - {member.user_id} ({member.role.value})")

    if activity:
        typer.echo("")
        typer.echo("Recent activity:")
        for entry in activity:
            typer.echo(f"  {entry.created_at:%Y-%m-%d %H:%M}  {entry.description}")


@app.command("health")
def health(
    project_id: str = typer.Argument(..., help="Project ID"),
    user: str = user_option,
) -> None:
    """Show the project's health score and productivity metrics."""
    user_id = require_user(user)
    metrics = unwrap(get_workspace().project_health(project_id, user_id, datetime.now(UTC)))

    print_header("Project Health")
    typer.echo(f"Health score:     {round_half_up(metrics.health_score)}/100")
    typer.echo(f"Completion rate:  {round_half_up(metrics.completion_rate)}%")
    typer.echo(f"Overdue rate:     {round_half_up(metrics.overdue_rate)}%")
    typer.echo(f"Tasks:            {metrics.completed_tasks}/{metrics.total_tasks} done, {metrics.overdue_tasks} overdue")
    typer.echo(f"Recent activity:  {metrics.recent_activity_count}")
    if metrics.days_until_deadline is not None:
        typer.echo(f"Deadline in:      {metrics.days_until_deadline} days")
    typer.echo(
        f"Completed:        {metrics.completed_this_week} this week, "
        f"{metrics.completed_last_week} last week "
        f"({format_delta(metrics.weekly_productivity_delta)})"
    )

    d = metrics.task_distribution
    typer.echo("")
    typer.echo(
        f"TODO {d.todo} | IN_PROGRESS {d.in_progress} | IN_REVIEW {d.in_review} "
        f"| DONE {d.done} | CANCELLED {d.cancelled}"
    )
