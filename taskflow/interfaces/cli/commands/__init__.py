"""CLI command groups for TaskFlow.

Command groups:
- user: User registration and listing
- project: Project management and health
- task: Task listing, creation and status changes

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from taskflow.interfaces.cli.commands import project, task, user

__all__ = ["user", "project", "task"]
