"""Shared utilities for TaskFlow CLI commands.

This module provides common utilities used across CLI commands:
- Current-user resolution (--user option / TASKFLOW_USER)
- Workspace construction from the global config
- Formatted output helpers (error, success, info)
- Result unwrapping that exits on failure
"""

from datetime import datetime
from typing import Any

import typer
from rich.console import Console

from taskflow.application import Workspace
from taskflow.domain.shared import Err, Result
from taskflow.global_config import get_global_config
from taskflow.interfaces.display import round_half_up

console = Console()

# Reusable user option for CLI commands
# Usage: def my_command(user: str = user_option) -> None:
user_option = typer.Option(
    None,
    "--user", "-u",
    help="Acting user ID (or set TASKFLOW_USER env var)",
    envvar="TASKFLOW_USER",
)


def get_workspace() -> Workspace:
    """Workspace over the configured data directory."""
    config = get_global_config()
    return Workspace(config.data_dir, config.recent_activity_limit)


def require_user(user: str | None) -> str:
    """Return the acting user ID, exiting with help text if missing.

    Raises:
        typer.Exit: If no user was given.
    """
    if user:
        return user

    print_error("No user specified.")
    typer.echo("")
    typer.echo("Specify a user using one of:")
    typer.echo("  1. Use -u/--user option: taskflow project list -u <user-id>")
    typer.echo("  2. Set TASKFLOW_USER env var: export TASKFLOW_USER=<user-id>")
    typer.echo("")
    typer.echo("Create a user with: taskflow user add NAME EMAIL")
    raise typer.Exit(1)


def unwrap(result: Result[Any, Any]) -> Any:
    """Return the Ok value, or print the error and exit.

    Raises:
        typer.Exit: If the result is an Err.
    """
    if isinstance(result, Err):
        print_error(result.error.message)
        raise typer.Exit(1)
    return result.value


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators.

    Args:
        title: Header title text
        width: Width of the separator lines
    """
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def format_date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d") if value is not None else "-"


def format_delta(delta: Any) -> str:
    """Human-readable weekly productivity change."""
    if delta.kind == "no-baseline":
        return "no baseline"
    sign = {"positive": "+", "negative": "-", "neutral": ""}[delta.kind]
    return f"{sign}{round_half_up(delta.percent_magnitude)}%"
