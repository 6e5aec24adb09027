"""User management CLI commands."""

import typer
from rich.table import Table

from taskflow.domain.shared import Err
from taskflow.interfaces.cli.common import (
    console,
    get_workspace,
    print_error,
    print_info,
    print_success,
    unwrap,
)

app = typer.Typer(help="User management commands")


@app.command("add")
def add(
    name: str = typer.Argument(..., help="Display name"),
    email: str = typer.Argument(..., help="Email address (unique)"),
) -> None:
    """Register a user and print its ID.

    Example:
        taskflow user add "Ada Lovelace" ada@example.com
    """
    user = unwrap(get_workspace().register_user(name, email))
    print_success(f"Created user {user.name} <{user.email}>")
    print_info(f"ID: {user.id}")
    typer.echo(f"\nUse it with: export TASKFLOW_USER={user.id}")


@app.command("list")
def list_users() -> None:
    """List all registered users."""
    result = get_workspace().users.list_all()
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    if not result.value:
        typer.echo("No users yet. Create one with: taskflow user add NAME EMAIL")
        return

    table = Table("ID", "Name", "Email")
    for user in result.value:
        table.add_row(user.id, user.name, user.email)
    console.print(table)
