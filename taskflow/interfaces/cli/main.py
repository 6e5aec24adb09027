"""Entry point for the TaskFlow CLI.

Usage:
    python -m taskflow.interfaces.cli.main

Or via installed entry point:
    taskflow <command>
"""

from taskflow.interfaces.cli import app


def main() -> None:
    """Run the TaskFlow CLI application."""
    app()


if __name__ == "__main__":
    main()
