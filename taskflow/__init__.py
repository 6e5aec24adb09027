"""TaskFlow - project and task management with health analytics."""

__version__ = "1.0.0"
