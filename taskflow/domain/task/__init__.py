"""Task domain - tasks, comments and their events.

All exports are pure (no I/O, no side effects).

Key Types:
    TaskStatus - Task workflow state enumeration
    Task - A unit of work in a project
    Comment - Discussion entry on a task

Domain Events:
    TaskCreated - New task added
    TaskUpdated - Task fields changed
    TaskDeleted - Task removed
    CommentAdded - Comment posted
"""

from .events import CommentAdded, TaskCreated, TaskDeleted, TaskUpdated
from .models import ACTIVE_STATUSES, Comment, Task, TaskStatus

__all__ = [
    # Models
    "TaskStatus",
    "ACTIVE_STATUSES",
    "Task",
    "Comment",
    # Events
    "TaskCreated",
    "TaskUpdated",
    "TaskDeleted",
    "CommentAdded",
]
