"""Task domain events.

Immutable records of task changes, used to populate the activity log.
All events are pure data structures - no I/O, no side effects.
"""

from taskflow.domain.shared.events import DomainEvent
from taskflow.domain.task.models import TaskStatus


class TaskCreated(DomainEvent):
    """A task was added to a project."""

    project_id: str
    task_id: str
    title: str


class TaskUpdated(DomainEvent):
    """A task's fields were changed.

    ``previous_status`` is set only when the update changed the status.
    """

    project_id: str
    task_id: str
    title: str
    previous_status: TaskStatus | None = None
    status: TaskStatus | None = None


class TaskDeleted(DomainEvent):
    """A task was removed from its project."""

    project_id: str
    task_id: str
    title: str


class CommentAdded(DomainEvent):
    """A comment was posted on a task."""

    project_id: str
    task_id: str
    title: str
