"""Task domain models.

Pure domain models for tasks and their comments. Uses Pydantic for
serialization compatibility with storage and the HTTP API.
"""

from datetime import datetime
from enum import Enum

from pydantic import Field

from taskflow.domain.shared import DomainModel, Priority


class TaskStatus(str, Enum):
    """Workflow status of a task."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    IN_REVIEW = "IN_REVIEW"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


# Statuses that still represent outstanding work
ACTIVE_STATUSES = (TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.IN_REVIEW)


class Task(DomainModel):
    """A unit of work inside exactly one project."""

    id: str
    title: str = Field(min_length=1, max_length=200)
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: Priority = Priority.MEDIUM
    due_date: datetime | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    actual_hours: float | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)
    project_id: str
    assignee_id: str | None = None
    created_at: datetime
    updated_at: datetime

    def is_active(self) -> bool:
        """True while the task is neither done nor cancelled."""
        return self.status in ACTIVE_STATUSES


class Comment(DomainModel):
    """A comment left on a task."""

    id: str
    task_id: str
    author_id: str
    content: str = Field(min_length=1)
    created_at: datetime
