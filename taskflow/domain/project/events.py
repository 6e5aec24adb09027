"""Project domain events.

Immutable records of changes to a project or its team. The
application layer writes one activity-log entry per event.
"""

from taskflow.domain.project.models import MemberRole
from taskflow.domain.shared.events import DomainEvent


class ProjectCreated(DomainEvent):
    """A user created a new project."""

    project_id: str
    name: str


class ProjectUpdated(DomainEvent):
    """Project settings were changed.

    ``changed`` lists the field names that were part of the update.
    """

    project_id: str
    name: str
    changed: list[str] = []


class ProjectDeleted(DomainEvent):
    """The owner deleted a project and all of its tasks."""

    project_id: str
    name: str


class MemberAdded(DomainEvent):
    """A user joined a project team."""

    project_id: str
    user_id: str
    role: MemberRole


class MemberRemoved(DomainEvent):
    """A user was removed from a project team."""

    project_id: str
    user_id: str
