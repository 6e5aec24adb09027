"""Translate domain events into activity log entries.

Pure functions - the caller persists the returned ``Activity``.
"""

from uuid import uuid4

from taskflow.domain.activity.models import Activity, ActivityType
from taskflow.domain.project.events import (
    MemberAdded,
    MemberRemoved,
    ProjectCreated,
    ProjectUpdated,
)
from taskflow.domain.shared.events import DomainEvent
from taskflow.domain.task.events import (
    CommentAdded,
    TaskCreated,
    TaskDeleted,
    TaskUpdated,
)
from taskflow.domain.task.models import TaskStatus


def activity_from_event(event: DomainEvent) -> Activity | None:
    """Build the activity entry recorded for ``event``.

    Returns None for events that are not logged per project (for example
    a project deletion, which removes the log along with the project).
    """
    task_id: str | None = None

    match event:
        case ProjectCreated():
            kind = ActivityType.PROJECT_CREATED
            description = f'Created project "{event.name}"'
        case ProjectUpdated():
            kind = ActivityType.PROJECT_UPDATED
            description = f'Updated project "{event.name}"'
        case MemberAdded():
            kind = ActivityType.MEMBER_ADDED
            description = f"Added member {event.user_id} as {event.role.value}"
        case MemberRemoved():
            kind = ActivityType.MEMBER_REMOVED
            description = f"Removed member {event.user_id}"
        case TaskCreated():
            kind = ActivityType.TASK_CREATED
            description = f'Created task "{event.title}"'
            task_id = event.task_id
        case TaskUpdated() if (
            event.status == TaskStatus.DONE and event.previous_status != TaskStatus.DONE
        ):
            kind = ActivityType.TASK_COMPLETED
            description = f'Completed task "{event.title}"'
            task_id = event.task_id
        case TaskUpdated():
            kind = ActivityType.TASK_UPDATED
            description = f'Updated task "{event.title}"'
            task_id = event.task_id
        case TaskDeleted():
            kind = ActivityType.TASK_DELETED
            description = f'Deleted task "{event.title}"'
        case CommentAdded():
            kind = ActivityType.COMMENT_ADDED
            description = f'Commented on task "{event.title}"'
            task_id = event.task_id
        case _:
            return None

    return Activity(
        id=uuid4().hex,
        type=kind,
        description=description,
        project_id=event.project_id,
        task_id=task_id,
        user_id=event.actor_id,
        created_at=event.occurred_at,
    )
