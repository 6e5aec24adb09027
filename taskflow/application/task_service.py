"""Task application service.

Orchestrates task lifecycle operations by combining domain functions.
All functions are pure - no I/O, no side effects. Callers pass in the
task's project so permissions can be checked against its team.
"""

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from taskflow.application.errors import (
    Forbidden,
    InvalidInput,
    ServiceError,
    describe_validation_error,
)
from taskflow.application.project_service import can_manage, can_view
from taskflow.domain.project import Project
from taskflow.domain.shared import Err, Ok, Result
from taskflow.domain.task import (
    Comment,
    CommentAdded,
    Task,
    TaskCreated,
    TaskDeleted,
    TaskUpdated,
)

# Fields a task update may touch
UPDATABLE_FIELDS = (
    "title",
    "description",
    "status",
    "priority",
    "due_date",
    "estimated_hours",
    "actual_hours",
    "tags",
    "assignee_id",
)


def _check_assignee(project: Project, assignee_id: str | None) -> Result[None, ServiceError]:
    if assignee_id is not None and not can_view(project, assignee_id):
        return Err(InvalidInput(f"Assignee {assignee_id} is not on the project team"))
    return Ok(None)


def create_task(
    project: Project,
    actor_id: str,
    title: str,
    now: datetime | None = None,
    **fields: Any,
) -> Result[tuple[Task, TaskCreated], ServiceError]:
    """Create a task inside ``project``.

    Args:
        project: The project the task belongs to.
        actor_id: The creating user; must be able to view the project.
        title: Task title, 1-200 characters after trimming.
        now: Creation time (defaults to the current UTC time).
        **fields: Any other field from UPDATABLE_FIELDS.

    Returns:
        Ok((Task, TaskCreated)) on success, or
        Err(Forbidden) when the user is not on the team, or
        Err(InvalidInput) for invalid fields.
    """
    if not can_view(project, actor_id):
        return Err(Forbidden("Project not found or access denied"))

    if not title or not title.strip():
        return Err(InvalidInput("Task title is required"))

    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        return Err(InvalidInput(f"Unknown task fields: {', '.join(sorted(unknown))}"))

    assignee = _check_assignee(project, fields.get("assignee_id"))
    if isinstance(assignee, Err):
        return assignee

    now = now or datetime.now(UTC)
    try:
        task = Task(
            id=uuid4().hex,
            title=title.strip(),
            project_id=project.id,
            created_at=now,
            updated_at=now,
            **{k: v for k, v in fields.items() if v is not None},
        )
    except ValidationError as e:
        return Err(InvalidInput(describe_validation_error(e)))

    event = TaskCreated(
        actor_id=actor_id,
        occurred_at=now,
        project_id=project.id,
        task_id=task.id,
        title=task.title,
    )
    return Ok((task, event))


def update_task(
    task: Task,
    project: Project,
    actor_id: str,
    changes: dict[str, Any],
    now: datetime | None = None,
) -> Result[tuple[Task, TaskUpdated], ServiceError]:
    """Apply ``changes`` to a task.

    Any team member may update a task. ``updated_at`` is always bumped,
    so moving a task to DONE stamps its completion time.
    """
    if not can_view(project, actor_id):
        return Err(Forbidden("Task not found or access denied"))

    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        return Err(InvalidInput(f"Unknown task fields: {', '.join(sorted(unknown))}"))

    if "assignee_id" in changes:
        assignee = _check_assignee(project, changes["assignee_id"])
        if isinstance(assignee, Err):
            return assignee

    if "title" in changes and isinstance(changes["title"], str):
        changes = {**changes, "title": changes["title"].strip()}

    now = now or datetime.now(UTC)
    data = task.model_dump()
    data.update(changes)
    data["updated_at"] = now
    try:
        updated = Task.model_validate(data)
    except ValidationError as e:
        return Err(InvalidInput(describe_validation_error(e)))

    status_changed = updated.status != task.status
    event = TaskUpdated(
        actor_id=actor_id,
        occurred_at=now,
        project_id=task.project_id,
        task_id=task.id,
        title=updated.title,
        previous_status=task.status if status_changed else None,
        status=updated.status if status_changed else None,
    )
    return Ok((updated, event))


def delete_task(
    task: Task,
    project: Project,
    actor_id: str,
) -> Result[TaskDeleted, ServiceError]:
    """Only the project owner and ADMIN/MANAGER members may delete tasks."""
    if not can_manage(project, actor_id):
        return Err(Forbidden("Insufficient permissions to delete this task"))
    return Ok(
        TaskDeleted(
            actor_id=actor_id,
            project_id=task.project_id,
            task_id=task.id,
            title=task.title,
        )
    )


def add_comment(
    task: Task,
    project: Project,
    actor_id: str,
    content: str,
    now: datetime | None = None,
) -> Result[tuple[Comment, CommentAdded], ServiceError]:
    """Post a comment on a task. Team members only."""
    if not can_view(project, actor_id):
        return Err(Forbidden("Task not found or access denied"))
    if not content or not content.strip():
        return Err(InvalidInput("Comment cannot be empty"))

    now = now or datetime.now(UTC)
    comment = Comment(
        id=uuid4().hex,
        task_id=task.id,
        author_id=actor_id,
        content=content.strip(),
        created_at=now,
    )
    event = CommentAdded(
        actor_id=actor_id,
        occurred_at=now,
        project_id=task.project_id,
        task_id=task.id,
        title=task.title,
    )
    return Ok((comment, event))
