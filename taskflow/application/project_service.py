"""Project application service.

Orchestrates project-level operations by combining domain functions.
All functions are pure - no I/O, no side effects. Each command returns
the new state together with the domain event to record.
"""

from collections.abc import Sequence
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
from taskflow.domain.project import (
    Member,
    MemberAdded,
    MemberRemoved,
    MemberRole,
    Project,
    ProjectCreated,
    ProjectDeleted,
    ProjectSummary,
    ProjectUpdated,
)
from taskflow.domain.shared import Err, Ok, Result
from taskflow.domain.task import Task, TaskStatus

# Fields a project update may touch
UPDATABLE_FIELDS = (
    "name",
    "description",
    "status",
    "priority",
    "start_date",
    "end_date",
    "color",
)

_MANAGER_ROLES = (MemberRole.ADMIN, MemberRole.MANAGER)


# =============================================================================
# Permissions
# =============================================================================


def can_view(project: Project, user_id: str) -> bool:
    """Owners and team members can see a project and its tasks."""
    return project.is_owner(user_id) or project.member(user_id) is not None


def can_manage(project: Project, user_id: str) -> bool:
    """Owners and ADMIN/MANAGER members can change a project and its team."""
    if project.is_owner(user_id):
        return True
    member = project.member(user_id)
    return member is not None and member.role in _MANAGER_ROLES


def can_delete(project: Project, user_id: str) -> bool:
    return project.is_owner(user_id)


# =============================================================================
# Queries
# =============================================================================


def get_project_summary(project: Project, tasks: Sequence[Task]) -> ProjectSummary:
    """Create a project summary from the project and its tasks.

    Args:
        project: The project.
        tasks: The project's tasks.

    Returns:
        ProjectSummary with progress information.
    """
    total = len(tasks)
    completed = sum(1 for task in tasks if task.status == TaskStatus.DONE)

    progress = 0
    if total > 0:
        progress = round(completed / total * 100)

    return ProjectSummary(
        id=project.id,
        name=project.name,
        status=project.status,
        priority=project.priority,
        color=project.color,
        owner_id=project.owner_id,
        task_count=total,
        completed_tasks=completed,
        member_count=len(project.members),
        progress_percent=progress,
    )


# =============================================================================
# Commands
# =============================================================================


def create_project(
    owner_id: str,
    name: str,
    now: datetime | None = None,
    **fields: Any,
) -> Result[tuple[Project, ProjectCreated], ServiceError]:
    """Create a new project owned by ``owner_id``.

    Args:
        owner_id: The creating user.
        name: Project name, 1-100 characters after trimming.
        now: Creation time (defaults to the current UTC time).
        **fields: Optional description, status, priority, start_date,
            end_date and color.

    Returns:
        Ok((Project, ProjectCreated)) on success, or
        Err(InvalidInput) with validation error message.
    """
    if not name or not name.strip():
        return Err(InvalidInput("Project name is required"))

    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        return Err(InvalidInput(f"Unknown project fields: {', '.join(sorted(unknown))}"))

    now = now or datetime.now(UTC)
    try:
        project = Project(
            id=uuid4().hex,
            name=name.strip(),
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            **{k: v for k, v in fields.items() if v is not None},
        )
    except ValidationError as e:
        return Err(InvalidInput(describe_validation_error(e)))

    event = ProjectCreated(
        actor_id=owner_id,
        occurred_at=now,
        project_id=project.id,
        name=project.name,
    )
    return Ok((project, event))


def update_project(
    project: Project,
    actor_id: str,
    changes: dict[str, Any],
    now: datetime | None = None,
) -> Result[tuple[Project, ProjectUpdated], ServiceError]:
    """Apply ``changes`` to a project.

    Only the owner and ADMIN/MANAGER members may update. Keys outside
    UPDATABLE_FIELDS are rejected.
    """
    if not can_manage(project, actor_id):
        return Err(Forbidden("Insufficient permissions to update this project"))

    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        return Err(InvalidInput(f"Unknown project fields: {', '.join(sorted(unknown))}"))

    if "name" in changes and isinstance(changes["name"], str):
        changes = {**changes, "name": changes["name"].strip()}

    now = now or datetime.now(UTC)
    data = project.model_dump()
    data.update(changes)
    data["updated_at"] = now
    try:
        updated = Project.model_validate(data)
    except ValidationError as e:
        return Err(InvalidInput(describe_validation_error(e)))

    event = ProjectUpdated(
        actor_id=actor_id,
        occurred_at=now,
        project_id=project.id,
        name=updated.name,
        changed=sorted(changes),
    )
    return Ok((updated, event))


def delete_project(project: Project, actor_id: str) -> Result[ProjectDeleted, ServiceError]:
    """Only the owner may delete a project."""
    if not can_delete(project, actor_id):
        return Err(Forbidden("Only the project owner can delete this project"))
    return Ok(ProjectDeleted(actor_id=actor_id, project_id=project.id, name=project.name))


def add_member(
    project: Project,
    actor_id: str,
    user_id: str,
    role: MemberRole = MemberRole.MEMBER,
    now: datetime | None = None,
) -> Result[tuple[Project, MemberAdded], ServiceError]:
    """Add ``user_id`` to the project team."""
    if not can_manage(project, actor_id):
        return Err(Forbidden("Insufficient permissions to manage the team"))
    if project.is_owner(user_id):
        return Err(InvalidInput("The owner is already part of the project"))
    if project.member(user_id) is not None:
        return Err(InvalidInput(f"User {user_id} is already a member"))

    now = now or datetime.now(UTC)
    member = Member(user_id=user_id, project_id=project.id, role=role, joined_at=now)
    updated = project.model_copy(
        update={"members": [*project.members, member], "updated_at": now}
    )
    event = MemberAdded(
        actor_id=actor_id,
        occurred_at=now,
        project_id=project.id,
        user_id=user_id,
        role=role,
    )
    return Ok((updated, event))


def remove_member(
    project: Project,
    actor_id: str,
    user_id: str,
    now: datetime | None = None,
) -> Result[tuple[Project, MemberRemoved], ServiceError]:
    """Remove ``user_id`` from the project team."""
    if not can_manage(project, actor_id):
        return Err(Forbidden("Insufficient permissions to manage the team"))
    if project.member(user_id) is None:
        return Err(InvalidInput(f"User {user_id} is not a member"))

    now = now or datetime.now(UTC)
    updated = project.model_copy(
        update={
            "members": [m for m in project.members if m.user_id != user_id],
            "updated_at": now,
        }
    )
    event = MemberRemoved(
        actor_id=actor_id,
        occurred_at=now,
        project_id=project.id,
        user_id=user_id,
    )
    return Ok((updated, event))


