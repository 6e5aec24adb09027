"""Workspace - the stateful side of the application layer.

Loads records through the repositories, runs the pure project and task
services, persists the result and appends the matching activity log
entry. Both the HTTP API and the CLI go through this class.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from taskflow.application import project_service, task_service
from taskflow.application.errors import (
    InvalidInput,
    NotFound,
    ServiceError,
    StorageFailure,
    describe_validation_error,
)
from taskflow.domain.activity import Activity, activity_from_event
from taskflow.domain.analytics import (
    AnalyticsError,
    DashboardAnalytics,
    DashboardSummary,
    ProjectHealth,
    ProjectSnapshot,
    TaskSnapshot,
    compute_dashboard_analytics,
    compute_project_health,
    dashboard_summary,
)
from taskflow.domain.project import MemberRole, Project, ProjectSummary
from taskflow.domain.shared import DomainEvent, Err, Ok, Result
from taskflow.domain.task import Comment, Task, TaskStatus
from taskflow.domain.user import User
from taskflow.infrastructure.storage import (
    ActivityRepository,
    CommentRepository,
    JsonStorage,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_ACTIVITY_LIMIT = 10


def _stored(result: Result[Any, str]) -> Result[Any, ServiceError]:
    """Turn a repository error string into a StorageFailure."""
    if isinstance(result, Err):
        logger.error(f"Storage error: {result.error}")
        return Err(StorageFailure(result.error))
    return result


class Workspace:
    """All users, projects and tasks stored under one data directory.

    Example:
        workspace = Workspace(Path("~/.taskflow/data").expanduser())
        result = workspace.create_project(user.id, "Website redesign")
        if isinstance(result, Ok):
            project = result.value
    """

    def __init__(
        self,
        data_dir: str | Path,
        recent_activity_limit: int = DEFAULT_ACTIVITY_LIMIT,
    ) -> None:
        storage = JsonStorage()
        self.data_dir = Path(data_dir)
        self.recent_activity_limit = recent_activity_limit
        self.users = UserRepository(self.data_dir, storage)
        self.projects = ProjectRepository(self.data_dir, storage)
        self.tasks = TaskRepository(self.data_dir, storage)
        self.activities = ActivityRepository(self.data_dir, storage)
        self.comments = CommentRepository(self.data_dir, storage)

    def _record(self, event: DomainEvent) -> None:
        """Append the activity for ``event``; a failed append is logged, not fatal."""
        activity = activity_from_event(event)
        if activity is None:
            return
        result = self.activities.append(activity)
        if isinstance(result, Err):
            logger.warning(f"Could not record activity {activity.type.value}: {result.error}")

    # =========================================================================
    # Users
    # =========================================================================

    def register_user(
        self, name: str, email: str, now: datetime | None = None
    ) -> Result[User, ServiceError]:
        """Create a user; emails are unique (case-insensitive)."""
        if isinstance(self.users.get_by_email(email), Ok):
            return Err(InvalidInput(f"Email already registered: {email}"))
        try:
            user = User(
                id=uuid4().hex,
                name=name.strip(),
                email=email.strip(),
                created_at=now or datetime.now(UTC),
            )
        except ValidationError as e:
            return Err(InvalidInput(describe_validation_error(e)))

        saved = _stored(self.users.save(user))
        if isinstance(saved, Err):
            return saved
        logger.info(f"Registered user {user.id} <{user.email}>")
        return Ok(user)

    def get_user(self, user_id: str) -> Result[User, ServiceError]:
        result = self.users.get(user_id)
        if isinstance(result, Err):
            return Err(NotFound(f"User not found: {user_id}"))
        return result

    # =========================================================================
    # Projects
    # =========================================================================

    def get_project(self, project_id: str, user_id: str) -> Result[Project, ServiceError]:
        """Load a project the user can view.

        Invisible projects are reported as missing, so their existence
        is not leaked.
        """
        result = self.projects.get(project_id)
        if isinstance(result, Err) or not project_service.can_view(result.value, user_id):
            return Err(NotFound("Project not found"))
        return result

    def list_projects(self, user_id: str) -> Result[list[Project], ServiceError]:
        return _stored(self.projects.list_for_user(user_id))

    def list_project_summaries(self, user_id: str) -> Result[list[ProjectSummary], ServiceError]:
        """Summaries (task counts, progress) of every visible project."""
        projects = self.list_projects(user_id)
        if isinstance(projects, Err):
            return projects

        summaries = []
        for project in projects.value:
            tasks = _stored(self.tasks.list_for_project(project.id))
            if isinstance(tasks, Err):
                return tasks
            summaries.append(project_service.get_project_summary(project, tasks.value))
        return Ok(summaries)

    def create_project(
        self, user_id: str, name: str, **fields: Any
    ) -> Result[Project, ServiceError]:
        result = project_service.create_project(user_id, name, **fields)
        if isinstance(result, Err):
            return result
        project, event = result.value

        saved = _stored(self.projects.save(project))
        if isinstance(saved, Err):
            return saved
        self._record(event)
        logger.info(f"Created project {project.id} ({project.name})")
        return Ok(project)

    def update_project(
        self, project_id: str, user_id: str, changes: dict[str, Any]
    ) -> Result[Project, ServiceError]:
        project = self.get_project(project_id, user_id)
        if isinstance(project, Err):
            return project

        result = project_service.update_project(project.value, user_id, changes)
        if isinstance(result, Err):
            return result
        updated, event = result.value

        saved = _stored(self.projects.save(updated))
        if isinstance(saved, Err):
            return saved
        self._record(event)
        return Ok(updated)

    def delete_project(self, project_id: str, user_id: str) -> Result[None, ServiceError]:
        """Delete a project along with its tasks, comments and activity log."""
        project = self.get_project(project_id, user_id)
        if isinstance(project, Err):
            return project

        result = project_service.delete_project(project.value, user_id)
        if isinstance(result, Err):
            return result

        deleted = _stored(self.projects.delete(project_id))
        if isinstance(deleted, Err):
            return deleted
        logger.info(f"Deleted project {project_id}")
        return Ok(None)

    def add_member(
        self,
        project_id: str,
        user_id: str,
        member_id: str,
        role: MemberRole = MemberRole.MEMBER,
    ) -> Result[Project, ServiceError]:
        project = self.get_project(project_id, user_id)
        if isinstance(project, Err):
            return project
        member = self.get_user(member_id)
        if isinstance(member, Err):
            return member

        result = project_service.add_member(project.value, user_id, member_id, role)
        if isinstance(result, Err):
            return result
        updated, event = result.value

        saved = _stored(self.projects.save(updated))
        if isinstance(saved, Err):
            return saved
        self._record(event)
        return Ok(updated)

    def remove_member(
        self, project_id: str, user_id: str, member_id: str
    ) -> Result[Project, ServiceError]:
        project = self.get_project(project_id, user_id)
        if isinstance(project, Err):
            return project

        result = project_service.remove_member(project.value, user_id, member_id)
        if isinstance(result, Err):
            return result
        updated, event = result.value

        saved = _stored(self.projects.save(updated))
        if isinstance(saved, Err):
            return saved
        self._record(event)
        return Ok(updated)

    def recent_activity(
        self, project_id: str, user_id: str, limit: int | None = None
    ) -> Result[list[Activity], ServiceError]:
        project = self.get_project(project_id, user_id)
        if isinstance(project, Err):
            return project
        return _stored(
            self.activities.recent(
                project_id, limit if limit is not None else self.recent_activity_limit
            )
        )

    # =========================================================================
    # Tasks
    # =========================================================================

    def list_tasks(
        self,
        user_id: str,
        project_id: str | None = None,
        assignee_id: str | None = None,
        status: TaskStatus | None = None,
    ) -> Result[list[Task], ServiceError]:
        """Tasks in the user's visible projects, optionally filtered."""
        if project_id is not None:
            project = self.get_project(project_id, user_id)
            if isinstance(project, Err):
                return project
            project_ids = [project_id]
        else:
            projects = self.list_projects(user_id)
            if isinstance(projects, Err):
                return projects
            project_ids = [p.id for p in projects.value]

        return _stored(self.tasks.list(project_ids, assignee_id=assignee_id, status=status))

    def _visible_task(self, task_id: str, user_id: str) -> Result[tuple[Task, Project], ServiceError]:
        task = self.tasks.get(task_id)
        if isinstance(task, Err):
            return Err(NotFound("Task not found"))
        project = self.get_project(task.value.project_id, user_id)
        if isinstance(project, Err):
            return Err(NotFound("Task not found"))
        return Ok((task.value, project.value))

    def get_task(self, task_id: str, user_id: str) -> Result[Task, ServiceError]:
        found = self._visible_task(task_id, user_id)
        if isinstance(found, Err):
            return found
        return Ok(found.value[0])

    def create_task(
        self, user_id: str, project_id: str, title: str, **fields: Any
    ) -> Result[Task, ServiceError]:
        project = self.projects.get(project_id)
        if isinstance(project, Err):
            return Err(NotFound("Project not found"))

        result = task_service.create_task(project.value, user_id, title, **fields)
        if isinstance(result, Err):
            return result
        task, event = result.value

        saved = _stored(self.tasks.save(task))
        if isinstance(saved, Err):
            return saved
        self._record(event)
        return Ok(task)

    def update_task(
        self, task_id: str, user_id: str, changes: dict[str, Any]
    ) -> Result[Task, ServiceError]:
        found = self._visible_task(task_id, user_id)
        if isinstance(found, Err):
            return found
        task, project = found.value

        result = task_service.update_task(task, project, user_id, changes)
        if isinstance(result, Err):
            return result
        updated, event = result.value

        saved = _stored(self.tasks.save(updated))
        if isinstance(saved, Err):
            return saved
        self._record(event)
        return Ok(updated)

    def delete_task(self, task_id: str, user_id: str) -> Result[None, ServiceError]:
        found = self._visible_task(task_id, user_id)
        if isinstance(found, Err):
            return found
        task, project = found.value

        result = task_service.delete_task(task, project, user_id)
        if isinstance(result, Err):
            return result

        deleted = _stored(self.tasks.delete(task))
        if isinstance(deleted, Err):
            return deleted
        cleared = self.comments.delete_for_task(task.project_id, task.id)
        if isinstance(cleared, Err):
            logger.warning(f"Could not remove comments of task {task.id}: {cleared.error}")
        self._record(result.value)
        return Ok(None)

    def add_comment(
        self, task_id: str, user_id: str, content: str
    ) -> Result[Comment, ServiceError]:
        found = self._visible_task(task_id, user_id)
        if isinstance(found, Err):
            return found
        task, project = found.value

        result = task_service.add_comment(task, project, user_id, content)
        if isinstance(result, Err):
            return result
        comment, event = result.value

        saved = _stored(self.comments.add(task.project_id, comment))
        if isinstance(saved, Err):
            return saved
        self._record(event)
        return Ok(comment)

    def list_comments(self, task_id: str, user_id: str) -> Result[list[Comment], ServiceError]:
        found = self._visible_task(task_id, user_id)
        if isinstance(found, Err):
            return found
        task, _ = found.value
        return _stored(self.comments.list_for_task(task.project_id, task.id))

    # =========================================================================
    # Analytics
    # =========================================================================

    def project_health(
        self, project_id: str, user_id: str, now: datetime | None
    ) -> Result[ProjectHealth, ServiceError | AnalyticsError]:
        """Health metrics for one project from its tasks and recent activity."""
        project = self.get_project(project_id, user_id)
        if isinstance(project, Err):
            return project
        tasks = _stored(self.tasks.list_for_project(project_id))
        if isinstance(tasks, Err):
            return tasks
        activity = _stored(self.activities.recent(project_id, self.recent_activity_limit))
        if isinstance(activity, Err):
            return activity

        result = compute_project_health(
            [TaskSnapshot.from_task(task) for task in tasks.value],
            recent_activity_count=len(activity.value),
            now=now,
            project_created_at=project.value.created_at,
            project_end_date=project.value.end_date,
        )
        if isinstance(result, Err):
            logger.error(f"Health metrics unavailable for {project_id}: {result.error.message}")
        return result

    def _visible_snapshots(
        self, user_id: str
    ) -> Result[tuple[list[ProjectSnapshot], list[TaskSnapshot]], ServiceError]:
        projects = self.list_projects(user_id)
        if isinstance(projects, Err):
            return projects
        tasks = _stored(self.tasks.list([p.id for p in projects.value]))
        if isinstance(tasks, Err):
            return tasks
        return Ok(
            (
                [ProjectSnapshot.from_project(p) for p in projects.value],
                [TaskSnapshot.from_task(t) for t in tasks.value],
            )
        )

    def dashboard_analytics(
        self, user_id: str, now: datetime | None
    ) -> Result[DashboardAnalytics, ServiceError | AnalyticsError]:
        snapshots = self._visible_snapshots(user_id)
        if isinstance(snapshots, Err):
            return snapshots
        projects, tasks = snapshots.value
        result = compute_dashboard_analytics(projects, tasks, now)
        if isinstance(result, Err):
            logger.error(f"Dashboard analytics unavailable for {user_id}: {result.error.message}")
        return result

    def dashboard_summary(
        self, user_id: str, now: datetime | None
    ) -> Result[DashboardSummary, ServiceError | AnalyticsError]:
        snapshots = self._visible_snapshots(user_id)
        if isinstance(snapshots, Err):
            return snapshots
        projects, tasks = snapshots.value
        return dashboard_summary(len(projects), tasks, now)
