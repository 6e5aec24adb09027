"""Repository implementations for the domain aggregates.

Layout under the data directory:

    users.json
    projects/<project_id>/project.json
    projects/<project_id>/tasks.json
    projects/<project_id>/activities.json
    projects/<project_id>/comments.json

Every method returns a Result; nothing here raises for expected
failures such as a missing project.
"""

import logging
import shutil
from pathlib import Path

from pydantic import BaseModel, ValidationError

from taskflow.domain.activity.models import Activity
from taskflow.domain.project.models import Project
from taskflow.domain.shared.result import Err, Ok, Result
from taskflow.domain.task.models import Comment, Task, TaskStatus
from taskflow.domain.user.models import User
from taskflow.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)


class _Repository:
    """Shared plumbing: data directory, storage and list documents."""

    def __init__(self, data_dir: str | Path, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            data_dir: Root data directory.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._data_dir = Path(data_dir)
        self._storage = storage or JsonStorage()

    @property
    def projects_dir(self) -> Path:
        return self._data_dir / "projects"

    def _project_dir(self, project_id: str) -> Path:
        return self.projects_dir / project_id

    def _project_ids(self) -> list[str]:
        if not self.projects_dir.exists():
            return []
        return sorted(p.name for p in self.projects_dir.iterdir() if p.is_dir())

    def _load_list(self, path: Path, key: str, model: type[BaseModel]) -> Result[list, str]:
        result = self._storage.load_json(path, default={key: []})
        if isinstance(result, Err):
            return result
        try:
            return Ok([model.model_validate(item) for item in result.value.get(key, [])])
        except (ValidationError, AttributeError) as e:
            return Err(f"Invalid data in {path}: {e}")

    def _save_list(self, path: Path, key: str, items: list[BaseModel]) -> Result[None, str]:
        return self._storage.save_json(
            path, {key: [item.model_dump(mode="json") for item in items]}
        )


class UserRepository(_Repository):
    """Repository for registered users (users.json)."""

    @property
    def _file(self) -> Path:
        return self._data_dir / "users.json"

    def list_all(self) -> Result[list[User], str]:
        return self._load_list(self._file, "users", User)

    def get(self, user_id: str) -> Result[User, str]:
        result = self.list_all()
        if isinstance(result, Err):
            return result
        for user in result.value:
            if user.id == user_id:
                return Ok(user)
        return Err(f"User not found: {user_id}")

    def get_by_email(self, email: str) -> Result[User, str]:
        result = self.list_all()
        if isinstance(result, Err):
            return result
        for user in result.value:
            if user.email.lower() == email.lower():
                return Ok(user)
        return Err(f"User not found: {email}")

    def save(self, user: User) -> Result[None, str]:
        """Insert or replace a user."""
        result = self.list_all()
        if isinstance(result, Err):
            return result
        users = [u for u in result.value if u.id != user.id]
        users.append(user)
        return self._save_list(self._file, "users", users)


class ProjectRepository(_Repository):
    """Repository for project documents (project.json)."""

    def list_all(self) -> Result[list[Project], str]:
        """List every stored project, skipping unreadable ones."""
        projects: list[Project] = []
        try:
            for project_id in self._project_ids():
                result = self.get(project_id)
                if isinstance(result, Ok):
                    projects.append(result.value)
                else:
                    logger.warning(f"Skipping project {project_id}: {result.error}")
        except OSError as e:
            return Err(f"Error listing projects: {e}")
        return Ok(projects)

    def list_for_user(self, user_id: str) -> Result[list[Project], str]:
        """Projects the user owns or is a member of, most recently updated first."""
        result = self.list_all()
        if isinstance(result, Err):
            return result
        visible = [
            p for p in result.value if p.is_owner(user_id) or p.member(user_id) is not None
        ]
        visible.sort(key=lambda p: p.updated_at, reverse=True)
        return Ok(visible)

    def get(self, project_id: str) -> Result[Project, str]:
        path = self._project_dir(project_id) / "project.json"
        result = self._storage.load_json(path)
        if isinstance(result, Err):
            return Err(f"Project not found: {project_id}")
        try:
            return Ok(Project.model_validate(result.value))
        except ValidationError as e:
            return Err(f"Invalid project data for {project_id}: {e}")

    def save(self, project: Project) -> Result[None, str]:
        path = self._project_dir(project.id) / "project.json"
        return self._storage.save_json(path, project.model_dump(mode="json"))

    def exists(self, project_id: str) -> bool:
        return (self._project_dir(project_id) / "project.json").exists()

    def delete(self, project_id: str) -> Result[None, str]:
        """Delete a project together with its tasks, comments and activity."""
        project_dir = self._project_dir(project_id)
        if not project_dir.exists():
            return Err(f"Project not found: {project_id}")
        try:
            shutil.rmtree(project_dir)
            return Ok(None)
        except PermissionError:
            return Err(f"Permission denied deleting {project_id}")
        except OSError as e:
            return Err(f"Error deleting project {project_id}: {e}")


def _task_sort_key(task: Task) -> tuple:
    return (task.priority.rank, task.created_at)


class TaskRepository(_Repository):
    """Repository for tasks, stored per project in tasks.json."""

    def _file(self, project_id: str) -> Path:
        return self._project_dir(project_id) / "tasks.json"

    def list_for_project(self, project_id: str) -> Result[list[Task], str]:
        return self._load_list(self._file(project_id), "tasks", Task)

    def list(
        self,
        project_ids: list[str],
        assignee_id: str | None = None,
        status: TaskStatus | None = None,
    ) -> Result[list[Task], str]:
        """Tasks of the given projects, highest priority then newest first."""
        tasks: list[Task] = []
        for project_id in project_ids:
            result = self.list_for_project(project_id)
            if isinstance(result, Err):
                return result
            tasks.extend(result.value)

        if assignee_id is not None:
            tasks = [t for t in tasks if t.assignee_id == assignee_id]
        if status is not None:
            tasks = [t for t in tasks if t.status == status]

        tasks.sort(key=_task_sort_key, reverse=True)
        return Ok(tasks)

    def get(self, task_id: str) -> Result[Task, str]:
        """Find a task by ID across all projects."""
        for project_id in self._project_ids():
            result = self.list_for_project(project_id)
            if isinstance(result, Err):
                logger.warning(f"Skipping tasks of {project_id}: {result.error}")
                continue
            for task in result.value:
                if task.id == task_id:
                    return Ok(task)
        return Err(f"Task not found: {task_id}")

    def save(self, task: Task) -> Result[None, str]:
        """Insert or replace a task in its project's document."""
        result = self.list_for_project(task.project_id)
        if isinstance(result, Err):
            return result
        tasks = [t for t in result.value if t.id != task.id]
        tasks.append(task)
        return self._save_list(self._file(task.project_id), "tasks", tasks)

    def delete(self, task: Task) -> Result[None, str]:
        result = self.list_for_project(task.project_id)
        if isinstance(result, Err):
            return result
        remaining = [t for t in result.value if t.id != task.id]
        if len(remaining) == len(result.value):
            return Err(f"Task not found: {task.id}")
        return self._save_list(self._file(task.project_id), "tasks", remaining)


class ActivityRepository(_Repository):
    """Append-only activity log per project (activities.json)."""

    def _file(self, project_id: str) -> Path:
        return self._project_dir(project_id) / "activities.json"

    def append(self, activity: Activity) -> Result[None, str]:
        if activity.project_id is None:
            return Err("Activity has no project")
        path = self._file(activity.project_id)
        result = self._load_list(path, "activities", Activity)
        if isinstance(result, Err):
            return result
        return self._save_list(path, "activities", [*result.value, activity])

    def recent(self, project_id: str, limit: int = 10) -> Result[list[Activity], str]:
        """The newest ``limit`` activities, newest first."""
        result = self._load_list(self._file(project_id), "activities", Activity)
        if isinstance(result, Err):
            return result
        ordered = sorted(result.value, key=lambda a: a.created_at, reverse=True)
        return Ok(ordered[:limit])


class CommentRepository(_Repository):
    """Task comments, stored per project (comments.json)."""

    def _file(self, project_id: str) -> Path:
        return self._project_dir(project_id) / "comments.json"

    def list_for_task(self, project_id: str, task_id: str) -> Result[list[Comment], str]:
        """Comments on a task, newest first."""
        result = self._load_list(self._file(project_id), "comments", Comment)
        if isinstance(result, Err):
            return result
        comments = [c for c in result.value if c.task_id == task_id]
        comments.sort(key=lambda c: c.created_at, reverse=True)
        return Ok(comments)

    def add(self, project_id: str, comment: Comment) -> Result[None, str]:
        path = self._file(project_id)
        result = self._load_list(path, "comments", Comment)
        if isinstance(result, Err):
            return result
        return self._save_list(path, "comments", [*result.value, comment])

    def delete_for_task(self, project_id: str, task_id: str) -> Result[None, str]:
        path = self._file(project_id)
        result = self._load_list(path, "comments", Comment)
        if isinstance(result, Err):
            return result
        remaining = [c for c in result.value if c.task_id != task_id]
        return self._save_list(path, "comments", remaining)
