"""Application service layer for TaskFlow.

Services:
    project_service - Project commands, permissions and summaries (pure)
    task_service - Task and comment commands (pure)
    workspace - Loads, persists and logs activity around the pure services
    ai_service - Insights, task suggestions and chat over a completion client

Example usage:
    >>> from taskflow.application import Workspace
    >>> from taskflow.domain.shared import is_ok
    >>>
    >>> workspace = Workspace("/tmp/taskflow")
    >>> result = workspace.create_project(user_id, "Launch plan")
    >>> if is_ok(result):
    ...     print(f"Created {result.value.name}")
"""

from taskflow.application.errors import (
    Forbidden,
    InvalidInput,
    NotFound,
    ServiceError,
    StorageFailure,
)
from taskflow.application.project_service import (
    can_delete,
    can_manage,
    can_view,
    get_project_summary,
)
from taskflow.application.workspace import Workspace

__all__ = [
    # Errors
    "ServiceError",
    "NotFound",
    "Forbidden",
    "InvalidInput",
    "StorageFailure",
    # Project service
    "can_view",
    "can_manage",
    "can_delete",
    "get_project_summary",
    # Orchestration
    "Workspace",
]
