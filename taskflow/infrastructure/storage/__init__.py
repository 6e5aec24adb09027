"""Storage infrastructure for TaskFlow.

JSON-file persistence for the domain models, using Result monads for
explicit error handling.
"""

from taskflow.infrastructure.storage.json_storage import JsonStorage
from taskflow.infrastructure.storage.repositories import (
    ActivityRepository,
    CommentRepository,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)

__all__ = [
    "JsonStorage",
    "UserRepository",
    "ProjectRepository",
    "TaskRepository",
    "ActivityRepository",
    "CommentRepository",
]
