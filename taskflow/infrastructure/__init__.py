"""Infrastructure layer for TaskFlow.

Clean interfaces for I/O: JSON storage and completion services, both
returning Result monads for explicit error handling.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - UserRepository, ProjectRepository, TaskRepository
        - ActivityRepository, CommentRepository

    AI:
        - OllamaClient, OpenAIClient, MockCompletionClient
        - OllamaStatus: Server availability and loaded models
"""

from taskflow.infrastructure.ai import (
    CompletionClient,
    MockCompletionClient,
    OllamaClient,
    OllamaStatus,
    OpenAIClient,
    create_completion_client,
)
from taskflow.infrastructure.storage import (
    ActivityRepository,
    CommentRepository,
    JsonStorage,
    ProjectRepository,
    TaskRepository,
    UserRepository,
)

__all__ = [
    # Storage
    "JsonStorage",
    "UserRepository",
    "ProjectRepository",
    "TaskRepository",
    "ActivityRepository",
    "CommentRepository",
    # AI
    "CompletionClient",
    "create_completion_client",
    "OllamaClient",
    "OpenAIClient",
    "MockCompletionClient",
    "OllamaStatus",
]
