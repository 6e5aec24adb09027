"""AI infrastructure for TaskFlow.

Completion clients (Ollama, OpenAI-compatible, mock) with Result-based
error handling, plus the prompts and canned responses they use.
"""

from taskflow.infrastructure.ai.client import CompletionClient, create_completion_client
from taskflow.infrastructure.ai.mock import MockCompletionClient, mock_chat_reply, mock_tasks
from taskflow.infrastructure.ai.ollama import OllamaClient
from taskflow.infrastructure.ai.openai_compat import OpenAIClient
from taskflow.infrastructure.ai.prompts import SYSTEM_PROMPTS
from taskflow.infrastructure.ai.status import OllamaStatus

__all__ = [
    "CompletionClient",
    "create_completion_client",
    "OllamaClient",
    "OpenAIClient",
    "MockCompletionClient",
    "OllamaStatus",
    "SYSTEM_PROMPTS",
    "mock_chat_reply",
    "mock_tasks",
]
