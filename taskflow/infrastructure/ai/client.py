"""Completion client protocol and factory."""

from typing import Protocol

from taskflow.domain.shared.result import Result
from taskflow.global_config import AIConfig, AIProvider
from taskflow.infrastructure.ai.mock import MockCompletionClient
from taskflow.infrastructure.ai.ollama import OllamaClient
from taskflow.infrastructure.ai.openai_compat import OpenAIClient


class CompletionClient(Protocol):
    """Anything that turns a system + user prompt into one completion."""

    model: str

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> Result[str, str]: ...


def create_completion_client(config: AIConfig) -> CompletionClient:
    """Build the client for the configured provider."""
    match config.provider:
        case AIProvider.OPENAI:
            return OpenAIClient(
                api_key=config.openai_api_key,
                model=config.openai_model,
                base_url=config.openai_base_url,
                timeout=config.timeout,
            )
        case AIProvider.MOCK:
            return MockCompletionClient()
        case _:
            return OllamaClient(
                model=config.local_model,
                host=config.ollama_url,
                timeout=config.timeout,
            )
