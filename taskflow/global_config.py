"""Global configuration storage for TaskFlow.

Stores settings like the data directory and AI provider in
~/.taskflow/config.json. A few environment variables override the file.
"""

import json
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AIProvider(str, Enum):
    """Completion service used by the AI endpoints."""

    LOCAL = "local"  # Ollama
    OPENAI = "openai"  # Any OpenAI-compatible chat completions API
    MOCK = "mock"  # Canned responses, no network


class AIConfig(BaseModel):
    """Completion service settings."""

    provider: AIProvider = AIProvider.LOCAL
    local_model: str = "qwen2.5-coder:7b"
    ollama_url: str = "http://localhost:11434"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-3.5-turbo"
    openai_api_key: Optional[str] = None
    timeout: float = 60.0


class AppConfig(BaseModel):
    """Top-level TaskFlow settings."""

    data_dir: str = Field(
        default_factory=lambda: str(get_config_dir() / "data"),
        description="Directory holding users.json and per-project folders",
    )
    ai: AIConfig = Field(default_factory=AIConfig)
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"]
    )
    recent_activity_limit: int = 10


def get_config_dir() -> Path:
    """Get the TaskFlow config directory (``TASKFLOW_HOME`` or ~/.taskflow)."""
    config_dir = Path(os.environ.get("TASKFLOW_HOME") or Path.home() / ".taskflow")
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def _apply_env(config: AppConfig) -> AppConfig:
    """Overlay environment variables on top of file settings."""
    data_dir = os.environ.get("TASKFLOW_DATA_DIR")
    if data_dir:
        config.data_dir = data_dir

    provider = os.environ.get("TASKFLOW_AI_PROVIDER")
    if provider:
        try:
            config.ai.provider = AIProvider(provider.lower())
        except ValueError:
            logger.warning(f"Ignoring unknown TASKFLOW_AI_PROVIDER={provider!r}")

    ollama_url = os.environ.get("OLLAMA_URL")
    if ollama_url:
        config.ai.ollama_url = ollama_url

    api_key = os.environ.get("OPENAI_API_KEY")
    if api_key:
        config.ai.openai_api_key = api_key

    return config


def get_global_config() -> AppConfig:
    """Load global configuration, falling back to defaults."""
    config_file = get_config_dir() / "config.json"
    config = AppConfig()
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            config = AppConfig(**data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Invalid config at {config_file}, using defaults: {e}")
    return _apply_env(config)


def save_global_config(config: AppConfig) -> None:
    """Save global configuration."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(config.model_dump(mode="json"), indent=2),
        encoding="utf-8",
    )
