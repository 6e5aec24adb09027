"""Ollama server status checks."""

import logging
from typing import Optional

import httpx

from taskflow.infrastructure.ai.ollama import DEFAULT_URL

logger = logging.getLogger(__name__)


class OllamaStatus:
    """Reports whether Ollama is reachable and which models are loaded."""

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def check_ollama_status(self) -> bool:
        """Check if Ollama is running and accessible."""
        try:
            async with self._client() as client:
                response = await client.get(f"{self.base_url}/api/tags")
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.debug(f"Ollama status check failed: {e}")
            return False

    async def list_available_models(self) -> list[str]:
        """List models pulled onto the Ollama server."""
        return await self._model_names("/api/tags")

    async def list_running_models(self) -> list[str]:
        """List models currently loaded in Ollama."""
        return await self._model_names("/api/ps")

    async def _model_names(self, path: str) -> list[str]:
        try:
            async with self._client() as client:
                response = await client.get(f"{self.base_url}{path}")
            if response.status_code == 200:
                data = response.json()
                return [m["name"] for m in data.get("models", [])]
            return []
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"Error listing models from {path}: {e}")
            return []

    async def report(self, model: str) -> dict:
        """Status summary for the configured model."""
        available = await self.check_ollama_status()
        if not available:
            return {
                "available": False,
                "url": self.base_url,
                "model": model,
                "modelInstalled": False,
                "runningModels": [],
            }

        installed = await self.list_available_models()
        return {
            "available": True,
            "url": self.base_url,
            "model": model,
            "modelInstalled": model in installed,
            "runningModels": await self.list_running_models(),
        }
