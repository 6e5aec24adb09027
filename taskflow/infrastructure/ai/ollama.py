"""Ollama completion client with Result-based error handling."""

import logging

import httpx
import ollama

from taskflow.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "qwen2.5-coder:7b"
DEFAULT_URL = "http://localhost:11434"


class OllamaClient:
    """Completion client for a local Ollama server.

    Example:
        client = OllamaClient()
        result = await client.complete(system, "Summarize this project")
        if isinstance(result, Ok):
            text = result.value
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        host: str = DEFAULT_URL,
        timeout: float = 60.0,
    ) -> None:
        """Initialize the Ollama client.

        Args:
            model: Model used for generation.
            host: Base URL of the Ollama server.
            timeout: Request timeout in seconds.
        """
        self._model = model
        self._host = host
        self._client = ollama.AsyncClient(host=host, timeout=timeout)

    @property
    def model(self) -> str:
        return self._model

    async def is_available(self) -> bool:
        """True if the server answers a model listing request."""
        try:
            await self._client.list()
            return True
        except (ollama.ResponseError, httpx.HTTPError, ConnectionError) as e:
            logger.debug(f"Ollama not reachable at {self._host}: {e}")
            return False

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> Result[str, str]:
        """Generate a single completion.

        Args:
            system: System prompt.
            prompt: User prompt.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.

        Returns:
            Ok(str) with the generated text, or Err(str) if the request
            failed or produced nothing.
        """
        try:
            response = await self._client.generate(
                model=self._model,
                prompt=prompt,
                system=system,
                options={"temperature": temperature, "num_predict": max_tokens},
            )
        except ollama.ResponseError as e:
            return Err(f"Ollama error: {e.error}")
        except (httpx.HTTPError, ConnectionError) as e:
            return Err(f"Cannot reach Ollama at {self._host}: {e}")

        text = (response["response"] or "").strip()
        if not text:
            return Err("Empty response from Ollama")
        return Ok(text)
