"""Client for OpenAI-compatible chat completion APIs."""

import logging

import httpx

from taskflow.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)


def _normalize_base_url(base_url: str) -> str:
    return base_url.strip().rstrip("/")


class OpenAIClient:
    """Completion client for ``POST {base_url}/chat/completions``.

    One request per call, no retries.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-3.5-turbo",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = _normalize_base_url(base_url)
        self._timeout = timeout
        self._transport = transport

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> Result[str, str]:
        """Send one system + user message pair and return the reply text."""
        if not self._api_key:
            return Err("OpenAI API key is not configured")

        payload = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    f"{self._base_url}/chat/completions", json=payload, headers=headers
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            return Err(f"Completion API returned {e.response.status_code}")
        except httpx.HTTPError as e:
            return Err(f"Completion request failed: {e}")
        except ValueError as e:
            return Err(f"Completion API returned invalid JSON: {e}")

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning(f"Unexpected completion payload: {str(data)[:200]}")
            return Err("Malformed completion payload")

        if not content:
            return Err("Empty response from completion API")
        return Ok(content.strip())
