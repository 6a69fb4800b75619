"""Async client wrapper around the Ollama REST API."""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Iterable

import httpx

from message_renderer.exceptions import OllamaError

logger = logging.getLogger(__name__)


class OllamaClient:
    """Минимальный клиент для обращения к Ollama."""

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = 120.0,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    def _payload(self, messages: Iterable[dict[str, str]], *, stream: bool) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": list(messages),
            "stream": stream,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def chat(self, messages: Iterable[dict[str, str]]) -> dict[str, Any]:
        """Return the complete (non-streamed) chat response."""

        payload = self._payload(messages, stream=False)
        logger.debug("POST %s/api/chat model=%s", self.base_url, self.model)
        try:
            async with self._client() as client:
                response = await client.post(f"{self.base_url}/api/chat", json=payload)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            raise OllamaError(
                f"Ollama returned HTTP {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise OllamaError(f"Failed to connect to Ollama at {self.base_url}: {exc}") from exc

    async def stream_chat(self, messages: Iterable[dict[str, str]]) -> AsyncIterator[str]:
        """Yield content deltas of a streamed chat response."""

        payload = self._payload(messages, stream=True)
        logger.debug("POST %s/api/chat (stream) model=%s", self.base_url, self.model)
        try:
            async with self._client() as client:
                async with client.stream("POST", f"{self.base_url}/api/chat", json=payload) as response:
                    if response.status_code != 200:
                        body = await response.aread()
                        raise OllamaError(
                            f"Ollama returned HTTP {response.status_code}: {body.decode('utf-8', 'ignore')}"
                        )
                    async for line in response.aiter_lines():
                        delta = self._parse_stream_line(line)
                        if delta:
                            yield delta
        except httpx.HTTPError as exc:
            raise OllamaError(f"Failed to connect to Ollama at {self.base_url}: {exc}") from exc

    async def list_models(self) -> dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.get(f"{self.base_url}/api/tags")
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as exc:
            raise OllamaError(f"Failed to query Ollama tags: {exc}") from exc

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _parse_stream_line(line: str) -> str:
        """Extract the content delta from one NDJSON line of a streamed reply."""

        line = line.strip()
        if not line:
            return ""
        try:
            data = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Skipping malformed stream line: %s", line[:200])
            return ""
        if not isinstance(data, dict):
            return ""
        if data.get("error"):
            raise OllamaError(f"Ollama stream error: {data['error']}")
        message = data.get("message")
        if isinstance(message, dict):
            return str(message.get("content") or "")
        return str(data.get("response") or "")
