"""Unit tests for the Ollama client using a mocked transport."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from message_renderer.exceptions import OllamaError
from message_renderer.services.ollama_client import OllamaClient


def _client(handler) -> OllamaClient:
    return OllamaClient(
        base_url="http://ollama.test/",
        model="dummy",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def test_chat_posts_non_streaming_payload() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"message": {"role": "assistant", "content": "hi"}})

    data = asyncio.run(_client(handler).chat([{"role": "user", "content": "hello"}]))

    assert data["message"]["content"] == "hi"
    assert seen["url"] == "http://ollama.test/api/chat"
    assert seen["body"] == {
        "model": "dummy",
        "messages": [{"role": "user", "content": "hello"}],
        "stream": False,
    }


def test_chat_wraps_http_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="boom")

    with pytest.raises(OllamaError, match="HTTP 500"):
        asyncio.run(_client(handler).chat([]))


def test_stream_chat_yields_content_deltas() -> None:
    lines = [
        {"message": {"role": "assistant", "content": "Hel"}, "done": False},
        {"message": {"role": "assistant", "content": "lo"}, "done": False},
        {"message": {"role": "assistant", "content": ""}, "done": True},
    ]
    body = "\n".join(json.dumps(line) for line in lines) + "\nnot json\n"

    def handler(request: httpx.Request) -> httpx.Response:
        assert json.loads(request.content)["stream"] is True
        return httpx.Response(200, text=body)

    async def collect() -> list[str]:
        return [delta async for delta in _client(handler).stream_chat([])]

    assert asyncio.run(collect()) == ["Hel", "lo"]


def test_stream_chat_raises_on_error_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=json.dumps({"error": "model not found"}) + "\n")

    async def collect() -> list[str]:
        return [delta async for delta in _client(handler).stream_chat([])]

    with pytest.raises(OllamaError, match="model not found"):
        asyncio.run(collect())


def test_stream_chat_raises_on_bad_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="missing")

    async def collect() -> list[str]:
        return [delta async for delta in _client(handler).stream_chat([])]

    with pytest.raises(OllamaError, match="HTTP 404"):
        asyncio.run(collect())


def test_list_models_wraps_connection_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(OllamaError):
        asyncio.run(_client(handler).list_models())
