"""Helper utilities for working with Ollama chat requests and responses."""
from __future__ import annotations

import json
from typing import Any, Iterable

from .schemas.chat import ChatMessage, LlmDebugInfo


def build_messages(
    message: str,
    history: Iterable[ChatMessage] = (),
    system_prompt: str | None = None,
) -> list[dict[str, str]]:
    """Return the Ollama message list for one user turn."""

    messages: list[dict[str, str]] = []
    if system_prompt and system_prompt.strip():
        messages.append({"role": "system", "content": system_prompt.strip()})
    messages.extend(
        {"role": item.role, "content": item.content}
        for item in history
        if item.content.strip()
    )
    messages.append({"role": "user", "content": message})
    return messages


def extract_reply(data: dict[str, Any]) -> str:
    """Return the assistant text of an Ollama ``/api/chat`` response.

    Only ``message.content`` is read; anything else yields an empty reply.
    """

    message = data.get("message") if isinstance(data, dict) else None
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content.strip() if isinstance(content, str) else ""


def _pretty(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, indent=2)


def build_debug_info(messages: list[dict[str, str]], raw: dict[str, Any]) -> LlmDebugInfo:
    """Bundle the prompt and raw model response for debug logging."""

    return LlmDebugInfo(
        prompt=messages,
        prompt_formatted=_pretty(messages),
        response=raw,
        response_formatted=_pretty(raw),
    )


__all__ = ["build_debug_info", "build_messages", "extract_reply"]
