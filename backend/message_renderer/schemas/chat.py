"""Pydantic schemas for chat endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from message_renderer.schemas.render import RenderResponse


class LlmDebugInfo(BaseModel):
    """Diagnostic information about an LLM interaction."""

    prompt: list[dict[str, str]] = Field(..., description="Messages sent to the model")
    prompt_formatted: str = Field(..., description="Pretty-printed prompt")
    response: dict[str, Any] = Field(..., description="Full model response")
    response_formatted: str = Field(..., description="Pretty-printed model response")


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str = Field(min_length=1)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="Message from the user")
    history: list[ChatMessage] = Field(
        default_factory=list,
        description="Previous conversation turns used as context.",
    )
    system_prompt: str | None = Field(
        default=None,
        description="Overrides the configured system prompt when set.",
    )


class ChatResponse(BaseModel):
    reply: str = Field(..., description="Raw model reply")
    model: str = Field(..., description="Model that produced the reply")
    document: RenderResponse = Field(..., description="Reply parsed into blocks")
    debug: LlmDebugInfo | None = Field(default=None)


class HealthResponse(BaseModel):
    status: str = Field(..., description="Current API state")
    model: str = Field(..., description="Ollama model used by the service")
    ollama: str = Field(..., description="Ollama base URL")
    model_available: bool = Field(..., description="Whether the model is pulled in Ollama")
