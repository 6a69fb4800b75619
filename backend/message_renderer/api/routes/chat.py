"""Chat endpoints returning model replies as rendered documents."""

from __future__ import annotations

import json
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from message_renderer.api.deps import get_app_settings, get_ollama_client
from message_renderer.core.config import Settings
from message_renderer.document_builder import build_frame_response, build_render_response
from message_renderer.exceptions import OllamaError
from message_renderer.llm_utils import build_debug_info, build_messages, extract_reply
from message_renderer.pipeline import render_message
from message_renderer.reveal import reveal_stream
from message_renderer.schemas.chat import ChatRequest, ChatResponse
from message_renderer.services.ollama_client import OllamaClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _messages_for(payload: ChatRequest, settings: Settings) -> list[dict[str, str]]:
    system_prompt = payload.system_prompt if payload.system_prompt is not None else settings.chat_system_prompt
    return build_messages(payload.message, payload.history, system_prompt)


@router.post("", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    client: OllamaClient = Depends(get_ollama_client),
    settings: Settings = Depends(get_app_settings),
) -> ChatResponse:
    """Relay the conversation to Ollama and render the complete reply."""

    messages = _messages_for(payload, settings)
    try:
        raw = await client.chat(messages)
    except OllamaError as exc:
        logger.error("Error talking to Ollama: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    debug = build_debug_info(messages, raw)
    logger.debug("LLM prompt: %s", debug.prompt_formatted)
    logger.debug("LLM response: %s", debug.response_formatted)

    reply = extract_reply(raw)
    message = render_message(reply, streaming=False, suggestions_enabled=settings.enable_suggestions)
    return ChatResponse(
        reply=reply,
        model=client.model,
        document=build_render_response(message),
        debug=debug,
    )


@router.post("/stream")
async def chat_stream(
    payload: ChatRequest,
    client: OllamaClient = Depends(get_ollama_client),
    settings: Settings = Depends(get_app_settings),
) -> StreamingResponse:
    """Stream the reply as NDJSON reveal frames."""

    messages = _messages_for(payload, settings)

    async def frames() -> AsyncIterator[str]:
        stream = reveal_stream(
            client.stream_chat(messages),
            chunk_size=settings.reveal_chunk_size,
            interval=settings.reveal_interval,
            suggestions_enabled=settings.enable_suggestions,
        )
        try:
            async for frame in stream:
                yield build_frame_response(frame).model_dump_json() + "\n"
        except OllamaError as exc:
            logger.error("Ollama stream failed: %s", exc)
            yield json.dumps({"error": str(exc)}, ensure_ascii=False) + "\n"
        finally:
            await stream.aclose()

    return StreamingResponse(frames(), media_type="application/x-ndjson")
