"""Endpoint exposing the message parsing core."""

from __future__ import annotations

from fastapi import APIRouter

from message_renderer.document_builder import build_render_response
from message_renderer.pipeline import render_message
from message_renderer.schemas.render import RenderRequest, RenderResponse

router = APIRouter(prefix="/render", tags=["render"])


@router.post("", response_model=RenderResponse)
def render(payload: RenderRequest) -> RenderResponse:
    """Parse raw model output into blocks, reasoning and suggestions."""

    message = render_message(
        payload.text,
        streaming=payload.streaming,
        suggestions_enabled=payload.suggestions_enabled,
    )
    return build_render_response(message)
