"""Single entry point running extraction, block parsing and suggestion splitting."""
from __future__ import annotations

from .block_parser import parse_blocks
from .document_models import RenderedMessage
from .segment_extractor import extract_segments
from .suggestions import split_suggestions


def render_message(
    text: str,
    *,
    streaming: bool = True,
    suggestions_enabled: bool = True,
) -> RenderedMessage:
    """Return the structured document for ``text``.

    ``streaming`` marks the text as still growing; ``suggestions_enabled``
    controls whether the suggestions markup is extracted or left in the body.
    """

    segments = extract_segments(text, streaming=streaming, suggestions_enabled=suggestions_enabled)
    return RenderedMessage(
        blocks=parse_blocks(segments.main_text),
        thinking=segments.thinking,
        suggestions=split_suggestions(segments.suggestions_raw),
    )


__all__ = ["render_message"]
