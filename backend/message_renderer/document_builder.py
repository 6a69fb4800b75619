"""Helpers for converting parser results into API schemas."""
from __future__ import annotations

from .document_models import (
    Block,
    CodeBlock,
    Divider,
    Heading,
    InlineSpan,
    ListBlock,
    Paragraph,
    PlainText,
    RenderedMessage,
    TableBlock,
)
from .reveal import RevealFrame
from .schemas.render import (
    BlockSchema,
    CodeSchema,
    DividerSchema,
    HeadingSchema,
    ListSchema,
    ParagraphSchema,
    RenderResponse,
    RevealFrameSchema,
    SpacerSchema,
    SpanSchema,
    TableSchema,
    ThinkingSchema,
)


def _make_span(span: InlineSpan) -> SpanSchema:
    if isinstance(span, PlainText):
        return SpanSchema(kind="text", content=span.text)
    return SpanSchema(kind=span.kind.value, content=span.content, href=span.href, external=span.external)


def _make_spans(spans: list[InlineSpan]) -> list[SpanSchema]:
    return [_make_span(span) for span in spans]


def _make_block(block: Block) -> BlockSchema:
    if isinstance(block, Heading):
        return HeadingSchema(key=block.key, level=block.level, text=_make_spans(block.text))
    if isinstance(block, ListBlock):
        return ListSchema(key=block.key, items=[_make_spans(item) for item in block.items])
    if isinstance(block, TableBlock):
        return TableSchema(
            key=block.key,
            headers=[_make_spans(cell) for cell in block.headers],
            rows=[[_make_spans(cell) for cell in row] for row in block.rows],
        )
    if isinstance(block, CodeBlock):
        return CodeSchema(key=block.key, language=block.language, label=block.label, lines=list(block.lines))
    if isinstance(block, Paragraph):
        return ParagraphSchema(key=block.key, text=_make_spans(block.text))
    if isinstance(block, Divider):
        return DividerSchema(key=block.key)
    return SpacerSchema(key=block.key)


def build_render_response(message: RenderedMessage) -> RenderResponse:
    """Convert a :class:`RenderedMessage` to an API response schema."""

    thinking = None
    if message.thinking is not None:
        thinking = ThinkingSchema(text=message.thinking.text, is_complete=message.thinking.is_complete)
    return RenderResponse(
        blocks=[_make_block(block) for block in message.blocks],
        thinking=thinking,
        suggestions=list(message.suggestions),
    )


def build_frame_response(frame: RevealFrame) -> RevealFrameSchema:
    return RevealFrameSchema(
        visible_length=frame.state.visible_prefix_length,
        done=frame.state.done,
        document=build_render_response(frame.message),
    )


__all__ = ["build_frame_response", "build_render_response"]
