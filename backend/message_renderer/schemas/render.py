"""Pydantic schemas describing a rendered message."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class SpanSchema(BaseModel):
    kind: Literal["text", "bold", "italic", "code", "link"] = Field(..., description="Formatting of the span")
    content: str = Field(..., description="Visible text")
    href: str | None = Field(default=None, description="Link target, only set for links")
    external: bool = Field(default=False, description="Open the link as external navigation")


Spans = list[SpanSchema]


class HeadingSchema(BaseModel):
    type: Literal["heading"] = "heading"
    key: int
    level: int = Field(..., ge=1, le=3)
    text: Spans


class ListSchema(BaseModel):
    type: Literal["list"] = "list"
    key: int
    items: list[Spans]


class TableSchema(BaseModel):
    type: Literal["table"] = "table"
    key: int
    headers: list[Spans]
    rows: list[list[Spans]]


class CodeSchema(BaseModel):
    type: Literal["code"] = "code"
    key: int
    language: str = Field(default="", description="Language tag after the opening fence")
    label: str = Field(..., description="Language or 'code' when no tag was given")
    lines: list[str] = Field(default_factory=list, description="Verbatim code lines")


class ParagraphSchema(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    key: int
    text: Spans


class DividerSchema(BaseModel):
    type: Literal["divider"] = "divider"
    key: int


class SpacerSchema(BaseModel):
    type: Literal["spacer"] = "spacer"
    key: int


BlockSchema = Annotated[
    Union[
        HeadingSchema,
        ListSchema,
        TableSchema,
        CodeSchema,
        ParagraphSchema,
        DividerSchema,
        SpacerSchema,
    ],
    Field(discriminator="type"),
]


class ThinkingSchema(BaseModel):
    text: str = Field(..., description="Reasoning trace")
    is_complete: bool = Field(..., description="False while the closing tag has not arrived")


class RenderRequest(BaseModel):
    text: str = Field(..., description="Raw model output")
    streaming: bool = Field(default=False, description="Treat the text as still growing")
    suggestions_enabled: bool = Field(default=True, description="Extract the suggestions side-channel")


class RenderResponse(BaseModel):
    blocks: list[BlockSchema] = Field(default_factory=list)
    thinking: ThinkingSchema | None = Field(default=None)
    suggestions: list[str] = Field(default_factory=list)


class RevealFrameSchema(BaseModel):
    visible_length: int = Field(..., ge=0, description="Number of revealed characters")
    done: bool = Field(..., description="True on the last frame")
    document: RenderResponse
