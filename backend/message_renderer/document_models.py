"""Common document model definitions produced by the message parsing core."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union


class SpanKind(str, Enum):
    """Inline formatting kinds recognised inside block text."""

    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"
    LINK = "link"


@dataclass(frozen=True, slots=True)
class PlainText:
    """Unformatted run of text."""

    text: str


@dataclass(frozen=True, slots=True)
class FormattedText:
    """A formatted run of text.

    Parameters
    ----------
    kind:
        Formatting applied to ``content``.
    content:
        Visible text of the span. Never re-processed by later passes.
    href:
        Target of a link span, ``None`` for every other kind.
    external:
        Set on links to signal that the presentation layer should treat
        activation as external navigation.
    """

    kind: SpanKind
    content: str
    href: str | None = None
    external: bool = False


InlineSpan = Union[PlainText, FormattedText]

HeadingLevel = Literal[1, 2, 3]


@dataclass(frozen=True, slots=True)
class Heading:
    level: HeadingLevel
    text: list[InlineSpan]
    key: int = field(default=0, compare=False)
    type: Literal["heading"] = field(default="heading", init=False)


@dataclass(frozen=True, slots=True)
class ListBlock:
    items: list[list[InlineSpan]]
    key: int = field(default=0, compare=False)
    type: Literal["list"] = field(default="list", init=False)


@dataclass(frozen=True, slots=True)
class TableBlock:
    """A pipe table; every cell is inline formatted."""

    headers: list[list[InlineSpan]]
    rows: list[list[list[InlineSpan]]]
    key: int = field(default=0, compare=False)
    type: Literal["table"] = field(default="table", init=False)


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced code; ``lines`` are kept verbatim."""

    language: str
    lines: list[str]
    key: int = field(default=0, compare=False)
    type: Literal["code"] = field(default="code", init=False)

    @property
    def code(self) -> str:
        """Text handed to a "copy" action."""

        return "\n".join(self.lines)

    @property
    def label(self) -> str:
        return self.language or "code"


@dataclass(frozen=True, slots=True)
class Paragraph:
    text: list[InlineSpan]
    key: int = field(default=0, compare=False)
    type: Literal["paragraph"] = field(default="paragraph", init=False)


@dataclass(frozen=True, slots=True)
class Divider:
    key: int = field(default=0, compare=False)
    type: Literal["divider"] = field(default="divider", init=False)


@dataclass(frozen=True, slots=True)
class Spacer:
    """An intentional blank-line gap."""

    key: int = field(default=0, compare=False)
    type: Literal["spacer"] = field(default="spacer", init=False)


Block = Union[Heading, ListBlock, TableBlock, CodeBlock, Paragraph, Divider, Spacer]
BlockType = Literal["heading", "list", "table", "code", "paragraph", "divider", "spacer"]


@dataclass(frozen=True, slots=True)
class ThinkingSection:
    """Reasoning side-channel; ``is_complete`` is false while the closing tag is missing."""

    text: str
    is_complete: bool


@dataclass(frozen=True, slots=True)
class RenderedMessage:
    """Structured document handed to the presentation layer."""

    blocks: list[Block] = field(default_factory=list)
    thinking: ThinkingSection | None = None
    suggestions: list[str] = field(default_factory=list)


__all__ = [
    "Block",
    "BlockType",
    "CodeBlock",
    "Divider",
    "FormattedText",
    "Heading",
    "HeadingLevel",
    "InlineSpan",
    "ListBlock",
    "Paragraph",
    "PlainText",
    "RenderedMessage",
    "Spacer",
    "SpanKind",
    "TableBlock",
    "ThinkingSection",
]
