"""Line-oriented parser turning message text into typed blocks."""
from __future__ import annotations

import logging
import re

from .document_models import (
    Block,
    CodeBlock,
    Divider,
    Heading,
    InlineSpan,
    ListBlock,
    Paragraph,
    Spacer,
    TableBlock,
)
from .inline_formatter import format_inline

logger = logging.getLogger(__name__)

FENCE = "```"
DIVIDERS = frozenset({"---", "***"})

_HEADING_RE = re.compile(r"^(#{1,3})\s+(.+)")
_LIST_ITEM_RE = re.compile(r"^[-•]\s+(.+)")


def _is_table_row(line: str) -> bool:
    """Return ``True`` for lines that look like a pipe table row."""

    if "|" not in line:
        return False
    segments = [segment for segment in line.split("|") if segment]
    if len(segments) > 1:
        return True
    return len(line) > 1 and line.startswith("|") and line.endswith("|")


def _split_cells(line: str) -> list[str]:
    """Split a table row on ``|`` and drop the empty edge segments."""

    cells = [cell.strip() for cell in line.split("|")]
    if cells and not cells[0]:
        cells = cells[1:]
    if cells and not cells[-1]:
        cells = cells[:-1]
    return cells


class _BlockCollector:
    """Mutable scan state for one :func:`parse_blocks` call."""

    def __init__(self) -> None:
        self.blocks: list[Block] = []
        self.pending_list: list[list[InlineSpan]] = []
        self.pending_table: list[str] = []
        self.code_lines: list[str] = []
        self.code_language = ""
        self.in_code = False

    @property
    def next_key(self) -> int:
        return len(self.blocks)

    def emit(self, block: Block) -> None:
        self.blocks.append(block)

    def flush_list(self) -> None:
        if self.pending_list:
            self.emit(ListBlock(items=self.pending_list, key=self.next_key))
            self.pending_list = []

    def flush_table(self) -> None:
        if len(self.pending_table) >= 2:
            header_line, _separator, *body_lines = self.pending_table
            headers = [format_inline(cell) for cell in _split_cells(header_line)]
            rows = [
                [format_inline(cell) for cell in _split_cells(line)]
                for line in body_lines
            ]
            self.emit(TableBlock(headers=headers, rows=rows, key=self.next_key))
        elif self.pending_table:
            logger.debug("Dropping table fragment with %s line(s)", len(self.pending_table))
        self.pending_table = []

    def flush_pending(self) -> None:
        self.flush_list()
        self.flush_table()

    def flush_code(self) -> None:
        if self.code_lines:
            self.emit(CodeBlock(language=self.code_language, lines=self.code_lines, key=self.next_key))
        self.code_lines = []
        self.code_language = ""

    def feed(self, raw_line: str) -> None:
        line = raw_line[:-1] if raw_line.endswith("\r") else raw_line
        trimmed = line.strip()

        if trimmed.startswith(FENCE):
            if self.in_code:
                self.in_code = False
                self.flush_code()
            else:
                self.flush_pending()
                self.in_code = True
                self.code_language = trimmed[len(FENCE) :].strip()
            return

        if self.in_code:
            self.code_lines.append(line)
            return

        heading = _HEADING_RE.match(trimmed)
        if heading:
            self.flush_pending()
            level = len(heading.group(1))
            self.emit(Heading(level=level, text=format_inline(heading.group(2)), key=self.next_key))
            return

        if trimmed in DIVIDERS:
            self.flush_pending()
            self.emit(Divider(key=self.next_key))
            return

        item = _LIST_ITEM_RE.match(trimmed)
        if item:
            self.flush_table()
            self.pending_list.append(format_inline(item.group(1)))
            return

        if _is_table_row(trimmed):
            self.flush_list()
            self.pending_table.append(trimmed)
            return

        self.flush_pending()
        if trimmed:
            self.emit(Paragraph(text=format_inline(trimmed), key=self.next_key))
        else:
            self.emit(Spacer(key=self.next_key))

    def finish(self) -> list[Block]:
        self.flush_pending()
        if self.in_code:
            logger.debug("Unterminated code fence, keeping %s buffered line(s)", len(self.code_lines))
        self.flush_code()
        return self.blocks


def parse_blocks(text: str) -> list[Block]:
    """Parse ``text`` into an ordered list of blocks.

    Parsing never fails: malformed constructs degrade to plain blocks or are
    dropped. An empty string yields an empty list.
    """

    if not text:
        return []
    collector = _BlockCollector()
    for line in text.split("\n"):
        collector.feed(line)
    return collector.finish()


__all__ = ["parse_blocks"]
