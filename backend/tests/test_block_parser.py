"""Unit tests for the line-oriented block parser."""

from __future__ import annotations

from message_renderer.block_parser import parse_blocks
from message_renderer.document_models import (
    CodeBlock,
    Divider,
    FormattedText,
    Heading,
    ListBlock,
    Paragraph,
    PlainText,
    Spacer,
    SpanKind,
    TableBlock,
)


def test_fenced_code_with_language() -> None:
    blocks = parse_blocks("```python\nprint(1)\n```")

    assert blocks == [CodeBlock(language="python", lines=["print(1)"])]


def test_code_lines_are_verbatim() -> None:
    blocks = parse_blocks("```\n  **not bold**\n\n# not a heading\n```")

    assert blocks == [CodeBlock(language="", lines=["  **not bold**", "", "# not a heading"])]
    assert blocks[0].label == "code"
    assert blocks[0].code == "  **not bold**\n\n# not a heading"


def test_unterminated_fence_keeps_buffered_lines() -> None:
    blocks = parse_blocks("Intro\n```js\nlet a = 1;")

    assert blocks == [
        Paragraph(text=[PlainText("Intro")]),
        CodeBlock(language="js", lines=["let a = 1;"]),
    ]


def test_empty_fence_pair_emits_nothing() -> None:
    assert parse_blocks("```\n```") == []


def test_table_with_header_separator_and_body() -> None:
    blocks = parse_blocks("| A | B |\n|---|---|\n| 1 | 2 |")

    assert blocks == [
        TableBlock(
            headers=[[PlainText("A")], [PlainText("B")]],
            rows=[[[PlainText("1")], [PlainText("2")]]],
        )
    ]


def test_table_keeps_inner_empty_cells() -> None:
    blocks = parse_blocks("| A | | C |\n|---|---|---|\n| 1 | | **3** |")

    table = blocks[0]
    assert isinstance(table, TableBlock)
    assert table.headers == [[PlainText("A")], [], [PlainText("C")]]
    assert table.rows == [[[PlainText("1")], [], [FormattedText(kind=SpanKind.BOLD, content="3")]]]


def test_single_pipe_line_is_dropped() -> None:
    assert parse_blocks("| lone |") == []


def test_prose_with_single_pipe_segment_is_a_paragraph() -> None:
    assert parse_blocks("a|") == [Paragraph(text=[PlainText("a|")])]


def test_headings_levels() -> None:
    blocks = parse_blocks("# One\n## Two\n### *Three*\n#### Four")

    assert blocks == [
        Heading(level=1, text=[PlainText("One")]),
        Heading(level=2, text=[PlainText("Two")]),
        Heading(level=3, text=[FormattedText(kind=SpanKind.ITALIC, content="Three")]),
        Paragraph(text=[PlainText("#### Four")]),
    ]


def test_list_items_are_grouped_and_flushed() -> None:
    blocks = parse_blocks("- one\n• **two**\n---\n- three")

    assert blocks == [
        ListBlock(items=[[PlainText("one")], [FormattedText(kind=SpanKind.BOLD, content="two")]]),
        Divider(),
        ListBlock(items=[[PlainText("three")]]),
    ]


def test_blank_line_emits_spacer_and_trims_paragraph() -> None:
    blocks = parse_blocks("  first  \r\n\nsecond")

    assert blocks == [
        Paragraph(text=[PlainText("first")]),
        Spacer(),
        Paragraph(text=[PlainText("second")]),
    ]


def test_list_then_table_flushes_list() -> None:
    blocks = parse_blocks("- item\n| h1 | h2 |\n| -- | -- |")

    assert [block.type for block in blocks] == ["list", "table"]


def test_keys_follow_block_order() -> None:
    blocks = parse_blocks("# T\n\ntext\n***\n- a")

    assert [block.key for block in blocks] == [0, 1, 2, 3, 4]
    assert [block.type for block in blocks] == ["heading", "spacer", "paragraph", "divider", "list"]


def test_empty_text_has_no_blocks() -> None:
    assert parse_blocks("") == []


def test_parsing_is_idempotent() -> None:
    text = "# Title\n- a\n- b\n\n| x | y |\n|---|---|\n| 1 | 2 |\n```sh\nls\n```\nEnd *here*"

    assert parse_blocks(text) == parse_blocks(text)


def test_every_buffered_body_row_becomes_a_table_row() -> None:
    blocks = parse_blocks("| a | b |\n|---|---|\n| 1 | 2 |\n| only |")

    assert blocks == [
        TableBlock(
            headers=[[PlainText("a")], [PlainText("b")]],
            rows=[
                [[PlainText("1")], [PlainText("2")]],
                [[PlainText("only")]],
            ],
        )
    ]
