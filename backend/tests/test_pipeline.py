"""End-to-end tests for rendering a single message string."""

from __future__ import annotations

from message_renderer.document_models import (
    CodeBlock,
    FormattedText,
    Paragraph,
    PlainText,
    SpanKind,
    TableBlock,
    ThinkingSection,
)
from message_renderer.pipeline import render_message


def test_inline_formatting_scenario() -> None:
    message = render_message("**Bold** and *italic* and `code`")

    assert message.blocks == [
        Paragraph(
            text=[
                FormattedText(kind=SpanKind.BOLD, content="Bold"),
                PlainText(" and "),
                FormattedText(kind=SpanKind.ITALIC, content="italic"),
                PlainText(" and "),
                FormattedText(kind=SpanKind.CODE, content="code"),
            ]
        )
    ]
    assert message.thinking is None
    assert message.suggestions == []


def test_code_block_scenario() -> None:
    message = render_message("```python\nprint(1)\n```")

    assert message.blocks == [CodeBlock(language="python", lines=["print(1)"])]


def test_streaming_thinking_scenario() -> None:
    message = render_message("<thinking>step1\nstep2")

    assert message.thinking == ThinkingSection(text="step1\nstep2", is_complete=False)
    assert message.blocks == []


def test_suggestions_scenario() -> None:
    message = render_message("<suggestions>- A\n2. B\n\nC</suggestions>")

    assert message.suggestions == ["A", "B", "C"]
    assert message.blocks == []


def test_table_scenario() -> None:
    message = render_message("| A | B |\n|---|---|\n| 1 | 2 |")

    assert message.blocks == [
        TableBlock(
            headers=[[PlainText("A")], [PlainText("B")]],
            rows=[[[PlainText("1")], [PlainText("2")]]],
        )
    ]


def test_lone_pipe_line_scenario() -> None:
    assert render_message("| lone |").blocks == []


def test_full_reply() -> None:
    raw = (
        "<thinking>User wants a list.</thinking>"
        "## Plan\n- read\n- write\n"
        "<suggestions>\n1. Why?\n2. How?\n</suggestions>"
    )
    message = render_message(raw, streaming=False)

    assert message.thinking == ThinkingSection(text="User wants a list.", is_complete=True)
    assert [block.type for block in message.blocks] == ["heading", "list", "spacer"]
    assert message.suggestions == ["Why?", "How?"]


def test_disabled_suggestions_render_markup_as_text() -> None:
    message = render_message("<suggestions>- A</suggestions>", suggestions_enabled=False)

    assert message.suggestions == []
    assert message.blocks == [Paragraph(text=[PlainText("<suggestions>- A</suggestions>")])]


def test_partial_marker_does_not_flash_as_body_text() -> None:
    assert render_message("Hi <thi").blocks == [Paragraph(text=[PlainText("Hi")])]
    assert render_message("Hi <thinking>x").blocks == [Paragraph(text=[PlainText("Hi")])]
