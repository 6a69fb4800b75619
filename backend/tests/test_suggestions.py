"""Unit tests for suggestion splitting."""

from __future__ import annotations

import pytest

from message_renderer.suggestions import split_suggestions


def test_markers_and_blank_lines_are_removed() -> None:
    assert split_suggestions("- A\n2. B\n\nC") == ["A", "B", "C"]


@pytest.mark.parametrize("raw", [None, "", "\n  \n", "-\n3.\n--"])
def test_nothing_left_after_stripping(raw: str | None) -> None:
    assert split_suggestions(raw) == []


def test_inner_text_is_preserved() -> None:
    assert split_suggestions("  10.   What about v2.0?  \r\n-Next step") == [
        "What about v2.0?",
        "Next step",
    ]
