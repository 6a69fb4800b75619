"""Inline span formatting for a single line or table cell."""
from __future__ import annotations

import re
from typing import Callable, Iterable

from .document_models import FormattedText, InlineSpan, PlainText, SpanKind

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"(?<!\*)\*(?!\*)([^*]+)\*(?!\*)")
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

SpanFactory = Callable[[re.Match[str]], FormattedText]


def _bold(match: re.Match[str]) -> FormattedText:
    return FormattedText(kind=SpanKind.BOLD, content=match.group(1))


def _italic(match: re.Match[str]) -> FormattedText:
    return FormattedText(kind=SpanKind.ITALIC, content=match.group(1))


def _code(match: re.Match[str]) -> FormattedText:
    return FormattedText(kind=SpanKind.CODE, content=match.group(1))


def _link(match: re.Match[str]) -> FormattedText:
    return FormattedText(
        kind=SpanKind.LINK,
        content=spans_to_text(format_inline(match.group(1))),
        href=match.group(2),
        external=True,
    )


# Bold must run before italic so a lone ``*`` of a ``**`` pair is never taken
# as an italic delimiter.
_EMPHASIS_PASSES: tuple[tuple[re.Pattern[str], SpanFactory], ...] = (
    (_BOLD_RE, _bold),
    (_ITALIC_RE, _italic),
)


def _split_plain(text: str, pattern: re.Pattern[str], factory: SpanFactory) -> list[InlineSpan]:
    """Split one plain run into plain and formatted pieces."""

    spans: list[InlineSpan] = []
    cursor = 0
    for match in pattern.finditer(text):
        if match.start() > cursor:
            spans.append(PlainText(text[cursor : match.start()]))
        spans.append(factory(match))
        cursor = match.end()
    if cursor < len(text):
        spans.append(PlainText(text[cursor:]))
    return spans


def _apply_pass(
    spans: Iterable[InlineSpan], pattern: re.Pattern[str], factory: SpanFactory
) -> list[InlineSpan]:
    result: list[InlineSpan] = []
    for span in spans:
        if isinstance(span, PlainText):
            result.extend(_split_plain(span.text, pattern, factory))
        else:
            result.append(span)
    return result


def _format_emphasis(text: str) -> list[InlineSpan]:
    spans: list[InlineSpan] = [PlainText(text)]
    for pattern, factory in _EMPHASIS_PASSES:
        spans = _apply_pass(spans, pattern, factory)
    return spans


def _encloses(outer: re.Match[str], inner: re.Match[str]) -> bool:
    return outer.start() <= inner.start() and inner.end() <= outer.end()


def _overlaps(first: re.Match[str], second: re.Match[str]) -> bool:
    return first.start() < second.end() and second.start() < first.end()


def _protected_matches(text: str) -> list[tuple[re.Match[str], SpanFactory]]:
    """Return the code and link matches that emphasis passes must not touch.

    A link wins over the code spans inside its label. A link that starts or
    ends inside a code span is not a link.
    """

    codes = list(_CODE_RE.finditer(text))
    links = [
        link
        for link in _LINK_RE.finditer(text)
        if all(_encloses(link, code) or not _overlaps(link, code) for code in codes)
    ]
    kept: list[tuple[re.Match[str], SpanFactory]] = [(link, _link) for link in links]
    kept.extend(
        (code, _code) for code in codes if not any(_encloses(link, code) for link in links)
    )
    return sorted(kept, key=lambda item: item[0].start())


def format_inline(text: str) -> list[InlineSpan]:
    """Return the inline spans for ``text``.

    Code spans and links are located on the whole line first; bold and italic
    then only apply to the text between them, so code content is never
    re-formatted. Unmatched markup stays literal.
    """

    if not text:
        return []
    spans: list[InlineSpan] = []
    cursor = 0
    for match, factory in _protected_matches(text):
        if match.start() > cursor:
            spans.extend(_format_emphasis(text[cursor : match.start()]))
        spans.append(factory(match))
        cursor = match.end()
    if cursor < len(text):
        spans.extend(_format_emphasis(text[cursor:]))
    return spans


def spans_to_text(spans: Iterable[InlineSpan]) -> str:
    """Return the visible text of ``spans`` without any markup."""

    return "".join(span.text if isinstance(span, PlainText) else span.content for span in spans)


__all__ = ["format_inline", "spans_to_text"]
