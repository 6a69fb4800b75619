"""Extraction of the reasoning and suggestions side-channels from a raw stream."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .document_models import ThinkingSection

THINKING_OPEN = "<thinking>"
THINKING_CLOSE = "</thinking>"
SUGGESTIONS_OPEN = "<suggestions>"
SUGGESTIONS_CLOSE = "</suggestions>"


@dataclass(frozen=True, slots=True)
class TagPair:
    open: str
    close: str


THINKING_TAGS = TagPair(THINKING_OPEN, THINKING_CLOSE)
SUGGESTIONS_TAGS = TagPair(SUGGESTIONS_OPEN, SUGGESTIONS_CLOSE)


class ScanState(str, Enum):
    SEARCHING_OPEN = "searching_open"
    SEARCHING_CLOSE = "searching_close"


@dataclass(frozen=True, slots=True)
class TaggedRegion:
    """A side-channel region cut out of the text it was found in.

    Parameters
    ----------
    raw:
        Untrimmed text between the markers (or up to the end of the input when
        the closing marker has not arrived).
    offset:
        Index in the remaining text where the region used to start.
    closed:
        Whether the closing marker was found.
    """

    raw: str
    offset: int
    closed: bool


@dataclass(frozen=True, slots=True)
class ScanResult:
    state: ScanState
    remaining: str
    region: TaggedRegion | None = None


def scan_region(text: str, tags: TagPair) -> ScanResult:
    """Locate the first ``tags`` region in ``text``.

    The returned state is ``SEARCHING_OPEN`` when no opening marker exists,
    ``SEARCHING_CLOSE`` when the opening marker was found without a closing
    one after it, and ``SEARCHING_OPEN`` again once a full region was consumed.
    """

    start = text.find(tags.open)
    if start == -1:
        return ScanResult(state=ScanState.SEARCHING_OPEN, remaining=text)

    body_start = start + len(tags.open)
    end = text.find(tags.close, body_start)
    if end == -1:
        region = TaggedRegion(raw=text[body_start:], offset=start, closed=False)
        return ScanResult(state=ScanState.SEARCHING_CLOSE, remaining=text[:start], region=region)

    region = TaggedRegion(raw=text[body_start:end], offset=start, closed=True)
    remaining = text[:start] + text[end + len(tags.close) :]
    return ScanResult(state=ScanState.SEARCHING_OPEN, remaining=remaining, region=region)


@dataclass(frozen=True, slots=True)
class ExtractedSegments:
    """Main text plus the side-channels found in one raw stream."""

    main_text: str
    thinking: ThinkingSection | None = None
    suggestions_raw: str | None = None
    thinking_region: TaggedRegion | None = None
    suggestions_region: TaggedRegion | None = None
    held_back: str = ""

    def reassemble(self) -> str:
        """Rebuild the original input by reinserting the cut regions with their markers."""

        text = self.main_text + self.held_back
        if self.suggestions_region is not None:
            text = _reinsert(text, self.suggestions_region, SUGGESTIONS_TAGS)
        if self.thinking_region is not None:
            text = _reinsert(text, self.thinking_region, THINKING_TAGS)
        return text


def _reinsert(text: str, region: TaggedRegion, tags: TagPair) -> str:
    closing = tags.close if region.closed else ""
    return text[: region.offset] + tags.open + region.raw + closing + text[region.offset :]


def _partial_marker_length(text: str, markers: list[str]) -> int:
    """Length of the longest proper prefix of any marker that ``text`` ends with."""

    longest = 0
    for marker in markers:
        for size in range(len(marker) - 1, longest, -1):
            if text.endswith(marker[:size]):
                longest = size
                break
    return longest


def extract_segments(
    raw: str,
    *,
    streaming: bool = True,
    suggestions_enabled: bool = True,
) -> ExtractedSegments:
    """Split ``raw`` into main text, reasoning and suggestions.

    An unclosed reasoning region is surfaced with ``is_complete=False`` while
    ``streaming`` is true. An unclosed suggestions region is never emitted and
    stays in the main text. While streaming, a trailing fragment of an opening
    marker (``"<thi"``) is held back from the main text until it resolves.
    """

    if not raw:
        return ExtractedSegments(main_text="")

    thinking_scan = scan_region(raw, THINKING_TAGS)
    thinking: ThinkingSection | None = None
    if thinking_scan.region is not None:
        complete = thinking_scan.region.closed or not streaming
        thinking = ThinkingSection(text=thinking_scan.region.raw.strip(), is_complete=complete)

    main_text = thinking_scan.remaining
    suggestions_raw: str | None = None
    suggestions_region: TaggedRegion | None = None
    if suggestions_enabled:
        suggestions_scan = scan_region(main_text, SUGGESTIONS_TAGS)
        if suggestions_scan.state is ScanState.SEARCHING_OPEN and suggestions_scan.region is not None:
            suggestions_region = suggestions_scan.region
            suggestions_raw = suggestions_region.raw
            main_text = suggestions_scan.remaining

    held_back = ""
    if streaming and (thinking_scan.region is None or thinking_scan.region.closed):
        pending = [THINKING_OPEN] if thinking_scan.region is None else []
        if suggestions_enabled and suggestions_region is None:
            pending.append(SUGGESTIONS_OPEN)
        size = _partial_marker_length(main_text, pending)
        if size:
            main_text, held_back = main_text[:-size], main_text[-size:]

    return ExtractedSegments(
        main_text=main_text,
        held_back=held_back,
        thinking=thinking,
        suggestions_raw=suggestions_raw,
        thinking_region=thinking_scan.region,
        suggestions_region=suggestions_region,
    )


__all__ = [
    "ExtractedSegments",
    "SUGGESTIONS_CLOSE",
    "SUGGESTIONS_OPEN",
    "ScanState",
    "TaggedRegion",
    "THINKING_CLOSE",
    "THINKING_OPEN",
    "extract_segments",
    "scan_region",
]
