"""Splitting of the suggestions side-channel into discrete entries."""
from __future__ import annotations

import re

_MARKER_RE = re.compile(r"^[-\d.]+\s*")


def split_suggestions(raw: str | None) -> list[str]:
    """Return one suggestion per non-blank line, without its list marker."""

    if not raw:
        return []
    suggestions: list[str] = []
    for line in raw.splitlines():
        if not line.strip():
            continue
        cleaned = _MARKER_RE.sub("", line.strip(), count=1).strip()
        if cleaned:
            suggestions.append(cleaned)
    return suggestions


__all__ = ["split_suggestions"]
