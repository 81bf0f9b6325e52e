"""Text normalization helpers shared by the matcher and the extractor."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(value: str) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    trimmed = value.strip()
    if not trimmed:
        return ""
    return _WHITESPACE_RE.sub(" ", trimmed)


def fold_text(value: str) -> str:
    """Normalize whitespace and lower-case for case-insensitive comparison."""
    return normalize_text(value).lower()


def tokenize(value: str) -> list[str]:
    """Split folded text into whitespace-delimited tokens."""
    folded = fold_text(value)
    if not folded:
        return []
    return folded.split(" ")
