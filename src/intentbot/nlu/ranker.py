"""Cheap candidate ranking by literal word overlap.

The ranker is intentionally looser than the anchored extractor: a pattern is a
candidate when its literal text appears anywhere in the input, so partial
phrasings still surface and the strict extractor can refine them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from intentbot.nlu.patterns import CompiledPattern, compile_pattern
from intentbot.nlu.text import fold_text, tokenize

if TYPE_CHECKING:
    from intentbot.catalog.store import CatalogSnapshot


@dataclass(frozen=True)
class MatchCandidate:
    """A pattern that plausibly applies to the input."""

    intent_id: str
    pattern: str
    confidence: float


def pattern_coincides(text: str, pattern: CompiledPattern) -> bool:
    """Check whether the pattern's literal segments occur in the text in order.

    For a pattern with a single literal segment this is a plain substring
    test. A pattern with no literal text never coincides.
    """
    if not pattern.literals:
        return False

    folded = fold_text(text)
    position = 0
    for literal in pattern.literals:
        found = folded.find(literal, position)
        if found == -1:
            return False
        position = found + len(literal)
    return True


def score_pattern(text: str, pattern: CompiledPattern | str) -> float:
    """Fraction of the pattern's literal words present as whole input tokens.

    Args:
        text: User input.
        pattern: Compiled pattern or template string.

    Returns:
        Score in [0, 1]; 0 when the pattern has no literal words.
    """
    if isinstance(pattern, str):
        pattern = compile_pattern(pattern)

    pattern_words = [
        word for literal in pattern.literals for word in literal.split(" ")
    ]
    if not pattern_words:
        return 0.0

    text_words = set(tokenize(text))
    matched = sum(1 for word in pattern_words if word in text_words)
    return matched / len(pattern_words)


def find_matching_intents(
    text: str,
    snapshot: "CatalogSnapshot",  # noqa: UP037
) -> list[MatchCandidate]:
    """Rank every catalog pattern that coincides with the input.

    Args:
        text: User input.
        snapshot: Catalog view to scan.

    Returns:
        Candidates sorted by descending confidence. Ties keep catalog order.
    """
    if not fold_text(text):
        return []

    candidates = [
        MatchCandidate(
            intent_id=intent.id,
            pattern=pattern.source,
            confidence=score_pattern(text, pattern),
        )
        for intent, pattern in snapshot.iter_patterns()
        if pattern_coincides(text, pattern)
    ]
    return sorted(candidates, key=lambda candidate: -candidate.confidence)


def best_match(
    text: str,
    snapshot: "CatalogSnapshot",  # noqa: UP037
    min_confidence: float = 0.0,
) -> MatchCandidate | None:
    """Return the top candidate if it reaches ``min_confidence``."""
    candidates = find_matching_intents(text, snapshot)
    if not candidates or candidates[0].confidence < min_confidence:
        return None
    return candidates[0]
