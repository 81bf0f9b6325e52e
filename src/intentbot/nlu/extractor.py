"""Positional slot extraction from compiled intent patterns."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from intentbot.nlu.patterns import CompiledPattern
from intentbot.nlu.validator import validate_parameters

if TYPE_CHECKING:
    from intentbot.catalog.intent import IntentDefinition


def match_first(
    text: str,
    patterns: Iterable[CompiledPattern],
) -> tuple[CompiledPattern, dict[str, str]] | None:
    """Return the first pattern that matches and its captured slots.

    Patterns are tried in order; later patterns are not evaluated once one
    matches. When a slot name occurs more than once in a template, the last
    occurrence's capture is kept.
    """
    candidate = text.strip()
    if not candidate:
        return None

    for pattern in patterns:
        match = pattern.regex.fullmatch(candidate)
        if match is None:
            continue

        slots: dict[str, str] = {}
        for name, value in zip(pattern.slot_names, match.groups()):
            value = value.strip() if value else ""
            if value:
                slots[name] = value
            else:
                slots.pop(name, None)
        return pattern, slots

    return None


def extract_slots(text: str, patterns: Iterable[CompiledPattern]) -> dict[str, str]:
    """Extract raw slot values using the first matching pattern.

    Args:
        text: User input. Matching is case-insensitive; captured values keep
            their original casing.
        patterns: Compiled patterns in declared order.

    Returns:
        Slot name to raw captured text. Empty when no pattern matches.
    """
    result = match_first(text, patterns)
    if result is None:
        return {}
    return result[1]


def extract_parameters(
    text: str,
    intent: "IntentDefinition",  # noqa: UP037
    patterns: Iterable[CompiledPattern],
) -> dict[str, Any]:
    """Extract and coerce parameters for an intent."""
    return validate_parameters(extract_slots(text, patterns), intent.parameters)
