"""Compile intent templates into anchored regular expressions.

A template mixes literal text with ``{slot}`` placeholders::

    "precio de {nombre_producto} (USD)"

Literal text is escaped and its whitespace runs are relaxed to ``\\s+``.
Placeholders become capture groups: the trailing one is greedy to the end of
the input, every other one is non-greedy so it stops at the earliest point
where the following literal can match.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from intentbot.nlu.text import fold_text

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_IDENTIFIER_RE = re.compile(r"^[^\W\d]\w*$")

_GREEDY_TO_END = "(.+)"
_NON_GREEDY = "(.+?)"


class PatternCompilationError(ValueError):
    """Raised when a template is malformed."""

    def __init__(self, template: str, reason: str) -> None:
        super().__init__(f"Invalid pattern {template!r}: {reason}")
        self.template = template
        self.reason = reason


@dataclass(frozen=True)
class Literal:
    """Fixed text between placeholders."""

    text: str


@dataclass(frozen=True)
class Placeholder:
    """A ``{name}`` slot reference."""

    name: str


Segment = Literal | Placeholder


@dataclass(frozen=True)
class CompiledPattern:
    """Anchored matcher derived from a template.

    Attributes:
        source: The template as declared in the catalog.
        regex: Compiled expression, evaluated with ``fullmatch``.
        slot_names: Slot names in capture order (duplicates kept).
        literals: Normalized, lower-cased literal segments in order.
        ambiguous: True when two placeholders touch with no literal between.
    """

    source: str
    regex: re.Pattern[str]
    slot_names: tuple[str, ...]
    literals: tuple[str, ...]
    ambiguous: bool = False

    def match(self, text: str) -> re.Match[str] | None:
        """Match trimmed text against the whole pattern."""
        return self.regex.fullmatch(text.strip())

    def matches(self, text: str) -> bool:
        return self.match(text) is not None

    @property
    def has_slots(self) -> bool:
        return bool(self.slot_names)


def split_template(template: str) -> list[Segment]:
    """Split a template into literal and placeholder segments.

    Raises:
        PatternCompilationError: On unbalanced braces or bad slot names.
    """
    segments: list[Segment] = []
    buffer: list[str] = []
    index = 0

    while index < len(template):
        char = template[index]
        if char == "}":
            raise PatternCompilationError(template, f"unmatched '}}' at {index}")
        if char != "{":
            buffer.append(char)
            index += 1
            continue

        end = template.find("}", index + 1)
        if end == -1:
            raise PatternCompilationError(template, f"unclosed '{{' at {index}")

        name = template[index + 1 : end].strip()
        if "{" in name:
            raise PatternCompilationError(template, f"nested '{{' at {index}")
        if not _IDENTIFIER_RE.match(name):
            raise PatternCompilationError(
                template, f"invalid slot name {template[index:end + 1]!r}"
            )

        if buffer:
            segments.append(Literal("".join(buffer)))
            buffer = []
        segments.append(Placeholder(name))
        index = end + 1

    if buffer:
        segments.append(Literal("".join(buffer)))

    return segments


def _literal_to_regex(text: str) -> str:
    parts = _WHITESPACE_RE.split(text)
    return r"\s+".join(re.escape(part) for part in parts)


@lru_cache(maxsize=1024)
def compile_pattern(template: str) -> CompiledPattern:
    """Compile a template into a :class:`CompiledPattern`.

    The result is cached by template text; compiled patterns are immutable so
    the same object can be shared across catalog snapshots.

    Args:
        template: Template string with ``{slot}`` placeholders.

    Returns:
        The compiled pattern.

    Raises:
        PatternCompilationError: If the template is empty or malformed.
    """
    stripped = template.strip()
    if not stripped:
        raise PatternCompilationError(template, "template is empty")

    segments = split_template(stripped)

    pieces: list[str] = []
    slot_names: list[str] = []
    literals: list[str] = []
    ambiguous = False
    previous: Segment | None = None

    for position, segment in enumerate(segments):
        if isinstance(segment, Literal):
            pieces.append(_literal_to_regex(segment.text))
            normalized = normalize_literal(segment.text)
            if normalized:
                literals.append(normalized)
        else:
            if isinstance(previous, Placeholder):
                ambiguous = True
            is_last = position == len(segments) - 1
            pieces.append(_GREEDY_TO_END if is_last else _NON_GREEDY)
            slot_names.append(segment.name)
        previous = segment

    if ambiguous:
        logger.warning(
            f"Pattern {stripped!r} has adjacent placeholders; "
            "slot boundaries cannot be determined reliably"
        )

    regex = re.compile("".join(pieces), re.IGNORECASE | re.DOTALL)
    return CompiledPattern(
        source=template,
        regex=regex,
        slot_names=tuple(slot_names),
        literals=tuple(literals),
        ambiguous=ambiguous,
    )


def placeholder_names(template: str) -> tuple[str, ...]:
    """Return slot names referenced by a template, in order."""
    return tuple(
        segment.name
        for segment in split_template(template)
        if isinstance(segment, Placeholder)
    )


def literal_skeleton(template: str) -> str:
    """Return the template's literal words with placeholders removed."""
    return " ".join(
        normalize_literal(segment.text)
        for segment in split_template(template)
        if isinstance(segment, Literal) and segment.text.strip()
    )


def normalize_literal(text: str) -> str:
    """Lower-case, trim and collapse whitespace."""
    return fold_text(text)
