"""Intent definition data model."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from intentbot.nlu.slots import SlotSpec, slot_spec_from_dict

DEFAULT_CONFIDENCE_THRESHOLD = 0.8
DEFAULT_PRIORITY = 1


@dataclass(frozen=True)
class IntentDefinition:
    """A named category of user request.

    Intents are declared as plain mappings in configuration and validated once
    when the catalog loads them, so the rest of the engine can rely on typed
    slot specs and a non-empty pattern list.

    Attributes:
        id: Unique catalog key (e.g. ``BUSQUEDA``).
        name: Display name.
        description: Free-text description.
        patterns: Templates in the order they are tried.
        parameters: Slot name to slot declaration.
        synonyms: Word to alternative words.
        confidence_threshold: Minimum confidence to accept this intent.
        priority: Lower value means higher priority.
    """

    id: str
    name: str = ""
    description: str = ""
    patterns: tuple[str, ...] = ()
    parameters: Mapping[str, SlotSpec] = field(default_factory=dict)
    synonyms: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    priority: int = DEFAULT_PRIORITY

    def __post_init__(self) -> None:
        """Validate and normalize intent data."""
        if not self.id or not self.id.strip():
            raise ValueError("Intent id cannot be empty")

        intent_id = self.id.strip()
        object.__setattr__(self, "id", intent_id)
        object.__setattr__(self, "name", (self.name or intent_id).strip())
        object.__setattr__(self, "description", (self.description or "").strip())

        if isinstance(self.patterns, str):
            raise ValueError(f"Intent {intent_id}: patterns must be a sequence")
        patterns = tuple(self.patterns)
        if not patterns:
            raise ValueError(f"Intent {intent_id}: at least one pattern is required")
        if any(not isinstance(p, str) or not p.strip() for p in patterns):
            raise ValueError(f"Intent {intent_id}: patterns must be non-empty strings")
        object.__setattr__(self, "patterns", patterns)

        parameters = {
            name: slot_spec_from_dict(spec) for name, spec in self.parameters.items()
        }
        object.__setattr__(self, "parameters", MappingProxyType(parameters))

        synonyms = {
            word.lower(): _as_tuple(alternatives)
            for word, alternatives in self.synonyms.items()
        }
        object.__setattr__(self, "synonyms", MappingProxyType(synonyms))

        threshold = float(self.confidence_threshold)
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(
                f"Intent {intent_id}: confidence threshold must be within [0, 1]"
            )
        object.__setattr__(self, "confidence_threshold", threshold)

        if isinstance(self.priority, bool) or int(self.priority) != self.priority:
            raise ValueError(f"Intent {intent_id}: priority must be an integer")
        if self.priority < 1:
            raise ValueError(f"Intent {intent_id}: priority must be at least 1")

    def to_export_dict(self) -> dict[str, Any]:
        """Catalog shape served to HTTP clients."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "patterns": list(self.patterns),
            "parameters": {
                name: spec.to_export_dict() for name, spec in self.parameters.items()
            },
        }

    def to_dict(self) -> dict[str, Any]:
        """Full representation, accepted back by :meth:`from_dict`."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "patterns": list(self.patterns),
            "parameters": {
                name: spec.to_dict() for name, spec in self.parameters.items()
            },
            "synonyms": {word: list(alts) for word, alts in self.synonyms.items()},
            "confidence": self.confidence_threshold,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, intent_id: str, data: Mapping[str, Any]) -> "IntentDefinition":
        """Create an intent from its configuration mapping.

        Args:
            intent_id: Catalog key for the intent.
            data: Mapping with ``patterns`` and optional ``name``,
                ``description``, ``parameters``, ``synonyms``, ``confidence``
                and ``priority`` keys.

        Returns:
            Validated IntentDefinition.

        Raises:
            ValueError: If the data is invalid.
        """
        return cls(
            id=intent_id,
            name=data.get("name") or intent_id,
            description=data.get("description") or "",
            patterns=data.get("patterns") or (),
            parameters=dict(data.get("parameters") or {}),
            synonyms=dict(data.get("synonyms") or {}),
            confidence_threshold=data.get(
                "confidence",
                data.get("confidence_threshold", DEFAULT_CONFIDENCE_THRESHOLD),
            ),
            priority=data.get("priority", DEFAULT_PRIORITY),
        )


def _as_tuple(alternatives: str | Sequence[str]) -> tuple[str, ...]:
    if isinstance(alternatives, str):
        return (alternatives,)
    return tuple(alternatives)
