"""In-memory intent catalog with compiled pattern cache.

The catalog state is an immutable :class:`CatalogSnapshot`. Reads grab the
current snapshot reference; mutations build a new snapshot under a lock and
swap it in, so readers always see a complete catalog, never a half-rebuilt
one. Only the mutated intent's patterns are recompiled.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from intentbot.catalog.intent import IntentDefinition
from intentbot.nlu.patterns import (
    CompiledPattern,
    PatternCompilationError,
    compile_pattern,
)
from intentbot.nlu.slots import SlotSpec

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog mutation refers to a duplicate or missing intent."""

    def __init__(self, intent_id: str, message: str) -> None:
        super().__init__(message)
        self.intent_id = intent_id


class IntentExistsError(CatalogError):
    """Raised when adding an intent whose id is already registered."""

    def __init__(self, intent_id: str) -> None:
        super().__init__(intent_id, f"Intent '{intent_id}' already exists")


class IntentNotFoundError(CatalogError):
    """Raised when updating or removing an intent that is not registered."""

    def __init__(self, intent_id: str) -> None:
        super().__init__(intent_id, f"Intent '{intent_id}' does not exist")


@dataclass(frozen=True)
class CatalogSnapshot:
    """Consistent view of the catalog at one point in time.

    Attributes:
        intents: Intent id to definition, in catalog order.
        compiled: Intent id to compiled patterns aligned with
            ``IntentDefinition.patterns``. Entries are None where the template
            failed to compile.
    """

    intents: Mapping[str, IntentDefinition]
    compiled: Mapping[str, tuple[CompiledPattern | None, ...]]

    def compiled_patterns(self, intent_id: str) -> tuple[CompiledPattern, ...]:
        """Return the usable compiled patterns for an intent, in order."""
        return tuple(p for p in self.compiled.get(intent_id, ()) if p is not None)

    def compiled_pattern(self, intent_id: str, index: int) -> CompiledPattern | None:
        """Return the compiled pattern at ``index`` for an intent."""
        entries = self.compiled.get(intent_id, ())
        if 0 <= index < len(entries):
            return entries[index]
        return None

    def iter_patterns(self) -> Iterator[tuple[IntentDefinition, CompiledPattern]]:
        """Yield every usable (intent, pattern) pair in catalog order."""
        for intent_id, intent in self.intents.items():
            for pattern in self.compiled_patterns(intent_id):
                yield intent, pattern


def _compile_intent(intent: IntentDefinition) -> tuple[CompiledPattern | None, ...]:
    compiled: list[CompiledPattern | None] = []
    for template in intent.patterns:
        try:
            pattern = compile_pattern(template)
        except PatternCompilationError as e:
            logger.error(f"Skipping pattern for intent {intent.id}: {e}")
            compiled.append(None)
            continue

        undeclared = set(pattern.slot_names) - set(intent.parameters)
        if undeclared:
            logger.debug(
                f"Pattern {template!r} of intent {intent.id} uses undeclared "
                f"slots {sorted(undeclared)}; values are passed through untyped"
            )
        compiled.append(pattern)
    return tuple(compiled)


def _build_snapshot(
    intents: dict[str, IntentDefinition],
    compiled: dict[str, tuple[CompiledPattern | None, ...]],
) -> CatalogSnapshot:
    return CatalogSnapshot(
        intents=MappingProxyType(intents),
        compiled=MappingProxyType(compiled),
    )


class IntentCatalog:
    """Registry of intent definitions.

    Reads are lock-free. Mutations (add, update, remove) are serialized with
    each other and publish a new snapshot when complete; a failed mutation
    leaves the previous snapshot in place.
    """

    def __init__(self, intents: Iterable[IntentDefinition] = ()) -> None:
        """Initialize the catalog.

        Args:
            intents: Initial definitions, in catalog order.

        Raises:
            IntentExistsError: If two definitions share an id.
        """
        definitions: dict[str, IntentDefinition] = {}
        compiled: dict[str, tuple[CompiledPattern | None, ...]] = {}
        for intent in intents:
            if intent.id in definitions:
                raise IntentExistsError(intent.id)
            definitions[intent.id] = intent
            compiled[intent.id] = _compile_intent(intent)

        self._lock = threading.Lock()
        self._snapshot = _build_snapshot(definitions, compiled)
        logger.info(f"Intent catalog loaded with {len(definitions)} intents")

    @classmethod
    def from_config(cls, config: Mapping[str, Mapping[str, Any]]) -> "IntentCatalog":
        """Build a catalog from a mapping of intent id to configuration.

        Raises:
            ValueError: If any intent definition is invalid.
        """
        return cls(
            IntentDefinition.from_dict(intent_id, data)
            for intent_id, data in config.items()
        )

    @classmethod
    def default(cls) -> "IntentCatalog":
        """Build a catalog from the built-in intents."""
        from intentbot.catalog.defaults import INTENTS

        return cls.from_config(INTENTS)

    # Read path

    def snapshot(self) -> CatalogSnapshot:
        """Return the current consistent catalog view."""
        return self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot.intents)

    def __contains__(self, intent_id: object) -> bool:
        return intent_id in self._snapshot.intents

    def list_intents(self) -> list[IntentDefinition]:
        return list(self._snapshot.intents.values())

    def get_intent(self, intent_id: str) -> IntentDefinition | None:
        return self._snapshot.intents.get(intent_id)

    def has_intent(self, intent_id: str) -> bool:
        return intent_id in self._snapshot.intents

    def get_patterns(self, intent_id: str) -> tuple[str, ...]:
        intent = self.get_intent(intent_id)
        return intent.patterns if intent else ()

    def get_parameters(self, intent_id: str) -> Mapping[str, SlotSpec]:
        intent = self.get_intent(intent_id)
        return intent.parameters if intent else MappingProxyType({})

    def get_synonyms(self, intent_id: str) -> Mapping[str, tuple[str, ...]]:
        intent = self.get_intent(intent_id)
        return intent.synonyms if intent else MappingProxyType({})

    def find_synonyms(self, word: str, intent_id: str) -> list[str]:
        """Return the synonyms of ``word`` for an intent, or ``[word]``."""
        synonyms = self.get_synonyms(intent_id).get(word.lower())
        return list(synonyms) if synonyms else [word]

    def normalize_intent_id(self, intent_id: str | None) -> str | None:
        """Map a loosely formatted id (``" busqueda "``) to a catalog id."""
        if not intent_id:
            return None
        normalized = intent_id.strip().upper()
        return normalized if normalized in self._snapshot.intents else None

    def compiled_patterns(self, intent_id: str) -> tuple[CompiledPattern, ...]:
        return self._snapshot.compiled_patterns(intent_id)

    def export(self) -> list[dict[str, Any]]:
        """Return every intent in the public catalog shape."""
        return [intent.to_export_dict() for intent in self.list_intents()]

    def stats(self) -> dict[str, Any]:
        """Summarize pattern and parameter counts across the catalog."""
        snapshot = self._snapshot
        intents = list(snapshot.intents.values())
        total = len(intents)
        total_patterns = sum(len(intent.patterns) for intent in intents)
        total_parameters = sum(len(intent.parameters) for intent in intents)
        invalid_patterns = sum(
            1 for entries in snapshot.compiled.values() for p in entries if p is None
        )
        return {
            "total": total,
            "with_patterns": sum(1 for intent in intents if intent.patterns),
            "with_parameters": sum(1 for intent in intents if intent.parameters),
            "average_patterns": total_patterns / total if total else 0,
            "average_parameters": total_parameters / total if total else 0,
            "invalid_patterns": invalid_patterns,
        }

    # Mutation path

    def add_intent(self, intent: IntentDefinition) -> IntentDefinition:
        """Register a new intent.

        Raises:
            IntentExistsError: If the id is already registered.
        """
        with self._lock:
            current = self._snapshot
            if intent.id in current.intents:
                raise IntentExistsError(intent.id)

            intents = dict(current.intents)
            compiled = dict(current.compiled)
            intents[intent.id] = intent
            compiled[intent.id] = _compile_intent(intent)
            self._snapshot = _build_snapshot(intents, compiled)

        logger.info(f"Added intent {intent.id} with {len(intent.patterns)} patterns")
        return intent

    def update_intent(
        self, intent_id: str, changes: Mapping[str, Any]
    ) -> IntentDefinition:
        """Merge ``changes`` into an existing intent.

        Keys follow :meth:`IntentDefinition.from_dict`. The id cannot change.

        Raises:
            IntentNotFoundError: If the id is not registered.
            ValueError: If the merged definition is invalid.
        """
        with self._lock:
            current = self._snapshot
            existing = current.intents.get(intent_id)
            if existing is None:
                raise IntentNotFoundError(intent_id)

            changes = dict(changes)
            if "confidence_threshold" in changes:
                changes["confidence"] = changes.pop("confidence_threshold")
            merged = {**existing.to_dict(), **changes}
            updated = IntentDefinition.from_dict(intent_id, merged)

            intents = dict(current.intents)
            compiled = dict(current.compiled)
            intents[intent_id] = updated
            if updated.patterns == existing.patterns:
                compiled[intent_id] = current.compiled[intent_id]
            else:
                compiled[intent_id] = _compile_intent(updated)
            self._snapshot = _build_snapshot(intents, compiled)

        logger.info(f"Updated intent {intent_id}: {sorted(changes)}")
        return updated

    def remove_intent(self, intent_id: str) -> IntentDefinition:
        """Remove an intent and its compiled patterns.

        Returns:
            The removed definition.

        Raises:
            IntentNotFoundError: If the id is not registered.
        """
        with self._lock:
            current = self._snapshot
            if intent_id not in current.intents:
                raise IntentNotFoundError(intent_id)

            intents = dict(current.intents)
            compiled = dict(current.compiled)
            removed = intents.pop(intent_id)
            compiled.pop(intent_id, None)
            self._snapshot = _build_snapshot(intents, compiled)

        logger.info(f"Removed intent {intent_id}")
        return removed
