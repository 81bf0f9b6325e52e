"""Intent catalog: definitions, built-in intents and the runtime store."""

from intentbot.catalog.intent import IntentDefinition
from intentbot.catalog.store import (
    CatalogError,
    CatalogSnapshot,
    IntentCatalog,
    IntentExistsError,
    IntentNotFoundError,
)

__all__ = [
    "CatalogError",
    "CatalogSnapshot",
    "IntentCatalog",
    "IntentDefinition",
    "IntentExistsError",
    "IntentNotFoundError",
]
