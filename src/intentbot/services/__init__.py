"""Service layer for intentbot."""

from intentbot.services.classifier import (
    ClassifierError,
    ClassifierResult,
    IntentClassifier,
    LlmIntentClassifier,
)

__all__ = [
    "ClassifierError",
    "ClassifierResult",
    "IntentClassifier",
    "LlmIntentClassifier",
]
