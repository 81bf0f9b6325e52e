"""Intent detection orchestrator.

Combines the pattern ranker and extractor with an optional secondary
classifier. The pattern path is synchronous and never fails; classifier
failures are reported as "no match" for that source and never escape
:meth:`IntentDetector.detect`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from intentbot.nlu.extractor import match_first
from intentbot.nlu.ranker import find_matching_intents
from intentbot.nlu.validator import validate_parameters
from intentbot.services.classifier import ClassifierError, IntentClassifier

if TYPE_CHECKING:
    from intentbot.catalog.intent import IntentDefinition
    from intentbot.catalog.store import CatalogSnapshot, IntentCatalog
    from intentbot.config import Config

logger = logging.getLogger(__name__)


class DetectionMethod(str, Enum):
    """Available detection strategies."""

    PATTERN_MATCHING = "pattern_matching"
    CLASSIFIER = "classifier"
    HYBRID = "hybrid"


class HybridDecision(str, Enum):
    """Which source the hybrid strategy trusted, and why."""

    PATTERN_HIGH_CONFIDENCE = "pattern_high_confidence"
    CLASSIFIER_HIGH_CONFIDENCE = "classifier_high_confidence"
    BEST_OF_BOTH = "best_of_both"
    PATTERN_FALLBACK = "pattern_fallback"


_METHOD_DESCRIPTIONS: dict[DetectionMethod, tuple[str, str]] = {
    DetectionMethod.PATTERN_MATCHING: (
        "Pattern Matching",
        "Detection based on predefined text patterns",
    ),
    DetectionMethod.CLASSIFIER: (
        "Secondary Classifier",
        "Detection delegated to the configured statistical classifier",
    ),
    DetectionMethod.HYBRID: (
        "Hybrid (Pattern + Classifier)",
        "Combines pattern matching with the classifier under confidence thresholds",
    ),
}


@dataclass(frozen=True)
class DetectionSettings:
    """Confidence thresholds for each detection strategy.

    Attributes:
        default_method: Strategy used when the caller does not choose one.
        pattern_min_confidence: Minimum ranker score to accept a pattern match.
        classifier_min_confidence: Minimum classifier confidence to accept.
        pattern_threshold: Hybrid: pattern score that wins outright.
        classifier_threshold: Hybrid: classifier confidence that wins when
            the pattern score is below ``pattern_threshold``.
    """

    default_method: DetectionMethod = DetectionMethod.HYBRID
    pattern_min_confidence: float = 0.3
    classifier_min_confidence: float = 0.4
    pattern_threshold: float = 0.7
    classifier_threshold: float = 0.6

    @classmethod
    def from_config(cls, config: "Config") -> "DetectionSettings":  # noqa: UP037
        return cls(
            default_method=DetectionMethod(config.detection_method),
            pattern_min_confidence=config.pattern_min_confidence,
            classifier_min_confidence=config.classifier_min_confidence,
            pattern_threshold=config.hybrid_pattern_threshold,
            classifier_threshold=config.hybrid_classifier_threshold,
        )


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one detection call.

    ``intent_id`` is None when nothing reached the configured confidence.
    """

    original_text: str
    method: DetectionMethod
    intent_id: str | None = None
    confidence: float = 0.0
    pattern: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    decision: HybridDecision | None = None
    pattern_confidence: float | None = None
    classifier_confidence: float | None = None
    error: str | None = None

    @property
    def matched(self) -> bool:
        return self.intent_id is not None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["method"] = self.method.value
        data["decision"] = self.decision.value if self.decision else None
        return data


def _extract(
    text: str,
    intent: "IntentDefinition",  # noqa: UP037
    snapshot: "CatalogSnapshot",  # noqa: UP037
) -> tuple[str | None, dict[str, Any]]:
    """Return the anchored pattern that matched (if any) and its parameters."""
    matched = match_first(text, snapshot.compiled_patterns(intent.id))
    if matched is None:
        return None, validate_parameters({}, intent.parameters)
    pattern, slots = matched
    return pattern.source, validate_parameters(slots, intent.parameters)


class IntentDetector:
    """Detect intents and extract their parameters.

    Coordinates:
    - the pattern ranker (cheap candidate scoring)
    - the anchored slot extractor and parameter validator
    - an optional secondary classifier, merged under hybrid thresholds
    """

    def __init__(
        self,
        catalog: "IntentCatalog",  # noqa: UP037
        classifier: IntentClassifier | None = None,
        settings: DetectionSettings | None = None,
    ) -> None:
        """Initialize the detector.

        Args:
            catalog: Intent catalog to match against.
            classifier: Optional secondary classifier.
            settings: Thresholds and default method.
        """
        self.catalog = catalog
        self.classifier = classifier
        self.settings = settings or DetectionSettings()
        self.default_method = self.settings.default_method
        logger.info(
            f"Intent detector ready; default method: {self.default_method.value}"
        )

    async def detect(
        self,
        text: str,
        method: DetectionMethod | str | None = None,
    ) -> DetectionResult:
        """Detect the intent of ``text`` with the chosen strategy.

        If the chosen strategy fails and is not the default one, detection is
        retried with the default strategy.

        Args:
            text: User message.
            method: Strategy to use; the configured default when None.

        Returns:
            DetectionResult, with ``intent_id`` None when nothing matched.

        Raises:
            ValueError: If ``method`` is not a known strategy.
        """
        chosen = DetectionMethod(method) if method else self.default_method

        if not text or not text.strip():
            return DetectionResult(original_text=text, method=chosen)

        try:
            if chosen is DetectionMethod.PATTERN_MATCHING:
                return self.detect_with_patterns(text)
            if chosen is DetectionMethod.CLASSIFIER:
                return await self.detect_with_classifier(text)
            return await self.detect_with_hybrid(text)
        except ClassifierError as e:
            logger.warning(f"Detection with {chosen.value} failed: {e}")
            if chosen is not self.default_method:
                logger.info(
                    f"Falling back to default method {self.default_method.value}"
                )
                return await self.detect(text, self.default_method)
            return DetectionResult(original_text=text, method=chosen, error=str(e))

    def detect_with_patterns(self, text: str) -> DetectionResult:
        """Rank catalog patterns and extract parameters for the best one."""
        snapshot = self.catalog.snapshot()
        candidates = find_matching_intents(text, snapshot)
        if not candidates:
            return DetectionResult(
                original_text=text, method=DetectionMethod.PATTERN_MATCHING
            )

        best = candidates[0]
        if best.confidence < self.settings.pattern_min_confidence:
            logger.debug(
                f"Best pattern {best.pattern!r} scored {best.confidence:.2f}, "
                "below minimum"
            )
            return DetectionResult(
                original_text=text,
                method=DetectionMethod.PATTERN_MATCHING,
                confidence=best.confidence,
                pattern=best.pattern,
            )

        intent = snapshot.intents[best.intent_id]
        pattern, parameters = _extract(text, intent, snapshot)
        return DetectionResult(
            original_text=text,
            method=DetectionMethod.PATTERN_MATCHING,
            intent_id=intent.id,
            confidence=best.confidence,
            pattern=pattern or best.pattern,
            parameters=parameters,
        )

    async def detect_with_classifier(self, text: str) -> DetectionResult:
        """Ask the secondary classifier, then extract parameters by pattern.

        Raises:
            ClassifierError: If no classifier is configured or it fails.
        """
        if self.classifier is None:
            raise ClassifierError("No secondary classifier is configured.")

        result = await self.classifier.classify(text)
        if result is None:
            return DetectionResult(
                original_text=text, method=DetectionMethod.CLASSIFIER
            )

        if result.confidence < self.settings.classifier_min_confidence:
            return DetectionResult(
                original_text=text,
                method=DetectionMethod.CLASSIFIER,
                confidence=result.confidence,
            )

        snapshot = self.catalog.snapshot()
        intent_id = self.catalog.normalize_intent_id(result.label)
        intent = snapshot.intents.get(intent_id) if intent_id else None
        if intent is None:
            logger.warning(f"Classifier returned unknown intent {result.label!r}")
            return DetectionResult(
                original_text=text,
                method=DetectionMethod.CLASSIFIER,
                confidence=result.confidence,
            )

        pattern, parameters = _extract(text, intent, snapshot)
        return DetectionResult(
            original_text=text,
            method=DetectionMethod.CLASSIFIER,
            intent_id=intent.id,
            confidence=result.confidence,
            pattern=pattern,
            parameters=parameters,
        )

    async def detect_with_hybrid(self, text: str) -> DetectionResult:
        """Merge pattern and classifier results under the hybrid thresholds."""
        pattern_result = self.detect_with_patterns(text)

        if self.classifier is None:
            return replace(
                pattern_result,
                method=DetectionMethod.HYBRID,
                decision=HybridDecision.PATTERN_FALLBACK,
                pattern_confidence=pattern_result.confidence,
            )

        try:
            classifier_result = await self.detect_with_classifier(text)
        except ClassifierError as e:
            logger.warning(f"Classifier unavailable, using pattern result: {e}")
            return replace(
                pattern_result,
                method=DetectionMethod.HYBRID,
                decision=HybridDecision.PATTERN_FALLBACK,
                pattern_confidence=pattern_result.confidence,
                error=str(e),
            )

        if pattern_result.confidence >= self.settings.pattern_threshold:
            chosen, decision = pattern_result, HybridDecision.PATTERN_HIGH_CONFIDENCE
        elif classifier_result.confidence >= self.settings.classifier_threshold:
            chosen, decision = (
                classifier_result,
                HybridDecision.CLASSIFIER_HIGH_CONFIDENCE,
            )
        elif pattern_result.confidence > classifier_result.confidence:
            chosen, decision = pattern_result, HybridDecision.BEST_OF_BOTH
        else:
            chosen, decision = classifier_result, HybridDecision.BEST_OF_BOTH

        return replace(
            chosen,
            method=DetectionMethod.HYBRID,
            decision=decision,
            pattern_confidence=pattern_result.confidence,
            classifier_confidence=classifier_result.confidence,
        )

    def is_method_enabled(self, method: DetectionMethod | str) -> bool:
        method = DetectionMethod(method)
        if method is DetectionMethod.CLASSIFIER:
            return self.classifier is not None
        return True

    def available_methods(self) -> dict[str, dict[str, Any]]:
        """Describe each detection strategy and its thresholds."""
        settings = self.settings
        thresholds: dict[DetectionMethod, dict[str, float]] = {
            DetectionMethod.PATTERN_MATCHING: {
                "min_confidence": settings.pattern_min_confidence,
            },
            DetectionMethod.CLASSIFIER: {
                "min_confidence": settings.classifier_min_confidence,
            },
            DetectionMethod.HYBRID: {
                "pattern_threshold": settings.pattern_threshold,
                "classifier_threshold": settings.classifier_threshold,
            },
        }
        return {
            method.value: {
                "name": _METHOD_DESCRIPTIONS[method][0],
                "description": _METHOD_DESCRIPTIONS[method][1],
                "enabled": self.is_method_enabled(method),
                "default": method is self.default_method,
                "config": thresholds[method],
            }
            for method in DetectionMethod
        }

    def set_default_method(self, method: DetectionMethod | str) -> None:
        """Change the default strategy.

        Raises:
            ValueError: If the method is unknown or not enabled.
        """
        method = DetectionMethod(method)
        if not self.is_method_enabled(method):
            raise ValueError(f"Detection method {method.value} is not enabled")
        self.default_method = method
        logger.info(f"Default detection method changed to {method.value}")

    async def compare_methods(self, text: str) -> dict[str, dict[str, Any]]:
        """Run every enabled strategy on ``text`` and time each one."""
        results: dict[str, dict[str, Any]] = {}
        for method in DetectionMethod:
            if not self.is_method_enabled(method):
                continue
            start = time.perf_counter()
            result = await self.detect(text, method)
            elapsed_ms = (time.perf_counter() - start) * 1000
            results[method.value] = {
                **result.to_dict(),
                "execution_time_ms": elapsed_ms,
            }
        return results
