"""Secondary intent classifiers consulted by the hybrid detector."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Protocol

from openai import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AsyncOpenAI,
    RateLimitError,
)

from intentbot.prompts import NO_INTENT_LABEL, build_classification_prompt

if TYPE_CHECKING:
    from intentbot.catalog.store import IntentCatalog
    from intentbot.config import Config

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


class ClassifierError(RuntimeError):
    """Raised when a classifier cannot produce a result."""


@dataclass(frozen=True)
class ClassifierResult:
    """Label and confidence returned by a classifier."""

    label: str
    confidence: float
    scores: Mapping[str, float] = field(default_factory=dict)


class IntentClassifier(Protocol):
    """Anything that can score free text against the intent labels.

    Implementations return None when no label applies and raise
    :class:`ClassifierError` on failure.
    """

    async def classify(self, text: str) -> ClassifierResult | None:
        """Classify a user message."""


def parse_classification(content: str) -> ClassifierResult | None:
    """Parse a JSON classification answer from a chat model.

    Args:
        content: Raw model output, optionally wrapped in prose or code fences.

    Returns:
        ClassifierResult, or None when the model answered ``none``.

    Raises:
        ClassifierError: If the content holds no usable JSON object.
    """
    match = _JSON_OBJECT_RE.search(content)
    if match is None:
        raise ClassifierError("Classifier response contained no JSON object.")

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise ClassifierError(f"Classifier response is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ClassifierError("Classifier response JSON is not an object.")

    label = str(data.get("intent") or "").strip()
    if not label or label.lower() == NO_INTENT_LABEL:
        return None

    try:
        confidence = float(data.get("confidence", 0.0))
    except (TypeError, ValueError) as exc:
        raise ClassifierError("Classifier confidence is not a number.") from exc

    return ClassifierResult(label=label, confidence=min(max(confidence, 0.0), 1.0))


class LlmIntentClassifier:
    """Classify intents with an OpenAI-compatible chat completion endpoint.

    Works with vLLM, ollama or any OpenAI-compatible server. The prompt is
    rebuilt from the catalog on every call so runtime catalog changes are
    picked up.
    """

    def __init__(
        self,
        catalog: "IntentCatalog",  # noqa: UP037
        model: str,
        base_url: str,
        api_key: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
        timeout_seconds: float = 30.0,
        max_retries: int = 2,
        retry_backoff_seconds: float = 0.5,
    ) -> None:
        self._catalog = catalog
        self._model = model
        self._max_retries = max_retries
        self._retry_backoff_seconds = retry_backoff_seconds
        self._client = client or AsyncOpenAI(
            base_url=base_url,
            api_key=api_key or os.getenv("OPENAI_API_KEY", "ollama"),
            timeout=timeout_seconds,
        )

    @classmethod
    def from_config(
        cls,
        config: "Config",  # noqa: UP037
        catalog: "IntentCatalog",  # noqa: UP037
    ) -> "LlmIntentClassifier":
        """Create a classifier from the application config."""

        return cls(
            catalog=catalog,
            model=config.llm_model,
            base_url=config.llm_base_url,
            timeout_seconds=config.classifier_timeout_seconds,
        )

    async def classify(self, text: str) -> ClassifierResult | None:
        """Ask the model for the best intent label.

        Args:
            text: User message.

        Returns:
            ClassifierResult, or None if the model picked no intent.

        Raises:
            ClassifierError: If the request keeps failing or the answer
                cannot be parsed.
        """
        messages = [
            {
                "role": "system",
                "content": build_classification_prompt(self._catalog.list_intents()),
            },
            {"role": "user", "content": text},
        ]

        for attempt in range(self._max_retries + 1):
            try:
                response = await self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    temperature=0.0,
                    max_tokens=64,
                )
                message = response.choices[0].message if response.choices else None
                content = message.content if message else None
                if not content:
                    raise ClassifierError("Classifier response contained no content.")
                result = parse_classification(content)
                logger.debug(f"Classifier answered {result} for {len(text)} chars")
                return result
            except (
                APIConnectionError,
                APITimeoutError,
                RateLimitError,
                APIError,
                TimeoutError,
            ) as exc:
                if attempt >= self._max_retries:
                    raise ClassifierError(
                        f"Classifier request failed after {attempt + 1} attempts."
                    ) from exc
                backoff = self._retry_backoff_seconds * (2**attempt)
                logger.warning(
                    f"Classifier request failed (attempt {attempt + 1}): {exc}"
                )
                if backoff > 0:
                    await asyncio.sleep(backoff)

        raise ClassifierError("Classifier request failed unexpectedly.")
