"""Shared pytest fixtures for test infrastructure."""

from types import SimpleNamespace

import pytest

from intentbot.catalog import IntentCatalog, IntentDefinition
from intentbot.services.classifier import ClassifierError, ClassifierResult


@pytest.fixture
def catalog() -> IntentCatalog:
    """Provide the built-in catalog.

    Returns:
        IntentCatalog: Fresh catalog loaded from the default intents.
    """
    return IntentCatalog.default()


@pytest.fixture
def small_catalog() -> IntentCatalog:
    """Provide a two-intent catalog with typed slots.

    Returns:
        IntentCatalog: Catalog with SALUDO and COMPRA.
    """
    return IntentCatalog(
        [
            IntentDefinition(id="SALUDO", patterns=("hola", "buenos días")),
            IntentDefinition.from_dict(
                "COMPRA",
                {
                    "patterns": [
                        "comprar {cantidad} unidades de {nombre_producto}",
                        "comprar {nombre_producto}",
                    ],
                    "parameters": {
                        "nombre_producto": {"type": "string", "required": True},
                        "cantidad": {
                            "type": "number",
                            "required": True,
                            "default": 1,
                        },
                    },
                },
            ),
        ]
    )


class _FakeClassifier:
    """Deterministic stand-in for a secondary classifier."""

    def __init__(self, responses: list[object]) -> None:
        self._responses = responses
        self.calls: list[str] = []

    async def classify(self, text: str) -> ClassifierResult | None:
        """Return the next canned response.

        Raises:
            ClassifierError: If the canned response is an exception.
        """
        response = self._responses[min(len(self.calls), len(self._responses) - 1)]
        self.calls.append(text)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_classifier():
    """Provide a factory for deterministic classifiers.

    Returns:
        Callable: Factory taking ``(label, confidence)`` tuples, None or
        exceptions and returning a classifier that replays them in order.

    Example:
        def test_something(fake_classifier):
            classifier = fake_classifier([("COMPRA", 0.9)])
    """

    def _create(responses: list[object]) -> _FakeClassifier:
        canned: list[object] = []
        for response in responses:
            if isinstance(response, tuple):
                label, confidence = response
                canned.append(ClassifierResult(label=label, confidence=confidence))
            else:
                canned.append(response)
        return _FakeClassifier(canned)

    return _create


@pytest.fixture
def failing_classifier(fake_classifier):
    """Provide a classifier that always fails."""
    return fake_classifier([ClassifierError("classifier offline")])


class _FakeChatCompletions:
    """Mock OpenAI-compatible chat completions for testing."""

    def __init__(self, responses: list[object]) -> None:
        self._responses = responses
        self.calls = 0
        self.requests: list[dict[str, object]] = []

    async def create(self, **kwargs: object) -> SimpleNamespace:
        """Mock create method that returns canned responses.

        Returns:
            SimpleNamespace: Mock response object.

        Raises:
            Exception: If response is an exception object.
        """
        self.requests.append(kwargs)
        response = self._responses[self.calls]
        self.calls += 1
        if isinstance(response, Exception):
            raise response
        return response


class _FakeChat:
    """Mock chat namespace for OpenAI-compatible client."""

    def __init__(self, responses: list[object]) -> None:
        self.completions = _FakeChatCompletions(responses)


class _FakeClient:
    """Mock OpenAI-compatible client for testing."""

    def __init__(self, responses: list[object]) -> None:
        self.chat = _FakeChat(responses)


@pytest.fixture
def mock_llm_client():
    """Provide a factory for creating mock LLM clients.

    Strings are wrapped in a chat completion response; anything else is
    returned (or raised) as is.

    Example:
        def test_something(mock_llm_client):
            client = mock_llm_client(['{"intent": "SALUDO", "confidence": 0.9}'])
    """

    def _create_client(responses: list[object]) -> _FakeClient:
        wrapped = [
            SimpleNamespace(
                choices=[SimpleNamespace(message=SimpleNamespace(content=response))]
            )
            if isinstance(response, str)
            else response
            for response in responses
        ]
        return _FakeClient(wrapped)

    return _create_client
