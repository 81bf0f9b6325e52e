import pytest

from intentbot.catalog import IntentCatalog, IntentDefinition
from intentbot.nlu.patterns import compile_pattern
from intentbot.nlu.ranker import (
    best_match,
    find_matching_intents,
    pattern_coincides,
    score_pattern,
)


def test_score_is_fraction_of_literal_words() -> None:
    assert score_pattern("hola", "hola") == 1.0
    assert score_pattern("quiero comprar mesa", "quiero comprar {producto}") == 1.0
    assert score_pattern("necesito ayuda", "tengo un problema") == 0.0
    assert score_pattern("tengo problema", "tengo un problema") == pytest.approx(2 / 3)


def test_score_ignores_case_and_whitespace() -> None:
    assert score_pattern("  BUENOS   Días ", "buenos días") == 1.0


def test_score_counts_whole_tokens_only() -> None:
    assert score_pattern("holanda", "hola") == 0.0


def test_score_is_zero_without_literals() -> None:
    assert score_pattern("lo que sea", "{todo}") == 0.0


@pytest.mark.parametrize(
    ("template", "text"),
    [
        ("cuál es el precio de {producto}", "precio de laptop"),
        ("hacer pedido de {producto}", "pedido"),
        ("que tengas un buen día", "buen"),
    ],
)
def test_adding_pattern_words_never_lowers_score(template: str, text: str) -> None:
    pattern = compile_pattern(template)
    words = [word for literal in pattern.literals for word in literal.split(" ")]

    score = score_pattern(text, pattern)
    for word in words:
        text = f"{text} {word}"
        new_score = score_pattern(text, pattern)
        assert new_score >= score
        score = new_score
    assert score == 1.0


def test_coincidence_requires_literals_in_order() -> None:
    pattern = compile_pattern("desde {origen} hasta {destino}")

    assert pattern_coincides("viaje desde lima hasta quito", pattern)
    assert not pattern_coincides("hasta quito desde lima", pattern)


def test_coincidence_is_substring_for_single_literal() -> None:
    pattern = compile_pattern("buscar {producto}")

    assert pattern_coincides("Quiero BUSCAR una mesa", pattern)
    assert not pattern_coincides("encontrar una mesa", pattern)


def test_pattern_without_literals_never_coincides() -> None:
    assert not pattern_coincides("cualquier cosa", compile_pattern("{todo}"))


def test_find_matching_intents_sorts_by_confidence(catalog: IntentCatalog) -> None:
    candidates = find_matching_intents("cuánto cuesta la mesa", catalog.snapshot())

    assert candidates[0].intent_id == "PRECIO"
    assert candidates[0].pattern == "cuánto cuesta {nombre_producto}"
    assert candidates[0].confidence == 1.0
    confidences = [candidate.confidence for candidate in candidates]
    assert confidences == sorted(confidences, reverse=True)


def test_ties_keep_catalog_order() -> None:
    catalog = IntentCatalog(
        [
            IntentDefinition(id="PRIMERO", patterns=("hola",)),
            IntentDefinition(id="SEGUNDO", patterns=("hola",)),
        ]
    )

    candidates = find_matching_intents("hola", catalog.snapshot())

    assert [candidate.intent_id for candidate in candidates] == ["PRIMERO", "SEGUNDO"]


def test_blank_input_has_no_candidates(catalog: IntentCatalog) -> None:
    assert find_matching_intents("   ", catalog.snapshot()) == []


def test_unrelated_input_has_no_candidates(catalog: IntentCatalog) -> None:
    assert find_matching_intents("xyz123", catalog.snapshot()) == []
    assert best_match("xyz123", catalog.snapshot()) is None


def test_best_match_applies_cutoff() -> None:
    catalog = IntentCatalog(
        [IntentDefinition(id="AYUDA", patterns=("tengo un problema",))]
    )
    snapshot = catalog.snapshot()

    assert best_match("tengo un problema", snapshot, min_confidence=0.9) is not None
    assert best_match("tengo un problemas", snapshot, min_confidence=0.9) is None
