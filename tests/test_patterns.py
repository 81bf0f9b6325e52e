import logging

import pytest

from intentbot.nlu.patterns import (
    PatternCompilationError,
    compile_pattern,
    literal_skeleton,
    placeholder_names,
    split_template,
)


def _slots(template: str, text: str) -> dict[str, str] | None:
    pattern = compile_pattern(template)
    match = pattern.match(text)
    if match is None:
        return None
    return dict(zip(pattern.slot_names, match.groups()))


def test_trailing_placeholder_captures_to_end() -> None:
    assert _slots("buscar {producto}", "buscar laptop gaming") == {
        "producto": "laptop gaming"
    }


def test_placeholder_before_literal_is_non_greedy() -> None:
    assert _slots("precio de {producto} (USD)", "precio de laptop (USD)") == {
        "producto": "laptop"
    }


def test_non_greedy_stops_at_earliest_literal() -> None:
    assert _slots("de {origen} a {destino}", "de Madrid a Sevilla a pie") == {
        "origen": "Madrid",
        "destino": "Sevilla a pie",
    }


def test_literal_is_anchored_at_both_ends() -> None:
    pattern = compile_pattern("hola")

    assert pattern.matches("hola")
    assert pattern.matches("  HOLA ")
    assert not pattern.matches("hola amigo")
    assert not pattern.matches("oh hola")


def test_literal_whitespace_is_relaxed() -> None:
    pattern = compile_pattern("buenos días")

    assert pattern.matches("buenos    días")
    assert pattern.matches("Buenos\tDías")


def test_regex_metacharacters_are_literal() -> None:
    pattern = compile_pattern("cuánto cuesta {producto}?")

    assert _slots("cuánto cuesta {producto}?", "cuánto cuesta la mesa?") == {
        "producto": "la mesa"
    }
    assert not pattern.matches("cuánto cuesta la mesa!")


def test_pure_literal_has_no_slots() -> None:
    pattern = compile_pattern("necesito ayuda")

    assert pattern.slot_names == ()
    assert not pattern.has_slots
    assert pattern.literals == ("necesito ayuda",)


def test_literals_are_folded() -> None:
    pattern = compile_pattern("  Precio   DE {producto} (USD) ")

    assert pattern.literals == ("precio de", "(usd)")
    assert pattern.source == "  Precio   DE {producto} (USD) "


def test_placeholder_names_keep_duplicates_in_order() -> None:
    assert placeholder_names("{a} y {b} o {a}") == ("a", "b", "a")


def test_literal_skeleton_drops_placeholders() -> None:
    assert literal_skeleton("precio de {producto} en {tienda}") == "precio de en"


def test_adjacent_placeholders_are_flagged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        pattern = compile_pattern("unir {a}{b} ahora")

    assert pattern.ambiguous
    assert pattern.slot_names == ("a", "b")
    assert "adjacent placeholders" in caplog.text


@pytest.mark.parametrize(
    "template",
    [
        "",
        "   ",
        "buscar {producto",
        "buscar producto}",
        "buscar {}",
        "buscar {1producto}",
        "buscar {nombre producto}",
        "buscar {a{b}}",
    ],
)
def test_malformed_templates_raise(template: str) -> None:
    with pytest.raises(PatternCompilationError) as exc_info:
        compile_pattern(template)

    assert exc_info.value.template.strip() == template.strip()


def test_compilation_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        split_template("precio {")


@pytest.mark.parametrize(
    ("template", "values"),
    [
        ("buscar {producto}", {"producto": "laptop gaming"}),
        ("precio de {producto} (USD)", {"producto": "mesa de roble"}),
        ("de {origen} a {destino}", {"origen": "Lima", "destino": "Quito"}),
        ("{accion} el pedido {numero}", {"accion": "cancelar", "numero": "A-12"}),
        ("hola", {}),
    ],
)
def test_pattern_accepts_its_own_instances(
    template: str, values: dict[str, str]
) -> None:
    text = template.format(**values)

    assert _slots(template, text) == values


def test_recompiling_is_idempotent() -> None:
    corpus = [
        "precio de laptop (USD)",
        "precio de  (USD)",
        "precio de laptop",
        "PRECIO DE mesa grande (USD)",
        "el precio de laptop (USD)",
    ]
    first = compile_pattern("precio de {producto} (USD)")
    compile_pattern.cache_clear()
    second = compile_pattern("precio de {producto} (USD)")

    assert first is not second
    assert first.slot_names == second.slot_names
    assert [first.matches(t) for t in corpus] == [second.matches(t) for t in corpus]


def test_compiled_patterns_are_cached() -> None:
    assert compile_pattern("vender {producto}") is compile_pattern("vender {producto}")
