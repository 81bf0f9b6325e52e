from intentbot.catalog import IntentDefinition
from intentbot.nlu.extractor import extract_parameters, extract_slots, match_first
from intentbot.nlu.patterns import compile_pattern


def _compile(*templates: str):
    return [compile_pattern(template) for template in templates]


def test_extracts_trailing_slot_with_spaces() -> None:
    patterns = _compile("buscar {nombre_producto}")

    assert extract_slots("buscar laptop gaming", patterns) == {
        "nombre_producto": "laptop gaming"
    }


def test_values_keep_original_case() -> None:
    patterns = _compile("buscar {nombre_producto}")

    assert extract_slots("BUSCAR Laptop HP", patterns) == {
        "nombre_producto": "Laptop HP"
    }


def test_first_matching_pattern_wins() -> None:
    patterns = _compile(
        "comprar {cantidad} unidades de {nombre_producto}",
        "comprar {nombre_producto}",
    )

    result = match_first("comprar 3 unidades de silla", patterns)

    assert result is not None
    pattern, slots = result
    assert pattern.source == "comprar {cantidad} unidades de {nombre_producto}"
    assert slots == {"cantidad": "3", "nombre_producto": "silla"}


def test_later_pattern_used_when_earlier_fails() -> None:
    patterns = _compile(
        "comprar {cantidad} unidades de {nombre_producto}",
        "comprar {nombre_producto}",
    )

    assert extract_slots("comprar una silla", patterns) == {
        "nombre_producto": "una silla"
    }


def test_no_match_returns_empty() -> None:
    patterns = _compile("buscar {nombre_producto}")

    assert extract_slots("vender laptop", patterns) == {}
    assert extract_slots("   ", patterns) == {}
    assert match_first("vender laptop", patterns) is None


def test_input_is_trimmed_before_matching() -> None:
    patterns = _compile("buscar {nombre_producto}")

    assert extract_slots("   buscar mesa   ", patterns) == {"nombre_producto": "mesa"}


def test_duplicate_slot_name_keeps_last_capture() -> None:
    patterns = _compile("de {lugar} a {lugar}")

    assert extract_slots("de Lima a Quito", patterns) == {"lugar": "Quito"}


def test_pure_literal_match_has_no_slots() -> None:
    patterns = _compile("hola")

    assert extract_slots("Hola", patterns) == {}
    assert match_first("Hola", patterns) is not None


def test_extract_parameters_coerces_declared_slots() -> None:
    intent = IntentDefinition.from_dict(
        "COMPRA",
        {
            "patterns": ["comprar {cantidad} unidades de {nombre_producto}"],
            "parameters": {
                "cantidad": {"type": "number", "required": True, "default": 1},
                "nombre_producto": {
                    "type": "string",
                    "required": True,
                    "transform": "lowercase",
                },
            },
        },
    )
    patterns = _compile(*intent.patterns)

    assert extract_parameters("comprar 5 unidades de SILLA", intent, patterns) == {
        "cantidad": 5.0,
        "nombre_producto": "silla",
    }
    assert extract_parameters("comprar muchas unidades de mesa", intent, patterns) == {
        "cantidad": 1,
        "nombre_producto": "mesa",
    }
