"""Coerce raw captured slot text into typed parameter values.

A value that fails its slot's rules is treated as missing: the required/default
fallback then applies. Failures never escape :func:`validate_parameters`.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import dateparser

from intentbot.nlu.slots import (
    BooleanSlot,
    DateSlot,
    NumberSlot,
    SlotSpec,
    StringSlot,
)

logger = logging.getLogger(__name__)

TRUE_VALUES = frozenset({"true", "verdadero", "sí", "si", "yes", "1", "on"})
FALSE_VALUES = frozenset({"false", "falso", "no", "0", "off"})

DATE_LANGUAGES = ["es", "en"]
_DATEPARSER_SETTINGS = {"TIMEZONE": "UTC", "RETURN_AS_TIMEZONE_AWARE": True}


class ValidationError(ValueError):
    """Raised when a raw value does not satisfy its slot's rules."""


def coerce_string(value: str, spec: StringSlot) -> str:
    text = value.strip()
    if spec.transform is not None:
        text = spec.transform.apply(text)
    if spec.min_length is not None and len(text) < spec.min_length:
        raise ValidationError(f"shorter than {spec.min_length} characters")
    if spec.max_length is not None and len(text) > spec.max_length:
        text = text[: spec.max_length]
    return text


def coerce_number(value: str, spec: NumberSlot) -> float:
    try:
        number = float(value.strip())
    except ValueError:
        raise ValidationError(f"{value!r} is not a number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{value!r} is not a finite number")
    if spec.min is not None and number < spec.min:
        raise ValidationError(f"{number} is below {spec.min}")
    if spec.max is not None and number > spec.max:
        raise ValidationError(f"{number} is above {spec.max}")
    return number


def coerce_boolean(value: str, spec: BooleanSlot) -> bool:
    token = value.strip().lower()
    if token in TRUE_VALUES:
        return True
    if token in FALSE_VALUES:
        return False
    raise ValidationError(f"{value!r} is not a recognized boolean")


def parse_date(value: str) -> datetime:
    """Parse a date string into an aware UTC datetime.

    ISO 8601 strings (``2024-03-15``, ``2024-03-15T10:30:00Z``) are read
    exactly. Anything else goes through dateparser in Spanish or English:
    ``15/03/2024``, ``15 de marzo de 2024``, ``March 15, 2024``, ``mañana``.
    Naive values are UTC.

    Raises:
        ValidationError: If the text is not a recognizable date.
    """
    text = value.strip()
    try:
        parsed: datetime | None = datetime.fromisoformat(text)
    except ValueError:
        parsed = dateparser.parse(
            text, languages=DATE_LANGUAGES, settings=_DATEPARSER_SETTINGS
        )

    if parsed is None:
        raise ValidationError(f"{value!r} is not a recognized date")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_date(value: datetime) -> str:
    """Render an aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def coerce_date(value: str, spec: DateSlot) -> str:
    parsed = parse_date(value)
    if spec.min_date is not None and parsed < parse_date(spec.min_date):
        raise ValidationError(f"{value!r} is before {spec.min_date}")
    if spec.max_date is not None and parsed > parse_date(spec.max_date):
        raise ValidationError(f"{value!r} is after {spec.max_date}")
    return format_date(parsed)


def coerce_value(value: str | None, spec: SlotSpec) -> Any | None:
    """Coerce one raw value according to its slot spec.

    Args:
        value: Raw captured text, or None when nothing was captured.
        spec: Slot declaration.

    Returns:
        The typed value, or None when the value is missing or invalid.
    """
    if value is None or not value.strip():
        return None

    try:
        if isinstance(spec, StringSlot):
            return coerce_string(value, spec)
        if isinstance(spec, NumberSlot):
            return coerce_number(value, spec)
        if isinstance(spec, BooleanSlot):
            return coerce_boolean(value, spec)
        if isinstance(spec, DateSlot):
            return coerce_date(value, spec)
    except ValidationError as e:
        logger.debug(f"Rejected {spec.type.value} slot value {value!r}: {e}")
        return None

    raise TypeError(f"Unsupported slot spec: {type(spec).__name__}")


def validate_parameters(
    raw: Mapping[str, str],
    schema: Mapping[str, SlotSpec],
) -> dict[str, Any]:
    """Turn raw captures into typed parameters for an intent.

    For every slot in ``schema``: a valid captured value is coerced; a
    missing or invalid required slot falls back to its ``default`` when one
    is declared; otherwise the slot is omitted. Captured slots that have no
    declaration are passed through as trimmed strings.

    Args:
        raw: Slot name to captured text, as returned by the extractor.
        schema: Slot name to declaration for the owning intent.

    Returns:
        Slot name to typed value.
    """
    parameters: dict[str, Any] = {}

    for name, spec in schema.items():
        value = coerce_value(raw.get(name), spec)
        if value is not None:
            parameters[name] = value
        elif spec.required and spec.default is not None:
            parameters[name] = spec.default

    for name, value in raw.items():
        if name not in schema and value.strip():
            parameters[name] = value.strip()

    return parameters
