"""Typed slot declarations for intent parameters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class SlotType(str, Enum):
    """Value type a slot is coerced to."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


class Transform(str, Enum):
    """Case transform applied to string slots."""

    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    CAPITALIZE = "capitalize"

    def apply(self, value: str) -> str:
        if self is Transform.LOWERCASE:
            return value.lower()
        if self is Transform.UPPERCASE:
            return value.upper()
        return value.capitalize()


@dataclass(frozen=True)
class SlotSpec:
    """Fields shared by every slot type.

    Attributes:
        required: Whether the intent expects this slot to be present.
        description: Human readable description, exported with the catalog.
        default: Value supplied when a required slot is missing.
    """

    type: ClassVar[SlotType]

    required: bool = False
    description: str | None = None
    default: Any = None

    def to_export_dict(self) -> dict[str, Any]:
        """Public catalog shape: type, required and description only."""
        return {
            "type": self.type.value,
            "required": self.required,
            "description": self.description,
        }

    def to_dict(self) -> dict[str, Any]:
        """Full representation, accepted back by :func:`slot_spec_from_dict`."""
        data: dict[str, Any] = {"type": self.type.value, "required": self.required}
        if self.description is not None:
            data["description"] = self.description
        if self.default is not None:
            data["default"] = self.default
        data.update(self._constraints())
        return data

    def _constraints(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class StringSlot(SlotSpec):
    type: ClassVar[SlotType] = SlotType.STRING

    min_length: int | None = None
    max_length: int | None = None
    transform: Transform | None = None

    def __post_init__(self) -> None:
        if self.min_length is not None and self.min_length < 0:
            raise ValueError("minLength cannot be negative")
        if self.max_length is not None and self.max_length < 1:
            raise ValueError("maxLength must be at least 1")
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError("minLength cannot exceed maxLength")

    def _constraints(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.min_length is not None:
            data["minLength"] = self.min_length
        if self.max_length is not None:
            data["maxLength"] = self.max_length
        if self.transform is not None:
            data["transform"] = self.transform.value
        return data


@dataclass(frozen=True)
class NumberSlot(SlotSpec):
    type: ClassVar[SlotType] = SlotType.NUMBER

    min: float | None = None
    max: float | None = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("min cannot exceed max")

    def _constraints(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.min is not None:
            data["min"] = self.min
        if self.max is not None:
            data["max"] = self.max
        return data


@dataclass(frozen=True)
class BooleanSlot(SlotSpec):
    type: ClassVar[SlotType] = SlotType.BOOLEAN


@dataclass(frozen=True)
class DateSlot(SlotSpec):
    type: ClassVar[SlotType] = SlotType.DATE

    min_date: str | None = None
    max_date: str | None = None

    def _constraints(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.min_date is not None:
            data["minDate"] = self.min_date
        if self.max_date is not None:
            data["maxDate"] = self.max_date
        return data


_SLOT_CLASSES: dict[SlotType, type[SlotSpec]] = {
    SlotType.STRING: StringSlot,
    SlotType.NUMBER: NumberSlot,
    SlotType.BOOLEAN: BooleanSlot,
    SlotType.DATE: DateSlot,
}


def slot_spec_from_dict(data: Mapping[str, Any] | SlotSpec) -> SlotSpec:
    """Build a slot spec from a configuration mapping.

    Accepts the camelCase keys used in intent configuration (``minLength``,
    ``maxLength``, ``minDate``, ``maxDate``). Constraints nested under a
    ``validation`` key are merged in as well.

    Args:
        data: Mapping with at least a ``type`` key, or an existing spec.

    Returns:
        The matching :class:`SlotSpec` subclass instance.

    Raises:
        ValueError: If the type is unknown or a constraint is invalid.
    """
    if isinstance(data, SlotSpec):
        return data

    merged = dict(data)
    validation = merged.pop("validation", None) or {}
    merged.update(validation)

    raw_type = str(merged.get("type", SlotType.STRING.value)).lower()
    try:
        slot_type = SlotType(raw_type)
    except ValueError:
        valid = ", ".join(t.value for t in SlotType)
        raise ValueError(
            f"Unknown slot type {raw_type!r}; expected one of {valid}"
        ) from None

    common = {
        "required": bool(merged.get("required", False)),
        "description": merged.get("description"),
        "default": merged.get("default"),
    }

    if slot_type is SlotType.STRING:
        transform = merged.get("transform")
        return StringSlot(
            **common,
            min_length=merged.get("minLength", merged.get("min_length")),
            max_length=merged.get("maxLength", merged.get("max_length")),
            transform=Transform(transform.lower()) if transform else None,
        )
    if slot_type is SlotType.NUMBER:
        return NumberSlot(**common, min=merged.get("min"), max=merged.get("max"))
    if slot_type is SlotType.DATE:
        return DateSlot(
            **common,
            min_date=merged.get("minDate", merged.get("min_date")),
            max_date=merged.get("maxDate", merged.get("max_date")),
        )
    return _SLOT_CLASSES[slot_type](**common)
