"""Variable values and their display text.

Variables arrive as JSON-like values. Strings are inserted verbatim; everything
else is rendered as compact JSON, the same text a JSON encoder would emit.
Integral floats print without a fraction wherever they appear, so ``3.0`` from
a JSON payload renders as ``3`` at the top level, nested, or in context.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Union

# Integral floats at or above this magnitude render in exponent form in JSON.
_MAX_PLAIN_INTEGRAL = 1e21


def _normalize_numbers(value: Any) -> Any:
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < _MAX_PLAIN_INTEGRAL:
            return int(value)
        return value
    if isinstance(value, dict):
        return {key: _normalize_numbers(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(item) for item in value]
    return value


def to_json_text(value: Any) -> str:
    """Serialize a JSON-like value to compact JSON text.

    Raises:
        ValueError: If the value holds a non-finite number.
        TypeError: If the value is not JSON serializable.
        RecursionError: If the value is nested too deeply to encode.
    """
    return json.dumps(
        _normalize_numbers(value),
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )


@dataclass(frozen=True)
class StringValue:
    value: str

    def to_display_text(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberValue:
    value: int | float

    def to_display_text(self) -> str:
        return to_json_text(self.value)


@dataclass(frozen=True)
class BoolValue:
    value: bool

    def to_display_text(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class StructuredValue:
    """Lists, objects and null."""

    value: Any

    def to_display_text(self) -> str:
        return to_json_text(self.value)


VariableValue = Union[StringValue, NumberValue, BoolValue, StructuredValue]


def to_variable_value(raw: Any) -> VariableValue:
    """Wrap a raw JSON-like value in its variant.

    ``bool`` is checked before numbers since it subclasses ``int``.
    """
    if isinstance(raw, str):
        return StringValue(raw)
    if isinstance(raw, bool):
        return BoolValue(raw)
    if isinstance(raw, (int, float)):
        return NumberValue(raw)
    return StructuredValue(raw)
