"""Value system for I/O points.

A point holds exactly one of a closed set of scalar kinds. Values are
frozen, so they can be handed out without copying.

Ordering is partial: bits order ``False < True``, integers and decimals
compare numerically with each other, text compares lexicographically.
Values of any other pairing are unordered.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from msr.errors import ValueKindError


class BitValue(BaseModel):
    """A boolean point (digital I/O)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bit"] = "bit"
    value: bool


class IntegerValue(BaseModel):
    """A signed integer point (counters, raw ADC words)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["integer"] = "integer"
    value: int


class DecimalValue(BaseModel):
    """A continuous point (analog I/O in engineering units)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["decimal"] = "decimal"
    value: float


class TextValue(BaseModel):
    """A free-text point (status words, device modes)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    value: str


Value = Annotated[
    Union[BitValue, IntegerValue, DecimalValue, TextValue],
    Field(discriminator="kind"),
]

_VALUE_TYPES = (BitValue, IntegerValue, DecimalValue, TextValue)
_NUMERIC_KINDS = frozenset({"integer", "decimal"})


def is_value(obj: object) -> bool:
    return isinstance(obj, _VALUE_TYPES)


def to_value(obj: object) -> Value:
    """Lift a Python literal into a :data:`Value`.

    - bool -> BitValue
    - int -> IntegerValue
    - float -> DecimalValue
    - str -> TextValue
    - an existing Value is returned unchanged
    """
    if isinstance(obj, _VALUE_TYPES):
        return obj
    # bool first: bool is a subclass of int
    if isinstance(obj, bool):
        return BitValue(value=obj)
    if isinstance(obj, int):
        return IntegerValue(value=obj)
    if isinstance(obj, float):
        return DecimalValue(value=obj)
    if isinstance(obj, str):
        return TextValue(value=obj)
    raise ValueKindError(
        f"Cannot convert {type(obj).__name__} to a Value"
    )


def as_number(value: Value) -> float:
    """Return the numeric content of an integer or decimal value."""
    if value.kind in _NUMERIC_KINDS:
        return float(value.value)
    raise ValueKindError(f"Expected a numeric value, got {value.kind!r}")


def _comparable(left: Value, right: Value) -> bool:
    if left.kind in _NUMERIC_KINDS and right.kind in _NUMERIC_KINDS:
        return True
    return left.kind == right.kind


def values_equal(left: Value, right: Value) -> bool:
    """Content equality; integer 3 equals decimal 3.0."""
    if not _comparable(left, right):
        return False
    return left.value == right.value


def compare_values(left: Value, right: Value) -> int | None:
    """Three-way compare: -1, 0, 1, or None when the kinds are unordered."""
    if not _comparable(left, right):
        return None
    a, b = left.value, right.value
    if a == b:
        return 0
    if a < b:
        return -1
    if a > b:
        return 1
    # NaN
    return None
