"""Data sources and comparisons.

A source names *where* a value comes from: an input gate, an output gate,
or a literal embedded in the control logic. Sources hold no cached value;
they are resolved against an I/O system each time a comparison is
evaluated.

Comparisons are built with the ``cmp_*`` helpers::

    cond = InputSource(name="tcr001").cmp_gt(constant(5.0))
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from msr.errors import NotFoundError

from .values import Value, compare_values, is_value, to_value, values_equal

if TYPE_CHECKING:
    from msr.protocols import SyncIoSystem


class _SourceBase(BaseModel):
    """Comparison builders shared by every source kind.

    The right-hand operand may be another source or a plain Python literal,
    which is wrapped with :func:`constant`.
    """

    model_config = ConfigDict(frozen=True)

    @staticmethod
    def constant(value: object) -> ConstSource:
        return ConstSource(value=to_value(value))

    def cmp_eq(self, right: object) -> Comparison:
        return self._cmp(right, Comparator.EQUAL)

    def cmp_ne(self, right: object) -> Comparison:
        return self._cmp(right, Comparator.NOT_EQUAL)

    def cmp_lt(self, right: object) -> Comparison:
        return self._cmp(right, Comparator.LESS)

    def cmp_le(self, right: object) -> Comparison:
        return self._cmp(right, Comparator.LESS_OR_EQUAL)

    def cmp_gt(self, right: object) -> Comparison:
        return self._cmp(right, Comparator.GREATER)

    def cmp_ge(self, right: object) -> Comparison:
        return self._cmp(right, Comparator.GREATER_OR_EQUAL)

    def _cmp(self, right: object, cmp: Comparator) -> Comparison:
        if not isinstance(right, _SourceBase):
            right = self.constant(right)
        return Comparison(left=self, cmp=cmp, right=right)


class InputSource(_SourceBase):
    """Reference to an input gate by name."""

    kind: Literal["in"] = "in"
    name: str

    def resolve(self, io: SyncIoSystem) -> Value:
        return io.read(self.name)


class OutputSource(_SourceBase):
    """Reference to an output gate by name.

    An output that was never written cannot be compared, so resolving it
    raises :class:`NotFoundError` just like an unset input.
    """

    kind: Literal["out"] = "out"
    name: str

    def resolve(self, io: SyncIoSystem) -> Value:
        value = io.read_output(self.name)
        if value is None:
            raise NotFoundError(self.name, namespace="output")
        return value


class ConstSource(_SourceBase):
    """A literal value embedded in the logic."""

    kind: Literal["const"] = "const"
    value: Value

    @field_validator("value", mode="before")
    @classmethod
    def _lift_literal(cls, v):
        if isinstance(v, dict) or is_value(v):
            return v
        return to_value(v)

    def resolve(self, io: SyncIoSystem) -> Value:
        return self.value


Source = Annotated[
    Union[InputSource, OutputSource, ConstSource],
    Field(discriminator="kind"),
]


def input_ref(name: str) -> InputSource:
    return InputSource(name=name)


def output_ref(name: str) -> OutputSource:
    return OutputSource(name=name)


def constant(value: object) -> ConstSource:
    """Wrap a literal (or a Value) as a constant source."""
    return ConstSource(value=to_value(value))


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------

class Comparator(str, Enum):
    EQUAL = "EQ"
    NOT_EQUAL = "NE"
    LESS = "LT"
    LESS_OR_EQUAL = "LE"
    GREATER = "GT"
    GREATER_OR_EQUAL = "GE"

    def apply(self, left: Value, right: Value) -> bool:
        """Apply the operator to two resolved values.

        Unordered pairs (e.g. bit vs. text) are never equal and never
        less/greater than each other.
        """
        if self is Comparator.EQUAL:
            return values_equal(left, right)
        if self is Comparator.NOT_EQUAL:
            return not values_equal(left, right)

        order = compare_values(left, right)
        if order is None:
            return False
        if self is Comparator.LESS:
            return order < 0
        if self is Comparator.LESS_OR_EQUAL:
            return order <= 0
        if self is Comparator.GREATER:
            return order > 0
        return order >= 0


class Comparison(BaseModel):
    """``left <cmp> right``, evaluated against live I/O."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["comparison"] = "comparison"
    left: Source
    cmp: Comparator
    right: Source

    def eval(self, io: SyncIoSystem) -> bool:
        left = self.left.resolve(io)
        right = self.right.resolve(io)
        return self.cmp.apply(left, right)
