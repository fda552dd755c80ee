"""Boolean expression trees over I/O conditions.

An expression is a tree of ``true``/``false`` literals, ``and``/``or``/
``not`` composites and ``eval`` leaves. A leaf is anything with an
``eval(io) -> bool`` method; :class:`~msr.model.sources.Comparison` is the
usual one, and it is what a leaf given as a plain dict is parsed into.

Trees are frozen. Build them directly or with the ``&``, ``|`` and ``~``
operators::

    expr = EvalExpr(leaf=x_gt_5) & ~EvalExpr(leaf=y_eq_true)

Evaluation walks the tree left to right and short-circuits: the right
side of an ``and`` is only evaluated when the left side held, the right
side of an ``or`` only when the left side did not. Reads on the I/O system
happen only inside the leaves that are actually reached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, Callable, Literal, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from msr.errors import MsrError

from .sources import Comparison

if TYPE_CHECKING:
    from msr.protocols import SyncIoSystem


class _ExprBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def __and__(self, other: BooleanExpr) -> AndExpr:
        return AndExpr(left=self, right=other)

    def __or__(self, other: BooleanExpr) -> OrExpr:
        return OrExpr(left=self, right=other)

    def __invert__(self) -> NotExpr:
        return NotExpr(operand=self)

    def eval(self, io: SyncIoSystem) -> bool:
        return evaluate(self, io)


class TrueExpr(_ExprBase):
    kind: Literal["true"] = "true"


class FalseExpr(_ExprBase):
    kind: Literal["false"] = "false"


class AndExpr(_ExprBase):
    """The logical AND of two expressions."""

    kind: Literal["and"] = "and"
    left: BooleanExpr
    right: BooleanExpr


class OrExpr(_ExprBase):
    """The logical OR of two expressions."""

    kind: Literal["or"] = "or"
    left: BooleanExpr
    right: BooleanExpr


class NotExpr(_ExprBase):
    """The logical complement of the contained expression."""

    kind: Literal["not"] = "not"
    operand: BooleanExpr


def _check_condition(obj: Any) -> Any:
    if isinstance(obj, dict) or not callable(getattr(obj, "eval", None)):
        raise ValueError(
            f"leaf must be a comparison or have an eval(io) method, "
            f"got {type(obj).__name__}"
        )
    return obj


# Comparison is tried first so configs can spell leaves as dicts; any
# other object with an eval(io) method is kept as-is.
Leaf = Annotated[
    Union[Comparison, Annotated[Any, AfterValidator(_check_condition)]],
    Field(union_mode="left_to_right"),
]


class EvalExpr(_ExprBase):
    """A condition whose value is not known until evaluation time."""

    kind: Literal["eval"] = "eval"
    leaf: Leaf


BooleanExpr = Annotated[
    Union[TrueExpr, FalseExpr, AndExpr, OrExpr, NotExpr, EvalExpr],
    Field(discriminator="kind"),
]

# Rebuild models with recursive BooleanExpr references.
AndExpr.model_rebuild()
OrExpr.model_rebuild()
NotExpr.model_rebuild()
EvalExpr.model_rebuild()


def leaf(condition: Any) -> EvalExpr:
    """Wrap a leaf condition (e.g. a Comparison) as an expression."""
    return EvalExpr(leaf=condition)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def evaluate(expr: BooleanExpr, io: SyncIoSystem) -> bool:
    """Evaluate *expr* against *io*.

    Any error raised by a read aborts the whole evaluation.
    """
    handler = _EVAL_DISPATCH.get(expr.kind)
    if handler is None:
        raise MsrError(f"Unsupported expression kind: {expr.kind}")
    return handler(expr, io)


def _eval_true(_expr: TrueExpr, _io: SyncIoSystem) -> bool:
    return True


def _eval_false(_expr: FalseExpr, _io: SyncIoSystem) -> bool:
    return False


def _eval_and(expr: AndExpr, io: SyncIoSystem) -> bool:
    return evaluate(expr.left, io) and evaluate(expr.right, io)


def _eval_or(expr: OrExpr, io: SyncIoSystem) -> bool:
    return evaluate(expr.left, io) or evaluate(expr.right, io)


def _eval_not(expr: NotExpr, io: SyncIoSystem) -> bool:
    return not evaluate(expr.operand, io)


def _eval_leaf(expr: EvalExpr, io: SyncIoSystem) -> bool:
    return bool(expr.leaf.eval(io))


_EVAL_DISPATCH: dict[str, Callable[[Any, SyncIoSystem], bool]] = {
    "true": _eval_true,
    "false": _eval_false,
    "and": _eval_and,
    "or": _eval_or,
    "not": _eval_not,
    "eval": _eval_leaf,
}
