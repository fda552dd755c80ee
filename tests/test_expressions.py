"""Tests for boolean expression trees."""

import pytest
from pydantic import TypeAdapter, ValidationError

from conftest import CountingIo, FaultyIo, RecordingLeaf, make_io

from msr.errors import BackendError, NotFoundError
from msr.io import IoState
from msr.model.expressions import (
    AndExpr,
    BooleanExpr,
    EvalExpr,
    FalseExpr,
    NotExpr,
    OrExpr,
    TrueExpr,
    evaluate,
    leaf,
)
from msr.model.sources import Comparison, input_ref
from msr.protocols import IoCondition


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------

class TestLiterals:
    def test_true(self):
        assert TrueExpr().eval(IoState()) is True

    def test_false(self):
        assert FalseExpr().eval(IoState()) is False

    def test_literals_ignore_io(self):
        io = FaultyIo()
        assert TrueExpr().eval(io) is True
        assert FalseExpr().eval(io) is False
        assert io.reads == []

    def test_literals_ignore_state_contents(self):
        io = make_io(x=1.0, y=False)
        assert TrueExpr().eval(io) is True
        assert FalseExpr().eval(io) is False


# ---------------------------------------------------------------------------
# Short-circuit
# ---------------------------------------------------------------------------

class TestShortCircuit:
    def test_and_skips_right_when_left_false(self):
        right = RecordingLeaf(True)
        expr = AndExpr(left=FalseExpr(), right=EvalExpr(leaf=right))
        assert expr.eval(IoState()) is False
        assert right.calls == 0

    def test_and_evaluates_right_when_left_true(self):
        right = RecordingLeaf(False)
        expr = AndExpr(left=TrueExpr(), right=EvalExpr(leaf=right))
        assert expr.eval(IoState()) is False
        assert right.calls == 1

    def test_or_skips_right_when_left_true(self):
        right = RecordingLeaf(False)
        expr = OrExpr(left=TrueExpr(), right=EvalExpr(leaf=right))
        assert expr.eval(IoState()) is True
        assert right.calls == 0

    def test_or_evaluates_right_when_left_false(self):
        right = RecordingLeaf(True)
        expr = OrExpr(left=FalseExpr(), right=EvalExpr(leaf=right))
        assert expr.eval(IoState()) is True
        assert right.calls == 1

    def test_leaf_identity_preserved(self):
        rec = RecordingLeaf(True)
        assert EvalExpr(leaf=rec).leaf is rec

    def test_unset_input_in_skipped_branch(self):
        z_gt_0 = leaf(input_ref("z").cmp_gt(0))
        expr = AndExpr(left=FalseExpr(), right=z_gt_0)
        assert expr.eval(IoState()) is False

    def test_unset_input_in_reached_branch_raises(self):
        expr = AndExpr(left=TrueExpr(), right=leaf(input_ref("z").cmp_gt(0)))
        with pytest.raises(NotFoundError):
            expr.eval(IoState())

    def test_read_order_left_to_right(self):
        io = CountingIo(inputs={"a": 1, "b": 2, "c": 3})
        expr = OrExpr(
            left=AndExpr(
                left=leaf(input_ref("a").cmp_eq(1)),
                right=leaf(input_ref("b").cmp_eq(0)),
            ),
            right=leaf(input_ref("c").cmp_eq(3)),
        )
        assert expr.eval(io) is True
        assert io.reads == ["a", "b", "c"]

    def test_skipped_reads_not_performed(self):
        io = CountingIo(inputs={"a": 1, "b": 2})
        expr = OrExpr(
            left=leaf(input_ref("a").cmp_eq(1)),
            right=leaf(input_ref("b").cmp_eq(2)),
        )
        assert expr.eval(io) is True
        assert io.reads == ["a"]


# ---------------------------------------------------------------------------
# Not / failure propagation
# ---------------------------------------------------------------------------

class TestNot:
    @pytest.mark.parametrize("result", [True, False])
    def test_double_negation(self, result):
        x = EvalExpr(leaf=RecordingLeaf(result))
        assert NotExpr(operand=NotExpr(operand=x)).eval(IoState()) is x.eval(IoState())

    def test_not(self):
        assert NotExpr(operand=TrueExpr()).eval(IoState()) is False


class TestFailurePropagation:
    def test_backend_error_aborts(self):
        after = RecordingLeaf(True)
        expr = OrExpr(
            left=leaf(input_ref("x").cmp_gt(0)),
            right=EvalExpr(leaf=after),
        )
        with pytest.raises(BackendError):
            expr.eval(FaultyIo())
        assert after.calls == 0

    def test_error_under_not(self):
        with pytest.raises(NotFoundError):
            NotExpr(operand=leaf(input_ref("x").cmp_gt(0))).eval(IoState())

    def test_leaf_result_coerced_to_bool(self):
        class Truthy:
            def eval(self, io):
                return 1

        assert EvalExpr(leaf=Truthy()).eval(IoState()) is True


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_x_greater_than_five(self):
        io = make_io(x=5.0)
        expr = leaf(input_ref("x").cmp_gt(5.0))
        assert expr.eval(io) is False
        io.set_input("x", 5.1)
        assert expr.eval(io) is True

    def test_x_and_y(self):
        x_gt_5 = input_ref("x").cmp_gt(5.0)
        y_eq_true = input_ref("y").cmp_eq(True)
        expr = AndExpr(left=leaf(x_gt_5), right=leaf(y_eq_true))

        io = make_io(x=5.1, y=True)
        assert expr.eval(io) is True
        io.set_input("y", False)
        assert expr.eval(io) is False

    def test_x_or_y(self):
        expr = OrExpr(
            left=leaf(input_ref("x").cmp_gt(5.0)),
            right=leaf(input_ref("y").cmp_eq(True)),
        )
        io = make_io(x=3.0, y=True)
        assert expr.eval(io) is True
        io.set_input("y", False)
        assert expr.eval(io) is False

    def test_not_x(self):
        expr = NotExpr(operand=leaf(input_ref("x").cmp_gt(5.0)))
        assert expr.eval(make_io(x=6.0)) is False


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_operators(self):
        a = leaf(input_ref("a").cmp_eq(1))
        b = leaf(input_ref("b").cmp_eq(2))
        assert (a & b) == AndExpr(left=a, right=b)
        assert (a | b) == OrExpr(left=a, right=b)
        assert ~a == NotExpr(operand=a)

    def test_operator_expression_evaluates(self):
        io = make_io(a=1, b=3)
        a = leaf(input_ref("a").cmp_eq(1))
        b = leaf(input_ref("b").cmp_eq(2))
        assert (a & ~b).eval(io) is True
        assert (~a | b).eval(io) is False

    def test_frozen(self):
        expr = AndExpr(left=TrueExpr(), right=FalseExpr())
        with pytest.raises(ValidationError):
            expr.left = FalseExpr()

    def test_is_io_condition(self):
        assert isinstance(TrueExpr(), IoCondition)

    def test_module_evaluate(self):
        assert evaluate(OrExpr(left=FalseExpr(), right=TrueExpr()), IoState()) is True

    def test_from_dict(self):
        expr = TypeAdapter(BooleanExpr).validate_python({
            "kind": "and",
            "left": {"kind": "true"},
            "right": {
                "kind": "eval",
                "leaf": {
                    "left": {"kind": "in", "name": "x"},
                    "cmp": "GT",
                    "right": {"kind": "const", "value": 5.0},
                },
            },
        })
        assert isinstance(expr, AndExpr)
        assert isinstance(expr.right.leaf, Comparison)
        assert expr.eval(make_io(x=5.1)) is True

    def test_round_trip_through_json(self):
        expr = ~leaf(input_ref("x").cmp_le(1))
        adapter = TypeAdapter(BooleanExpr)
        restored = adapter.validate_json(adapter.dump_json(expr))
        assert restored == expr

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            TypeAdapter(BooleanExpr).validate_python({"kind": "xor"})
