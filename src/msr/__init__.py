"""msr: building blocks for measurement-and-control loops.

Typical cycle::

    from msr import IoState, input_ref, leaf

    io = IoState()
    io.set_input("x", 5.1)
    io.set_input("y", True)

    cond = leaf(input_ref("x").cmp_gt(5.0)) & leaf(input_ref("y").cmp_eq(True))
    assert cond.eval(io)
"""

from __future__ import annotations

from msr.errors import BackendError, MsrError, NotFoundError, ValueKindError
from msr.model.values import (
    BitValue,
    DecimalValue,
    IntegerValue,
    TextValue,
    Value,
    to_value,
)
from msr.model.sources import (
    Comparator,
    Comparison,
    ConstSource,
    InputSource,
    OutputSource,
    Source,
    constant,
    input_ref,
    output_ref,
)
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
from msr.protocols import Controller, IoCondition, SyncIoSystem, TimeStepController
from msr.io import IoState
from msr.controllers import (
    BangBang,
    BangBangConfig,
    ControllerConfig,
    ControllerType,
    Pid,
    PidConfig,
    TimeStepAdapter,
    create_controller,
)
from msr.model.entities import Action, Loop, Rule, Setup
from msr.runtime import SyncRuntime

__version__ = "0.1.0"

__all__ = [
    # Errors
    "MsrError",
    "NotFoundError",
    "BackendError",
    "ValueKindError",
    # Values
    "Value",
    "BitValue",
    "IntegerValue",
    "DecimalValue",
    "TextValue",
    "to_value",
    # Sources / comparisons
    "Source",
    "InputSource",
    "OutputSource",
    "ConstSource",
    "input_ref",
    "output_ref",
    "constant",
    "Comparator",
    "Comparison",
    # Conditions
    "BooleanExpr",
    "TrueExpr",
    "FalseExpr",
    "AndExpr",
    "OrExpr",
    "NotExpr",
    "EvalExpr",
    "leaf",
    "evaluate",
    # Protocols
    "SyncIoSystem",
    "IoCondition",
    "Controller",
    "TimeStepController",
    # I/O state
    "IoState",
    # Controllers
    "ControllerConfig",
    "ControllerType",
    "Pid",
    "PidConfig",
    "BangBang",
    "BangBangConfig",
    "TimeStepAdapter",
    "create_controller",
    # Entities / runtime
    "Loop",
    "Action",
    "Rule",
    "Setup",
    "SyncRuntime",
]
