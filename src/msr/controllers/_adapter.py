"""Time-step adapter.

Time-aware controllers implement ``next((input, delta_t))`` on a single
tuple argument. Wrapping one in :class:`TimeStepAdapter` gives it the
two-argument :class:`~msr.protocols.TimeStepController` calling convention,
so call sites never build the tuple themselves.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Generic, TypeVar

from msr.protocols import Controller

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class TimeStepAdapter(Generic[InputT, OutputT]):
    """Owns a tuple-input controller and folds ``delta_t`` into its input."""

    def __init__(self, controller: Controller[tuple[InputT, timedelta], OutputT]) -> None:
        self.controller = controller

    def next(self, input: InputT, delta_t: timedelta) -> OutputT:
        return self.controller.next((input, delta_t))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.controller!r})"
