"""Bang-bang controller with hysteresis."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from pydantic import BaseModel, Field


class BangBangConfig(BaseModel):
    kind: Literal["bang_bang"] = "bang_bang"
    default_threshold: float = 0.0
    hysteresis: float = Field(default=0.0, ge=0.0)


class BangBangState(BaseModel):
    current: bool = False
    threshold: float


class BangBang:
    """Switches on above ``threshold + hysteresis``, off below
    ``threshold - hysteresis``, and holds its last output in between.

    Time does not enter the control law, but ``next`` also accepts an
    ``(actual, delta_t)`` pair so the controller can be driven through a
    :class:`~msr.controllers.TimeStepAdapter` like any time-aware one.
    """

    def __init__(self, config: BangBangConfig | None = None) -> None:
        self.config = config or BangBangConfig()
        self.state = BangBangState(threshold=self.config.default_threshold)

    def reset(self) -> None:
        self.state = BangBangState(threshold=self.config.default_threshold)

    def set_threshold(self, threshold: float) -> None:
        self.state.threshold = threshold

    def next(self, input: float | tuple[float, timedelta]) -> bool:
        if isinstance(input, tuple):
            actual, _delta_t = input
        else:
            actual = input

        upper = self.state.threshold + self.config.hysteresis
        lower = self.state.threshold - self.config.hysteresis

        if actual > upper:
            self.state.current = True
        elif actual < lower:
            self.state.current = False
        # Else: inside the band, hold

        return self.state.current

    def __repr__(self) -> str:
        return f"BangBang(config={self.config!r}, state={self.state!r})"
