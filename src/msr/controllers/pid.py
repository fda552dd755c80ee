"""PID controller."""

from __future__ import annotations

from datetime import timedelta
from typing import Literal

from pydantic import BaseModel, model_validator


class PidConfig(BaseModel):
    """Gains, setpoint and optional output limits.

    The same limits bound the integral term (anti-windup).
    """

    kind: Literal["pid"] = "pid"
    k_p: float = 1.0
    k_i: float = 0.0
    k_d: float = 0.0
    target: float = 0.0
    min_output: float | None = None
    max_output: float | None = None

    @model_validator(mode="after")
    def _limits_check(self):
        if (
            self.min_output is not None
            and self.max_output is not None
            and self.min_output > self.max_output
        ):
            raise ValueError(
                f"min_output ({self.min_output}) must be <= "
                f"max_output ({self.max_output})"
            )
        return self


class PidState(BaseModel):
    target: float
    prev_value: float | None = None
    p: float = 0.0
    i: float = 0.0
    d: float = 0.0


def _clamp(value: float, low: float | None, high: float | None) -> float:
    if low is not None and value < low:
        return low
    if high is not None and value > high:
        return high
    return value


class Pid:
    """PID controller on ``(actual, delta_t)`` inputs.

    Control law, with ``e = target - actual`` and ``dt`` in seconds::

        p  = k_p * e
        i += k_i * e * dt                 (clamped to the output limits)
        d  = -k_d * (actual - prev) / dt  (derivative on measurement)
        u  = clamp(p + i + d)

    The derivative term is zero on the first step and whenever ``dt`` is 0.
    """

    def __init__(self, config: PidConfig | None = None) -> None:
        self.config = config or PidConfig()
        self.state = PidState(target=self.config.target)

    def reset(self) -> None:
        """Reset controller state (the target is kept)."""
        self.state = PidState(target=self.state.target)

    def set_target(self, target: float) -> None:
        self.state.target = target

    def next(self, input: tuple[float, timedelta]) -> float:
        actual, delta_t = input
        cfg = self.config
        state = self.state
        dt = delta_t.total_seconds()

        error = state.target - actual

        state.p = cfg.k_p * error

        state.i += cfg.k_i * error * dt
        state.i = _clamp(state.i, cfg.min_output, cfg.max_output)

        if state.prev_value is not None and dt > 0:
            state.d = -(cfg.k_d * (actual - state.prev_value) / dt)
        else:
            state.d = 0.0

        state.prev_value = actual

        return _clamp(state.p + state.i + state.d, cfg.min_output, cfg.max_output)

    def __repr__(self) -> str:
        return f"Pid(config={self.config!r}, state={self.state!r})"
