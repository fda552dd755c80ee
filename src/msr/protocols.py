"""Capability protocols for backends, condition leaves and controllers.

These ``@runtime_checkable`` protocols are the seams where concrete
fieldbus drivers and control laws plug in. Nothing here inherits from
anything; any object with the right methods qualifies.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Protocol, TypeVar, runtime_checkable

from msr.model.values import Value

InputT = TypeVar("InputT", contravariant=True)
OutputT = TypeVar("OutputT", covariant=True)


@runtime_checkable
class SyncIoSystem(Protocol):
    """An I/O system with synchronous fieldbus access."""

    def read(self, id: str) -> Value:
        """Read the current state of an input.

        Raises :class:`~msr.errors.NotFoundError` if the input has no value.
        """
        ...

    def read_output(self, id: str) -> Value | None:
        """Read back the last value written to an output, if any."""
        ...

    def write(self, id: str, value: Value) -> None:
        """Write a value to the specified output."""
        ...


@runtime_checkable
class IoCondition(Protocol):
    """Anything that can be evaluated to a bool against a :class:`SyncIoSystem`."""

    def eval(self, io: SyncIoSystem) -> bool: ...


@runtime_checkable
class Controller(Protocol[InputT, OutputT]):
    """A generic stateful controller."""

    def next(self, input: InputT) -> OutputT:
        """Calculate the next state."""
        ...


@runtime_checkable
class TimeStepController(Protocol[InputT, OutputT]):
    """A generic stateful controller with time steps."""

    def next(self, input: InputT, delta_t: timedelta) -> OutputT:
        """Calculate the next state after *delta_t* has elapsed."""
        ...
