"""In-memory I/O state: the default synchronous I/O system.

Holds the current value of every input and output gate in two
independent namespaces. The same id may exist in both; ``read`` only ever
looks at inputs and ``write`` only ever touches outputs.

No locking is done here. A state instance shared between threads must be
guarded by the caller for the duration of a read/eval/write sequence.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field, field_validator

from msr.errors import NotFoundError
from msr.model.values import Value, is_value, to_value

logger = logging.getLogger(__name__)


def _lift_mapping(v):
    if not isinstance(v, dict):
        return v
    return {
        k: (item if isinstance(item, dict) or is_value(item) else to_value(item))
        for k, item in v.items()
    }


class IoState(BaseModel):
    """The state of all inputs and outputs of an MSR system.

    Example::

        state = IoState()
        state.set_input("tcr001", 8.9)     # a sensor reading
        state.write("h1", to_value(1.7))   # an actuator command
    """

    inputs: dict[str, Value] = Field(default_factory=dict)
    """Input gates (sensors)."""

    outputs: dict[str, Value] = Field(default_factory=dict)
    """Output gates (actuators)."""

    @field_validator("inputs", "outputs", mode="before")
    @classmethod
    def _lift_literals(cls, v):
        return _lift_mapping(v)

    # -----------------------------------------------------------------------
    # SyncIoSystem
    # -----------------------------------------------------------------------

    def read(self, id: str) -> Value:
        try:
            return self.inputs[id]
        except KeyError:
            raise NotFoundError(id) from None

    def read_output(self, id: str) -> Value | None:
        return self.outputs.get(id)

    def write(self, id: str, value: object) -> None:
        """Store an output value, lifting Python literals to Values."""
        logger.debug("write %s = %r", id, value)
        self.outputs[id] = to_value(value)

    # -----------------------------------------------------------------------
    # Input side (sensor readers)
    # -----------------------------------------------------------------------

    def set_input(self, id: str, value: object) -> None:
        """Store a sensor reading, lifting Python literals to Values."""
        self.inputs[id] = to_value(value)
