"""Single-step execution of a :class:`~msr.model.entities.Setup`.

The runtime never sleeps or schedules anything. The caller reads its
sensors into the I/O system, calls :meth:`SyncRuntime.step` once per cycle
with the time elapsed since the previous one, and flushes the outputs.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from msr.controllers import ControllerType, TimeStepAdapter, create_controller
from msr.errors import ValueKindError
from msr.model.entities import Action, Loop, Setup
from msr.model.values import as_number, to_value
from msr.protocols import SyncIoSystem

logger = logging.getLogger(__name__)


class SyncRuntime:
    """Evaluates rules and runs control loops against a :class:`SyncIoSystem`.

    Parameters
    ----------
    setup : Setup
        Loops, rules and actions to execute.

    Each :meth:`step`:
    1. Evaluates every rule in declaration order; for each rule that
       holds, runs its actions in order.
    2. Runs every loop: read input, advance controller by ``delta_t``,
       write output.

    Errors from the I/O system propagate immediately; outputs already
    written during the failed step stay written.
    """

    def __init__(self, setup: Setup) -> None:
        self.setup = setup
        self._actions: dict[str, Action] = {a.id: a for a in setup.actions}
        self._controllers: dict[str, ControllerType] = {
            loop.id: create_controller(loop.controller) for loop in setup.loops
        }
        self._steppers: dict[str, TimeStepAdapter] = {
            loop_id: TimeStepAdapter(ctrl) for loop_id, ctrl in self._controllers.items()
        }

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def step(self, io: SyncIoSystem, delta_t: timedelta) -> list[str]:
        """Run one cycle. Returns the ids of the rules that fired."""
        fired = self._apply_rules(io)
        for loop in self.setup.loops:
            self._run_loop(loop, io, delta_t)
        return fired

    def controller(self, loop_id: str) -> ControllerType:
        return self._controllers[loop_id]

    def reset(self) -> None:
        """Reset every loop controller."""
        for ctrl in self._controllers.values():
            ctrl.reset()

    # -----------------------------------------------------------------------
    # Rules / actions
    # -----------------------------------------------------------------------

    def _apply_rules(self, io: SyncIoSystem) -> list[str]:
        fired: list[str] = []
        for rule in self.setup.rules:
            if not rule.condition.eval(io):
                continue
            logger.debug("rule %s fired", rule.id)
            fired.append(rule.id)
            for action_id in rule.actions:
                self._run_action(self._actions[action_id], io)
        return fired

    def _run_action(self, action: Action, io: SyncIoSystem) -> None:
        for output_id, source in action.outputs.items():
            io.write(output_id, source.resolve(io))

    # -----------------------------------------------------------------------
    # Loops
    # -----------------------------------------------------------------------

    def _run_loop(self, loop: Loop, io: SyncIoSystem, delta_t: timedelta) -> None:
        value = io.read(loop.input)
        try:
            actual = as_number(value)
        except ValueKindError:
            raise ValueKindError(
                f"Loop {loop.id!r}: input {loop.input!r} is {value.kind}, expected a number"
            ) from None
        result = self._steppers[loop.id].next(actual, delta_t)
        logger.debug("loop %s: %s=%s -> %s=%s", loop.id, loop.input, actual, loop.output, result)
        io.write(loop.output, to_value(result))
