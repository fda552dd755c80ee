"""Declarative control entities: loops, actions, rules.

A :class:`Setup` bundles them and is what configuration files load into::

    setup = Setup.model_validate_json(path.read_text())
"""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from msr.controllers import ControllerConfig

from .expressions import BooleanExpr
from .sources import Source


class Loop(BaseModel):
    """A closed control loop: one input gate, one controller, one output gate."""

    id: str
    input: str
    output: str
    controller: ControllerConfig
    description: str = ""


class Action(BaseModel):
    """Writes a set of outputs, each taken from a source."""

    id: str
    outputs: dict[str, Source] = {}
    description: str = ""


class Rule(BaseModel):
    """Runs its actions whenever its condition holds."""

    id: str
    condition: BooleanExpr
    actions: list[str] = []
    description: str = ""


def _check_unique_ids(items: list, context: str) -> None:
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate {context} id: {item.id!r}")
        seen.add(item.id)


class Setup(BaseModel):
    loops: list[Loop] = []
    rules: list[Rule] = []
    actions: list[Action] = []

    @model_validator(mode="after")
    def _validate_references(self):
        _check_unique_ids(self.loops, "loop")
        _check_unique_ids(self.rules, "rule")
        _check_unique_ids(self.actions, "action")
        known = {a.id for a in self.actions}
        for rule in self.rules:
            for action_id in rule.actions:
                if action_id not in known:
                    raise ValueError(
                        f"Rule {rule.id!r} references unknown action {action_id!r}"
                    )
        return self
