"""Concrete controllers and the time-step adapter.

The set of built-in controllers is closed: a :data:`ControllerConfig` is
either a :class:`PidConfig` or a :class:`BangBangConfig` (discriminated by
``kind``), and :func:`create_controller` turns it into the matching
:data:`ControllerType` instance.
"""

from __future__ import annotations

from typing import Annotated, Union

from pydantic import Field

from ._adapter import TimeStepAdapter
from .bang_bang import BangBang, BangBangConfig, BangBangState
from .pid import Pid, PidConfig, PidState

ControllerConfig = Annotated[
    Union[PidConfig, BangBangConfig],
    Field(discriminator="kind"),
]

ControllerType = Union[Pid, BangBang]


def create_controller(config: PidConfig | BangBangConfig) -> ControllerType:
    """Instantiate the controller described by *config*."""
    if isinstance(config, PidConfig):
        return Pid(config)
    if isinstance(config, BangBangConfig):
        return BangBang(config)
    raise TypeError(
        f"create_controller() expects a PidConfig or BangBangConfig, "
        f"got {type(config).__name__}"
    )


__all__ = [
    "BangBang",
    "BangBangConfig",
    "BangBangState",
    "ControllerConfig",
    "ControllerType",
    "Pid",
    "PidConfig",
    "PidState",
    "TimeStepAdapter",
    "create_controller",
]
