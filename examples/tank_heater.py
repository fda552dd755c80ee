"""Tank heater: bang-bang temperature loop with an overheat alarm.

A simulated tank warms while the heater is on and cools while it is
off. The heater loop holds the temperature around 60 degrees, and an
overheat rule latches an alarm output once the temperature passes 80.
"""

import logging
from datetime import timedelta

from msr import (
    Action,
    BangBangConfig,
    IoState,
    Loop,
    Rule,
    Setup,
    SyncRuntime,
    constant,
    input_ref,
    leaf,
    output_ref,
)

CYCLE = timedelta(milliseconds=500)

# -------------------------------------------------------------------------
# Configuration
# -------------------------------------------------------------------------

setup = Setup(
    loops=[
        Loop(
            id="heater",
            input="tank_temp",
            output="heater_on",
            controller=BangBangConfig(default_threshold=60.0, hysteresis=1.5),
            description="Keep the tank near 60 degC",
        ),
    ],
    actions=[
        Action(id="raise_alarm", outputs={"alarm": constant(True)}),
    ],
    rules=[
        Rule(
            id="overheat",
            condition=leaf(input_ref("tank_temp").cmp_gt(80.0))
            | leaf(output_ref("alarm").cmp_eq(True)),
            actions=["raise_alarm"],
        ),
    ],
)


# -------------------------------------------------------------------------
# Plant model
# -------------------------------------------------------------------------

def plant_step(temp: float, heater_on: bool, dt: timedelta) -> float:
    rate = 4.0 if heater_on else -1.0
    return temp + rate * dt.total_seconds()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    runtime = SyncRuntime(setup)
    io = IoState(inputs={"tank_temp": 20.0}, outputs={"alarm": False, "heater_on": False})

    temp = 20.0
    for cycle in range(40):
        io.set_input("tank_temp", temp)
        fired = runtime.step(io, CYCLE)
        heater_on = io.read_output("heater_on").value
        print(f"{cycle:3d}  temp={temp:6.2f}  heater={'ON ' if heater_on else 'off'}  rules={fired}")
        temp = plant_step(temp, heater_on, CYCLE)
