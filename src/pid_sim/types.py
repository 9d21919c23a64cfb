# MIT License (see LICENSE)
"""
Snapshot handed from the simulation loop to renderers.

A FrameState is an immutable copy taken after the fixed steps of one host
frame have run, so a renderer can never mutate simulation state.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class FrameState:
    """
    State of the simulation at the end of a host frame.

    Attributes:
        time: Simulated time in seconds.
        frame: Host frame index (0-based).
        steps: Fixed steps run during this frame.
        position: Height of the body's lower edge.
        velocity: Body velocity, positive upward.
        size: Body height.
        extent: Domain height.
        setpoint: Target height of the body center.
        measured: Current height of the body center.
        kp, ki, kd: Controller gains.
        integral: Controller integral term.
        output: Last (saturated) control output applied to the body.
    """
    time: float
    frame: int
    steps: int
    position: float
    velocity: float
    size: float
    extent: float
    setpoint: float
    measured: float
    kp: float
    ki: float
    kd: float
    integral: float
    output: float

    @property
    def error(self) -> float:
        return self.setpoint - self.measured

    def to_dict(self) -> dict:
        return asdict(self)
