# MIT License (see LICENSE)
"""
Input events and their effect on the controller.

An input source (keyboard/mouse frontend, a script, a test) produces plain
event objects. TuningMapper turns each one into a mutation of the controller
gains or the setpoint. The simulation loop handles Quit itself.

Policies:
    - A setpoint change clears the integral. The old integral was
      accumulated against a different target and would only add overshoot.
      prev_error is kept so the derivative term does not kick.
    - ResetRequest resets the controller memory and keeps the gains.
    - Gains never go below zero.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import math

from .core.pid import PIDController, GAINS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quit:
    """Stop the simulation after the current frame."""


@dataclass(frozen=True)
class SetpointRequest:
    """
    Move the target.

    Attributes:
        y: Desired height of the body center.
    """
    y: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.y):
            raise ValueError(f"Setpoint must be finite, got {self.y}")


@dataclass(frozen=True)
class GainAdjust:
    """
    Nudge one gain.

    Attributes:
        gain: "kp", "ki" or "kd".
        delta: Signed increment.
    """
    gain: str
    delta: float

    def __post_init__(self) -> None:
        if self.gain not in GAINS:
            raise ValueError(f"Unknown gain: {self.gain!r} (expected one of {GAINS})")
        if not math.isfinite(self.delta):
            raise ValueError(f"Gain delta must be finite, got {self.delta}")


@dataclass(frozen=True)
class ResetRequest:
    """Zero the controller's integral and derivative memory."""


InputEvent = Quit | SetpointRequest | GainAdjust | ResetRequest


class TuningMapper:
    """
    Applies input events to a controller and a setpoint.

    Attributes:
        controller: The PID controller being tuned.
        setpoint: Current target height of the body center.
        setpoint_range: (low, high) bounds applied to requested setpoints.
    """

    def __init__(
        self,
        controller: PIDController,
        setpoint: float,
        setpoint_range: tuple[float, float] = (float("-inf"), float("inf")),
    ) -> None:
        self.controller = controller
        self.setpoint_range = setpoint_range
        self.setpoint = self._clamp_setpoint(setpoint)

    def _clamp_setpoint(self, y: float) -> float:
        if not math.isfinite(y):
            raise ValueError(f"Setpoint must be finite, got {y}")
        lo, hi = self.setpoint_range
        return min(max(float(y), lo), hi)

    def apply(self, event: InputEvent) -> None:
        """
        Apply one event.

        Raises:
            TypeError: If the event is not one of the known event types.
        """
        if isinstance(event, SetpointRequest):
            self.setpoint = self._clamp_setpoint(event.y)
            self.controller.clear_integral()
            logger.debug("setpoint -> %.1f", self.setpoint)
        elif isinstance(event, GainAdjust):
            self.controller.adjust_gain(event.gain, event.delta)
        elif isinstance(event, ResetRequest):
            self.controller.reset()
            logger.info("PID memory reset (kp=%.4g, ki=%.4g, kd=%.4g)", *self.controller.gains)
        elif isinstance(event, Quit):
            pass
        else:
            raise TypeError(f"Unknown input event: {event!r}")
