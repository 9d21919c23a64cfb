# MIT License (see LICENSE)
"""
PID control law with clamped integral (anti-windup).

The controller evaluates
    u = kp·e + ki·∫e dt + kd·de/dt,    e = setpoint - measured
one control interval at a time. The integral and the previous error are
internal memory, so ``calculate`` is deliberately stateful: each call stands
for one elapsed interval of length ``dt``.

Reference:
    https://en.wikipedia.org/wiki/PID_controller
    https://en.wikipedia.org/wiki/Integral_windup
"""
from __future__ import annotations
import logging
import math

import numpy as np

from ..constants import DEFAULT_KP, DEFAULT_KI, DEFAULT_KD, INTEGRAL_LIMIT

logger = logging.getLogger(__name__)

GAINS: tuple[str, ...] = ("kp", "ki", "kd")


def saturate(value: float, limit: float) -> float:
    """
    Clip a control output to [-limit, limit].

    NaN maps to 0 and ±inf map to the corresponding bound, so the result is
    always finite and safe to feed into the integrator.
    """
    if math.isnan(value):
        return 0.0
    return float(np.clip(value, -limit, limit))


class PIDController:
    """
    Single-loop PID controller.

    Attributes:
        kp, ki, kd: Non-negative gains. Mutate through adjust_gain() so
                    the non-negativity constraint is kept.
        integral_limit: Symmetric bound on the accumulated integral.

    Example:
        pid = PIDController(kp=80.0)
        force = pid.calculate(setpoint=400.0, measured_value=350.0, dt=1/60)
    """

    def __init__(
        self,
        kp: float = DEFAULT_KP,
        ki: float = DEFAULT_KI,
        kd: float = DEFAULT_KD,
        integral_limit: float = INTEGRAL_LIMIT,
    ) -> None:
        if min(kp, ki, kd) < 0:
            raise ValueError(f"PID gains must be non-negative, got kp={kp}, ki={ki}, kd={kd}")
        if not integral_limit > 0:
            raise ValueError(f"integral_limit must be positive, got {integral_limit}")
        self.kp = float(kp)
        self.ki = float(ki)
        self.kd = float(kd)
        self.integral_limit = float(integral_limit)
        self._integral = 0.0
        self._prev_error = 0.0

    @property
    def integral(self) -> float:
        return self._integral

    @property
    def prev_error(self) -> float:
        return self._prev_error

    @property
    def gains(self) -> tuple[float, float, float]:
        """Current (kp, ki, kd)."""
        return self.kp, self.ki, self.kd

    def calculate(self, setpoint: float, measured_value: float, dt: float) -> float:
        """
        Evaluate the control law over one interval.

        Args:
            setpoint: Desired value of the controlled variable.
            measured_value: Current value of the controlled variable.
            dt: Length of the control interval in seconds. Must be > 0.

        Returns:
            Control output kp·e + ki·I + kd·D.

        Raises:
            ValueError: If dt is not a positive finite number.
        """
        if not (dt > 0 and math.isfinite(dt)):
            raise ValueError(f"dt must be a positive finite number, got {dt}")

        error = setpoint - measured_value

        # Clamping discards any accumulated error beyond the limit.
        self._integral = float(np.clip(self._integral + error * dt,
                                       -self.integral_limit, self.integral_limit))

        derivative = (error - self._prev_error) / dt
        self._prev_error = error

        return self.kp * error + self.ki * self._integral + self.kd * derivative

    def reset(self) -> None:
        """Zero the integral and previous error. Gains are left untouched."""
        self._integral = 0.0
        self._prev_error = 0.0

    def clear_integral(self) -> None:
        """Zero the integral only, keeping prev_error (no derivative kick)."""
        self._integral = 0.0

    def adjust_gain(self, gain: str, delta: float) -> float:
        """
        Add delta to one gain and clamp the result to >= 0.

        Args:
            gain: One of "kp", "ki", "kd".
            delta: Signed increment.

        Returns:
            The new gain value.
        """
        if gain not in GAINS:
            raise ValueError(f"Unknown gain: {gain!r} (expected one of {GAINS})")
        if not math.isfinite(delta):
            raise ValueError(f"delta must be finite, got {delta}")
        value = max(0.0, getattr(self, gain) + delta)
        setattr(self, gain, value)
        logger.info("%s -> %.4g", gain, value)
        return value

    def __repr__(self) -> str:
        return (f"PIDController(kp={self.kp}, ki={self.ki}, kd={self.kd}, "
                f"integral={self._integral:.4g})")
