# MIT License (see LICENSE)
"""
Simulation configuration.

All tunable parameters of one session live in a single frozen dataclass.
There is no configuration file: values come from the defaults in
``constants`` or from command-line flags (see ``cli``).
"""
from __future__ import annotations
from dataclasses import dataclass, replace as _replace
import math

from .constants import (
    DOMAIN_EXTENT,
    BALL_SIZE,
    BALL_MASS,
    GRAVITY,
    DAMPING,
    RESTITUTION,
    DEFAULT_KP,
    DEFAULT_KI,
    DEFAULT_KD,
    INTEGRAL_LIMIT,
    OUTPUT_LIMIT,
    FIXED_TIMESTEP,
    MAX_FRAME_TIME,
)
from .core.body import PhysicsBody, BOUNDARY_POLICIES
from .core.pid import PIDController
from .core.scheduler import FixedStepScheduler, MIN_TIMESTEP


@dataclass(frozen=True)
class SimConfig:
    """
    Parameters of a simulation session.

    Attributes:
        extent: Domain height.
        size: Body height.
        mass: Body mass.
        gravity: Downward acceleration.
        damping: Velocity retention per step, in (0, 1].
        boundary: "reflective" or "absorptive".
        restitution: Bounce coefficient for the reflective policy.
        kp, ki, kd: Initial PID gains.
        integral_limit: Anti-windup clamp on the integral.
        output_limit: Saturation applied to the controller output.
        timestep: Fixed simulation step in seconds.
        max_frame_time: Cap on the wall-clock delta consumed per frame.
        setpoint: Initial target height of the body center
                  (None = middle of the domain).
    """
    extent: float = DOMAIN_EXTENT
    size: float = BALL_SIZE
    mass: float = BALL_MASS
    gravity: float = GRAVITY
    damping: float = DAMPING
    boundary: str = "reflective"
    restitution: float = RESTITUTION
    kp: float = DEFAULT_KP
    ki: float = DEFAULT_KI
    kd: float = DEFAULT_KD
    integral_limit: float = INTEGRAL_LIMIT
    output_limit: float = OUTPUT_LIMIT
    timestep: float = FIXED_TIMESTEP
    max_frame_time: float = MAX_FRAME_TIME
    setpoint: float | None = None

    def __post_init__(self) -> None:
        if not 0 < self.size < self.extent:
            raise ValueError(f"size must be in (0, extent), got size={self.size}, extent={self.extent}")
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
        if not 0 < self.damping <= 1:
            raise ValueError(f"damping must be in (0, 1], got {self.damping}")
        if self.boundary not in BOUNDARY_POLICIES:
            raise ValueError(f"Unknown boundary policy: {self.boundary!r} (expected one of {BOUNDARY_POLICIES})")
        if not 0 <= self.restitution <= 1:
            raise ValueError(f"restitution must be in [0, 1], got {self.restitution}")
        if min(self.kp, self.ki, self.kd) < 0:
            raise ValueError("PID gains must be non-negative")
        if not self.integral_limit > 0:
            raise ValueError(f"integral_limit must be positive, got {self.integral_limit}")
        if not (self.output_limit > 0 and math.isfinite(self.output_limit)):
            raise ValueError(f"output_limit must be positive and finite, got {self.output_limit}")
        if not (self.timestep >= MIN_TIMESTEP and math.isfinite(self.timestep)):
            raise ValueError(f"timestep must be finite and at least {MIN_TIMESTEP}s, got {self.timestep}")
        if not (self.max_frame_time >= self.timestep and math.isfinite(self.max_frame_time)):
            raise ValueError(f"max_frame_time must be finite and >= timestep, got {self.max_frame_time}")
        if self.setpoint is not None and not math.isfinite(self.setpoint):
            raise ValueError(f"setpoint must be finite, got {self.setpoint}")

    @property
    def setpoint_range(self) -> tuple[float, float]:
        """Reachable range of the body center."""
        half = 0.5 * self.size
        return half, self.extent - half

    @property
    def initial_setpoint(self) -> float:
        if self.setpoint is None:
            return 0.5 * self.extent
        lo, hi = self.setpoint_range
        return min(max(self.setpoint, lo), hi)

    def build_controller(self) -> PIDController:
        return PIDController(self.kp, self.ki, self.kd, integral_limit=self.integral_limit)

    def build_body(self) -> PhysicsBody:
        return PhysicsBody(
            extent=self.extent,
            size=self.size,
            mass=self.mass,
            gravity=self.gravity,
            damping=self.damping,
            restitution=self.restitution,
            boundary=self.boundary,
        )

    def build_scheduler(self) -> FixedStepScheduler:
        return FixedStepScheduler(self.timestep, self.max_frame_time)

    def replace(self, **changes) -> "SimConfig":
        """Return a copy with some fields changed (validated again)."""
        return _replace(self, **changes)
