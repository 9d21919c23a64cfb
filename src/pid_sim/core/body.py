# MIT License (see LICENSE)
"""
The controlled body: a block moving along one vertical axis.

Heights are measured upward from the floor, and ``position`` is the height
of the block's lower edge. After every update the block lies fully inside
the domain:

    0 <= position <= extent - size

Boundary response is a policy choice:
    - "reflective": clamp and bounce, v ← -restitution·v
    - "absorptive": clamp and stop, v ← 0
"""
from __future__ import annotations
from dataclasses import dataclass
import math

from ..constants import (
    DOMAIN_EXTENT,
    BALL_SIZE,
    BALL_MASS,
    GRAVITY,
    DAMPING,
    RESTITUTION,
)
from .integrators import semi_implicit_euler

BOUNDARY_POLICIES: tuple[str, ...] = ("reflective", "absorptive")


@dataclass
class PhysicsBody:
    """
    A 1-DOF body under gravity plus an applied vertical force.

    Attributes:
        extent: Height of the domain.
        size: Height of the body (constant).
        mass: Mass; the applied force is divided by it.
        gravity: Downward acceleration magnitude.
        damping: Velocity retention factor per step, in (0, 1].
        restitution: Bounce coefficient in [0, 1] for the reflective policy.
        boundary: "reflective" or "absorptive".
        position: Height of the lower edge. Defaults to centered in the domain.
        velocity: Vertical velocity, positive upward.
    """
    extent: float = DOMAIN_EXTENT
    size: float = BALL_SIZE
    mass: float = BALL_MASS
    gravity: float = GRAVITY
    damping: float = DAMPING
    restitution: float = RESTITUTION
    boundary: str = "reflective"
    position: float | None = None
    velocity: float = 0.0

    def __post_init__(self) -> None:
        if not 0 < self.size < self.extent:
            raise ValueError(f"size must be in (0, extent), got size={self.size}, extent={self.extent}")
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
        if not 0 < self.damping <= 1:
            raise ValueError(f"damping must be in (0, 1], got {self.damping}")
        if not 0 <= self.restitution <= 1:
            raise ValueError(f"restitution must be in [0, 1], got {self.restitution}")
        if self.boundary not in BOUNDARY_POLICIES:
            raise ValueError(f"Unknown boundary policy: {self.boundary!r} (expected one of {BOUNDARY_POLICIES})")

        if self.position is None:
            self.position = 0.5 * (self.extent - self.size)
        self.position = float(self.position)
        self.velocity = float(self.velocity)
        if not 0 <= self.position <= self.upper_bound:
            raise ValueError(f"position {self.position} outside [0, {self.upper_bound}]")

    @property
    def upper_bound(self) -> float:
        """Largest allowed position (body touching the ceiling)."""
        return self.extent - self.size

    @property
    def center(self) -> float:
        """Height of the body's center, the controlled variable."""
        return self.position + 0.5 * self.size

    def update(self, force: float, dt: float) -> None:
        """
        Integrate one step with semi-implicit Euler, then apply boundaries.

        Args:
            force: Applied upward force.
            dt: Timestep in seconds. Must be > 0.

        Raises:
            ValueError: On a non-positive dt or a non-finite force.
        """
        if not (dt > 0 and math.isfinite(dt)):
            raise ValueError(f"dt must be a positive finite number, got {dt}")
        if not math.isfinite(force):
            raise ValueError(f"force must be finite, got {force}")

        acceleration = force / self.mass - self.gravity
        self.position, self.velocity = semi_implicit_euler(
            self.position, self.velocity, acceleration, dt, self.damping
        )
        self._apply_boundary_constraints()

    def _apply_boundary_constraints(self) -> None:
        if self.position < 0.0:
            self.position = 0.0
        elif self.position > self.upper_bound:
            self.position = self.upper_bound
        else:
            return

        if self.boundary == "reflective":
            self.velocity *= -self.restitution
        else:
            self.velocity = 0.0
