# MIT License (see LICENSE)
"""
Checks and diagnostic quantities for simulation state.

Used by the test-suite to verify invariants after every step, and handy when
debugging a tuning session that misbehaves.
"""
from __future__ import annotations

from .body import PhysicsBody
from .pid import PIDController


def body_within_bounds(body: PhysicsBody) -> bool:
    """True if 0 <= position <= extent - size."""
    return 0.0 <= body.position <= body.upper_bound


def integral_within_limit(pid: PIDController) -> bool:
    """True if |integral| <= integral_limit."""
    return abs(pid.integral) <= pid.integral_limit


def mechanical_energy(body: PhysicsBody) -> float:
    """
    Kinetic plus gravitational potential energy of the body.

    E = 0.5·m·v² + m·g·h, with h the height of the lower edge.

    With no applied force, damping 1 and no boundary contact this is
    conserved up to integration error. Reflective bounces remove a fraction
    (1 - restitution²) of the kinetic part.
    """
    return 0.5 * body.mass * body.velocity * body.velocity + body.mass * body.gravity * body.position
