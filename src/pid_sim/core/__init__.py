# MIT License (see LICENSE)
"""
Core simulation components.

This subpackage provides:
    - PIDController: The control law with clamped integral.
    - PhysicsBody: 1-DOF body with gravity, damping and boundary response.
    - FixedStepScheduler: Fixed-timestep accumulator.
    - semi_implicit_euler: The integration step used by PhysicsBody.

Typical usage:
    from pid_sim.core import PIDController, PhysicsBody, FixedStepScheduler

    pid, body = PIDController(kp=80.0), PhysicsBody()
    scheduler = FixedStepScheduler(timestep=1/60)
    scheduler.advance(0.1, lambda dt: body.update(pid.calculate(400.0, body.center, dt), dt))
"""
from .pid import PIDController, saturate, GAINS
from .body import PhysicsBody, BOUNDARY_POLICIES
from .scheduler import FixedStepScheduler
from .integrators import semi_implicit_euler
from .invariants import body_within_bounds, integral_within_limit, mechanical_energy

__all__ = [
    # Controller
    "PIDController",
    "saturate",
    "GAINS",
    # Body
    "PhysicsBody",
    "BOUNDARY_POLICIES",
    "semi_implicit_euler",
    # Scheduling
    "FixedStepScheduler",
    # Diagnostics
    "body_within_bounds",
    "integral_within_limit",
    "mechanical_energy",
]
