# MIT License (see LICENSE)
"""
Time integration for the one-dimensional body.

The equations of motion are
    dx/dt = v,    dv/dt = a
with the acceleration held constant over a step.

Semi-implicit (symplectic) Euler updates the velocity first and then moves
the position with the *new* velocity. It costs the same as explicit Euler but
does not pump energy into oscillating systems, which matters here since a
P-only controller turns the ball into an undamped spring.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations


def semi_implicit_euler(
    position: float,
    velocity: float,
    acceleration: float,
    dt: float,
    damping: float = 1.0,
) -> tuple[float, float]:
    """
    Advance (position, velocity) by one step.

    Args:
        position: Current position.
        velocity: Current velocity.
        acceleration: Net acceleration over the step.
        dt: Timestep in seconds.
        damping: Multiplicative velocity retention per step, in (0, 1].

    Returns:
        (new_position, new_velocity)
    """
    velocity = (velocity + acceleration * dt) * damping
    position = position + velocity * dt
    return position, velocity
