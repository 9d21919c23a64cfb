# MIT License (see LICENSE)
"""
Default parameters for the ball simulation.

Lengths are in pixels and times in seconds. The domain is a vertical column
``DOMAIN_EXTENT`` pixels tall; heights are measured upward from the floor.
"""
from __future__ import annotations

# Window / domain geometry
WINDOW_WIDTH: int = 800
DOMAIN_EXTENT: float = 800.0
BALL_SIZE: float = 30.0

# Downward acceleration in px/s². The ball has unit mass, so the controller
# output is directly an upward acceleration.
GRAVITY: float = 98.0
BALL_MASS: float = 1.0

FIXED_TIMESTEP: float = 1.0 / 60.0

# Largest wall-clock delta accepted per host frame. Anything beyond this is
# dropped so a stalled host cannot queue an unbounded number of steps.
MAX_FRAME_TIME: float = 0.25

# Controller defaults
DEFAULT_KP: float = 80.0
DEFAULT_KI: float = 0.0
DEFAULT_KD: float = 0.0
INTEGRAL_LIMIT: float = 1000.0
OUTPUT_LIMIT: float = 1.0e6

# Boundary response
RESTITUTION: float = 0.3
DAMPING: float = 1.0

# Key step sizes for live tuning
KP_STEP: float = 5.0
KI_STEP: float = 0.1
KD_STEP: float = 5.0
