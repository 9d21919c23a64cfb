# MIT License (see LICENSE)
"""
Fixed-timestep scheduling (accumulator pattern).

The host loop runs at whatever rate the display allows. The simulation must
not care: elapsed wall-clock time is accumulated and drained in constant
``timestep`` slices, so the trajectory depends only on the number of steps,
never on how frame deltas were sliced.

Two details make this hold exactly:
    - Time is accumulated in integer nanoseconds. A float accumulator fed
      one 0.1 s delta drains 9 steps of 0.01 s instead of 10.
    - Each frame delta is capped at ``max_frame_time``. Without a cap a long
      host stall would queue an unbounded number of steps ("spiral of
      death"). Time above the cap is dropped.

Reference:
    https://gafferongames.com/post/fix_your_timestep/
"""
from __future__ import annotations
from typing import Callable
import logging
import math

from ..constants import FIXED_TIMESTEP, MAX_FRAME_TIME

logger = logging.getLogger(__name__)

_NS_PER_S = 1_000_000_000

# Time is counted in whole nanoseconds, so no step can be shorter than one.
MIN_TIMESTEP: float = 1e-9


def _to_ns(seconds: float) -> int:
    return round(seconds * _NS_PER_S)


class FixedStepScheduler:
    """
    Converts variable frame deltas into a sequence of equal-length steps.

    Attributes:
        timestep: Duration of one simulation step in seconds.
        max_frame_time: Largest frame delta accepted by advance().
        last_tick: Clock reading (ms) of the previous tick(), or None.
        steps_taken: Total number of steps run since construction/reset.

    Example:
        scheduler = FixedStepScheduler(timestep=1/60)
        dt_frame = scheduler.tick(clock.now())
        scheduler.advance(dt_frame, simulate)
    """

    def __init__(self, timestep: float = FIXED_TIMESTEP, max_frame_time: float = MAX_FRAME_TIME) -> None:
        if not (timestep > 0 and math.isfinite(timestep)):
            raise ValueError(f"timestep must be a positive finite number, got {timestep}")
        if timestep < MIN_TIMESTEP:
            raise ValueError(f"timestep must be at least {MIN_TIMESTEP}s, got {timestep}")
        if not (max_frame_time >= timestep and math.isfinite(max_frame_time)):
            raise ValueError(f"max_frame_time must be finite and >= timestep, got {max_frame_time}")
        self.timestep = float(timestep)
        self.max_frame_time = float(max_frame_time)
        self._step_ns = _to_ns(self.timestep)
        self._max_frame_ns = _to_ns(self.max_frame_time)
        self._accumulated_ns = 0
        self.last_tick: float | None = None
        self.steps_taken = 0

    @property
    def accumulated(self) -> float:
        """Residual time (seconds) waiting for the next step."""
        return self._accumulated_ns / _NS_PER_S

    @property
    def sim_time(self) -> float:
        """Total simulated time in seconds."""
        return self.steps_taken * self.timestep

    @property
    def max_steps_per_frame(self) -> int:
        """Upper bound on the steps a single advance() can run."""
        return (self._max_frame_ns + self._step_ns - 1) // self._step_ns

    def tick(self, now: float) -> float:
        """
        Record a monotonic clock reading and return the delta since the last.

        Args:
            now: Monotonic time in milliseconds.

        Returns:
            Elapsed seconds. 0 on the first tick and when the clock
            went backwards.
        """
        if self.last_tick is None:
            self.last_tick = now
            return 0.0
        delta = (now - self.last_tick) / 1000.0
        self.last_tick = now
        return max(0.0, delta)

    def advance(self, frame_time: float, step: Callable[[float], None]) -> int:
        """
        Accumulate frame_time and run every whole step it makes available.

        Args:
            frame_time: Wall-clock seconds since the previous frame.
            step: Called once per step with dt = timestep, in temporal order.

        Returns:
            Number of steps run.
        """
        if not frame_time >= 0:
            raise ValueError(f"frame_time must be >= 0, got {frame_time}")
        if frame_time > self.max_frame_time:
            logger.warning("Frame took %.3fs, dropping %.3fs beyond the %.3fs cap",
                           frame_time, frame_time - self.max_frame_time, self.max_frame_time)
            frame_time = self.max_frame_time

        self._accumulated_ns += _to_ns(frame_time)

        n = 0
        while self._accumulated_ns >= self._step_ns:
            step(self.timestep)
            self._accumulated_ns -= self._step_ns
            self.steps_taken += 1
            n += 1
        return n

    def reset(self) -> None:
        """Forget the residual, the last tick and the step count."""
        self._accumulated_ns = 0
        self.last_tick = None
        self.steps_taken = 0
