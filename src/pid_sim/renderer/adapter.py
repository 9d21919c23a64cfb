# MIT License (see LICENSE)
"""
Renderer adapters for the simulation loop.

The loop never draws. Once per host frame it hands a FrameState to a
renderer. The adapters here need no graphics library; the pygame window lives
in ``pid_sim.frontend``.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TextIO
import sys

import numpy as np

from ..types import FrameState


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer.begin_frame(state.time)
        renderer.draw_state(state)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render(state)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame.

        Args:
            time: Simulated time in seconds.
        """
        ...

    @abstractmethod
    def draw_state(self, state: FrameState) -> None:
        """Draw the body, setpoint and controller readout."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Present the frame."""
        ...

    def render(self, state: FrameState) -> None:
        self.begin_frame(state.time)
        self.draw_state(state)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for headless runs.

    Writes one line every ``every`` frames:
        t=  1.000 y= 385.02 v=  -3.10 sp= 400.0 err=  14.98 kp=80.0 ki=0.00 kd=0.0
    """

    def __init__(self, output: TextIO | None = None, every: int = 1):
        if every < 1:
            raise ValueError(f"every must be >= 1, got {every}")
        self.output = output or sys.stdout
        self.every = every
        self._current_time = 0.0

    def begin_frame(self, time: float) -> None:
        self._current_time = time

    def draw_state(self, state: FrameState) -> None:
        if state.frame % self.every:
            return
        self.output.write(
            f"t={self._current_time:7.3f} y={state.measured:7.2f} v={state.velocity:7.2f} "
            f"sp={state.setpoint:6.1f} err={state.error:7.2f} "
            f"kp={state.kp:.1f} ki={state.ki:.2f} kd={state.kd:.1f}\n"
        )

    def end_frame(self) -> None:
        self.output.flush()


class NullRenderer(RendererAdapter):
    """Renderer that does nothing."""

    def begin_frame(self, time: float) -> None:
        pass

    def draw_state(self, state: FrameState) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records every frame for later inspection.

    Example:
        renderer = BufferedRenderer()
        SimulationLoop(config, clock, inputs, renderer).run(max_frames=600)
        t, position, setpoint, measured = renderer.trajectory()
    """

    def __init__(self):
        self.frames: list[FrameState] = []
        self._pending: FrameState | None = None

    def begin_frame(self, time: float) -> None:
        self._pending = None

    def draw_state(self, state: FrameState) -> None:
        self._pending = state

    def end_frame(self) -> None:
        if self._pending is not None:
            self.frames.append(self._pending)
            self._pending = None

    def trajectory(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        """
        Recorded frames as arrays.

        Returns:
            (time, position, setpoint, measured), each of shape (n_frames,).
        """
        data = np.array(
            [(f.time, f.position, f.setpoint, f.measured) for f in self.frames],
            dtype=np.float64,
        ).reshape(-1, 4)
        return data[:, 0], data[:, 1], data[:, 2], data[:, 3]

    def clear(self) -> None:
        self.frames.clear()
