# MIT License (see LICENSE)
"""
The per-frame simulation loop.

SimulationLoop owns the controller, the body, the setpoint (via the
TuningMapper) and the scheduler. Each host frame it:
    1. Polls every pending input event and applies it.
    2. Reads the clock and drains the fixed-step accumulator. Each step
       computes the control output, saturates it and integrates the body.
    3. Hands a FrameState snapshot to the renderer.

All events of a frame are applied before any of its steps run. A Quit event
lets the current frame finish and then stops the loop.

Structure:
    - User builds a SimConfig.
    - User creates SimulationLoop(config, clock, inputs, renderer).
    - User calls loop.run() or loop.step_frame() from their own host loop.
"""
from __future__ import annotations
from contextlib import nullcontext
import logging

from .config import SimConfig
from .core.pid import saturate
from .profiler import Profiler
from .renderer.adapter import RendererAdapter, NullRenderer
from .sources import Clock, InputSource, MonotonicClock, ScriptedInput
from .tuning import TuningMapper, Quit
from .types import FrameState

logger = logging.getLogger(__name__)


class SimulationLoop:
    """
    Couples input, control, physics and rendering.

    Attributes:
        config: Session parameters.
        controller: The PIDController.
        body: The PhysicsBody.
        mapper: TuningMapper holding the setpoint.
        scheduler: FixedStepScheduler.
        running: False once a Quit event has been seen.
        frames: Number of frames completed.
        output: Last saturated control output applied to the body.
    """

    def __init__(
        self,
        config: SimConfig | None = None,
        clock: Clock | None = None,
        inputs: InputSource | None = None,
        renderer: RendererAdapter | None = None,
        profiler: Profiler | None = None,
    ) -> None:
        self.config = config or SimConfig()
        self.clock = clock or MonotonicClock()
        self.inputs = inputs or ScriptedInput()
        self.renderer = renderer or NullRenderer()
        self.profiler = profiler

        self.controller = self.config.build_controller()
        self.body = self.config.build_body()
        self.scheduler = self.config.build_scheduler()
        self.mapper = TuningMapper(
            self.controller,
            self.config.initial_setpoint,
            setpoint_range=self.config.setpoint_range,
        )

        self.running = True
        self.frames = 0
        self.output = 0.0

    @property
    def setpoint(self) -> float:
        return self.mapper.setpoint

    def _section(self, name: str):
        if self.profiler is None:
            return nullcontext()
        return self.profiler.section(name)

    def _physics_step(self, dt: float) -> None:
        """One fixed step: control law, saturation, integration."""
        raw = self.controller.calculate(self.mapper.setpoint, self.body.center, dt)
        force = saturate(raw, self.config.output_limit)
        if force != raw:
            logger.debug("Control output %r saturated to %r", raw, force)
        self.body.update(force, dt)
        self.output = force

    def _poll_inputs(self) -> None:
        for event in self.inputs.poll():
            if isinstance(event, Quit):
                if self.running:
                    logger.info("Quit requested at t=%.3fs", self.scheduler.sim_time)
                self.running = False
            self.mapper.apply(event)

    def snapshot(self, steps: int = 0) -> FrameState:
        """Copy the current state into a FrameState."""
        kp, ki, kd = self.controller.gains
        return FrameState(
            time=self.scheduler.sim_time,
            frame=self.frames,
            steps=steps,
            position=self.body.position,
            velocity=self.body.velocity,
            size=self.body.size,
            extent=self.body.extent,
            setpoint=self.mapper.setpoint,
            measured=self.body.center,
            kp=kp,
            ki=ki,
            kd=kd,
            integral=self.controller.integral,
            output=self.output,
        )

    def step_frame(self) -> FrameState:
        """
        Run one host frame.

        Returns:
            The FrameState handed to the renderer.
        """
        with self._section("input"):
            self._poll_inputs()

        with self._section("physics"):
            frame_time = self.scheduler.tick(self.clock.now())
            steps = self.scheduler.advance(frame_time, self._physics_step)

        state = self.snapshot(steps)
        with self._section("render"):
            self.renderer.render(state)

        self.frames += 1
        return state

    def run(self, max_frames: int | None = None) -> FrameState:
        """
        Run frames until a Quit event or max_frames frames.

        Args:
            max_frames: Frame budget for this call (None = unbounded).

        Returns:
            State of the last frame run (a fresh snapshot if none ran).
        """
        state = None
        n = 0
        while self.running and (max_frames is None or n < max_frames):
            state = self.step_frame()
            n += 1
        logger.debug("Loop ran %d frames, %d steps", n, self.scheduler.steps_taken)
        return state if state is not None else self.snapshot()
