# MIT License (see LICENSE)
"""
pid_sim - A PID-controlled ball simulator with live tuning.

A single body moves along one vertical axis under gravity. A PID controller
pushes it toward a target height. The simulation runs at a fixed timestep
that does not depend on the host frame rate, and the gains and target can be
changed while it runs.

Main entry points:
    - SimulationLoop: Composes controller, body, scheduler and I/O per frame.
    - SimConfig: All session parameters.
    - PIDController, PhysicsBody, FixedStepScheduler: The core components.
    - TuningMapper and the input events (Quit, SetpointRequest, GainAdjust,
      ResetRequest).

Submodules:
    - core: Controller, body, integrator, scheduler.
    - renderer: Headless renderer adapters.
    - frontend: Optional pygame window.

Example:
    from pid_sim import SimConfig, SimulationLoop
    from pid_sim.sources import FixedRateClock, ScriptedInput
    from pid_sim.tuning import SetpointRequest

    loop = SimulationLoop(SimConfig(kp=40, kd=8), clock=FixedRateClock(1000 / 60),
                          inputs=ScriptedInput({0: [SetpointRequest(600.0)]}))
    state = loop.run(max_frames=600)
"""
from .config import SimConfig
from .core import PIDController, PhysicsBody, FixedStepScheduler
from .loop import SimulationLoop
from .tuning import TuningMapper, Quit, SetpointRequest, GainAdjust, ResetRequest
from .types import FrameState

__all__ = [
    # Loop and configuration
    "SimulationLoop",
    "SimConfig",
    "FrameState",
    # Core
    "PIDController",
    "PhysicsBody",
    "FixedStepScheduler",
    # Tuning
    "TuningMapper",
    "Quit",
    "SetpointRequest",
    "GainAdjust",
    "ResetRequest",
]
