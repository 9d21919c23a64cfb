# examples/step_response.py
"""
Step the target from the middle of the domain to 600 px and print the
response for a few tunings.

Run:
  python examples/step_response.py
"""
from pid_sim import SimConfig, SimulationLoop, SetpointRequest
from pid_sim.renderer import BufferedRenderer
from pid_sim.sources import FixedRateClock, ScriptedInput

TUNINGS = {
    "P only": dict(kp=80.0, ki=0.0, kd=0.0),
    "PD": dict(kp=40.0, ki=0.0, kd=12.0),
    "PID": dict(kp=40.0, ki=20.0, kd=12.0),
}

for name, gains in TUNINGS.items():
    config = SimConfig(**gains)
    renderer = BufferedRenderer()
    loop = SimulationLoop(
        config,
        clock=FixedRateClock(1000.0 * config.timestep),
        inputs=ScriptedInput({0: [SetpointRequest(600.0)]}),
        renderer=renderer,
    )
    loop.run(max_frames=601)

    t, position, setpoint, measured = renderer.trajectory()
    error = setpoint - measured
    print(f"{name:7s} peak={measured.max():7.2f}  final error={error[-1]:7.3f}  "
          f"mean |error| last second={abs(error[-60:]).mean():7.3f}")
