# examples/absorptive_drop.py
"""
Turn the controller off and let the ball fall onto an absorptive floor.
"""
from pid_sim import SimConfig, SimulationLoop
from pid_sim.renderer import DebugRenderer
from pid_sim.sources import FixedRateClock

config = SimConfig(kp=0.0, boundary="absorptive")
loop = SimulationLoop(config, clock=FixedRateClock(1000.0 * config.timestep),
                      renderer=DebugRenderer(every=30))
state = loop.run(max_frames=301)
print("resting at", state.position, "velocity", state.velocity)
