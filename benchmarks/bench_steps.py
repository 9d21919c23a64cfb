"""
Microbenchmark: fixed simulation steps per second.
Run:
  python benchmarks/bench_steps.py
"""
import time

from pid_sim import SimConfig, SimulationLoop, SetpointRequest
from pid_sim.profiler import Profiler
from pid_sim.sources import ManualClock, ScriptedInput


def run(frame_ms: float, frames: int = 2000):
    prof = Profiler()
    clock = ManualClock()
    config = SimConfig(kp=40.0, ki=5.0, kd=12.0)
    loop = SimulationLoop(config, clock=clock, inputs=ScriptedInput({0: [SetpointRequest(600.0)]}),
                          profiler=prof)

    t0 = time.perf_counter()
    for _ in range(frames):
        loop.step_frame()
        clock.advance(frame_ms)
    t1 = time.perf_counter()

    steps = loop.scheduler.steps_taken
    return steps / (t1 - t0), prof.stats.summary()


if __name__ == "__main__":
    for frame_ms in [4.0, 16.7, 50.0, 250.0]:
        steps_per_s, summary = run(frame_ms)
        print(f"frame={frame_ms:6.1f} ms  steps/s={steps_per_s:10.1f}")
        for k in ["input", "physics", "render"]:
            print(" ", k, summary[k])
        print()
