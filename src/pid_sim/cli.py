# MIT License (see LICENSE)
"""
Command-line entry point.

    pid-sim                                # interactive pygame window
    pid-sim --kp 40 --kd 5 --boundary absorptive
    pid-sim --headless 5 --target 600 --print-every 30
"""
from __future__ import annotations
import argparse
import logging
import math
import sys

from .config import SimConfig
from .constants import DEFAULT_KP, DEFAULT_KI, DEFAULT_KD, INTEGRAL_LIMIT, DAMPING, RESTITUTION, FIXED_TIMESTEP, MAX_FRAME_TIME
from .core.body import BOUNDARY_POLICIES
from .loop import SimulationLoop
from .profiler import Profiler
from .renderer.adapter import DebugRenderer
from .sources import FixedRateClock, ScriptedInput
from .tuning import SetpointRequest

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pid-sim", description="PID-controlled ball simulator.")
    p.add_argument("--kp", type=float, default=DEFAULT_KP)
    p.add_argument("--ki", type=float, default=DEFAULT_KI)
    p.add_argument("--kd", type=float, default=DEFAULT_KD)
    p.add_argument("--boundary", choices=BOUNDARY_POLICIES, default="reflective")
    p.add_argument("--damping", type=float, default=DAMPING)
    p.add_argument("--restitution", type=float, default=RESTITUTION)
    p.add_argument("--integral-limit", type=float, default=INTEGRAL_LIMIT)
    p.add_argument("--timestep", type=float, default=FIXED_TIMESTEP)
    p.add_argument("--max-frame-time", type=float, default=MAX_FRAME_TIME)
    p.add_argument("--headless", type=float, metavar="SECONDS",
                   help="Run without a window for SECONDS of simulated time.")
    p.add_argument("--target", type=float, help="Setpoint requested on the first frame.")
    p.add_argument("--print-every", type=int, default=10, help="Headless: print every N frames.")
    p.add_argument("--profile", action="store_true", help="Print per-phase timings on exit.")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run_headless(config: SimConfig, seconds: float, target: float | None = None,
                 print_every: int = 10, profiler: Profiler | None = None, output=None):
    """Run the loop against a fixed-rate clock, one step per frame."""
    script = {0: [SetpointRequest(target)]} if target is not None else {}
    loop = SimulationLoop(
        config,
        clock=FixedRateClock(config.timestep * 1000.0),
        inputs=ScriptedInput(script),
        renderer=DebugRenderer(output, every=print_every),
        profiler=profiler,
    )
    # The first frame only primes the clock.
    frames = math.ceil(seconds / config.timestep - 1e-9) + 1
    return loop.run(max_frames=frames)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    try:
        config = SimConfig(
            kp=args.kp,
            ki=args.ki,
            kd=args.kd,
            boundary=args.boundary,
            damping=args.damping,
            restitution=args.restitution,
            integral_limit=args.integral_limit,
            timestep=args.timestep,
            max_frame_time=args.max_frame_time,
        )
    except ValueError as e:
        parser.error(str(e))
    if args.print_every < 1:
        parser.error(f"--print-every must be >= 1, got {args.print_every}")

    profiler = Profiler() if args.profile else None

    if args.headless is not None:
        state = run_headless(config, args.headless, args.target, args.print_every, profiler)
        print(f"final: t={state.time:.3f} height={state.measured:.2f} target={state.setpoint:.1f}")
    else:
        try:
            from .frontend.pygame_app import run_app
            if args.target is not None:
                config = config.replace(setpoint=args.target)
            run_app(config, profiler=profiler)
        except Exception:
            logger.exception("Interactive frontend failed")
            return 1

    if profiler is not None:
        for name, stats in profiler.stats.summary().items():
            print(f"{name:8s} n={stats['n']:6d} mean={stats['mean_ms']:.3f}ms max={stats['max_ms']:.3f}ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
