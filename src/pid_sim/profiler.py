# MIT License (see LICENSE)
"""
Per-phase timing for the simulation loop.

The loop wraps its input, physics and render phases in profiler sections
when a Profiler is supplied:

    profiler = Profiler()
    loop = SimulationLoop(config, clock, inputs, renderer, profiler=profiler)
    loop.run(max_frames=600)
    print(profiler.stats.summary()["physics"])
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator
import time


@dataclass
class ProfileStats:
    """Timing samples (seconds) keyed by section name."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, elapsed: float) -> None:
        self.samples.setdefault(name, []).append(elapsed)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summarize every section.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms', 'total_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * sum(times) / len(times),
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * sum(times),
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Context-manager profiler built on time.perf_counter()."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """Time the enclosed block under ``name``."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
