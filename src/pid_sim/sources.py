# MIT License (see LICENSE)
"""
Clocks and input sources consumed by the simulation loop.

The loop only needs two narrow interfaces:
    - Clock.now() -> float, monotonic milliseconds, read once per frame.
    - InputSource.poll() -> iterable of events, never blocking.

The pygame frontend provides its own implementations. The ones here cover
headless runs and tests.
"""
from __future__ import annotations
from typing import Iterable, Mapping, Protocol, Sequence
import time

from .tuning import InputEvent


class Clock(Protocol):
    def now(self) -> float:
        ...


class InputSource(Protocol):
    def poll(self) -> Iterable[InputEvent]:
        ...


class MonotonicClock:
    """Wall clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.t = float(start)

    def now(self) -> float:
        return self.t

    def advance(self, ms: float) -> None:
        self.t += ms


class FixedRateClock:
    """
    Clock that advances by a fixed period on every read.

    Since the loop reads the clock once per frame, this emulates a host
    running at exactly 1000/period_ms frames per second.
    """

    def __init__(self, period_ms: float, start: float = 0.0) -> None:
        self.period_ms = float(period_ms)
        self.t = float(start) - self.period_ms

    def now(self) -> float:
        self.t += self.period_ms
        return self.t


class ScriptedInput:
    """
    Replays events keyed by frame index.

    Example:
        inputs = ScriptedInput({0: [SetpointRequest(600.0)], 120: [Quit()]})
    """

    def __init__(self, script: Mapping[int, Sequence[InputEvent]] | None = None) -> None:
        self.script = dict(script or {})
        self.frame = 0

    def poll(self) -> list[InputEvent]:
        events = list(self.script.get(self.frame, ()))
        self.frame += 1
        return events
