# MIT License (see LICENSE)
"""
Interactive pygame window for tuning the controller.

Controls:
    Mouse click         - Set target
    Up / Down           - kp ± 5
    Right / Left        - ki ± 0.1
    PageUp / PageDown   - kd ± 5
    R                   - Reset PID memory
    Esc / close window  - Quit

pygame's y axis grows downward while the simulation measures heights
upward from the floor, so this module converts between the two.
"""
from __future__ import annotations
import logging

import pygame

from ..config import SimConfig
from ..constants import WINDOW_WIDTH, KP_STEP, KI_STEP, KD_STEP
from ..loop import SimulationLoop
from ..profiler import Profiler
from ..renderer.adapter import RendererAdapter
from ..tuning import InputEvent, Quit, SetpointRequest, GainAdjust, ResetRequest
from ..types import FrameState

logger = logging.getLogger(__name__)

BACKGROUND = (240, 240, 240)
SETPOINT_COLOR = (0, 200, 0)
BALL_COLOR = (200, 0, 0)
TEXT_COLOR = (0, 0, 0)

KEYMAP: dict[int, InputEvent] = {
    pygame.K_UP: GainAdjust("kp", KP_STEP),
    pygame.K_DOWN: GainAdjust("kp", -KP_STEP),
    pygame.K_RIGHT: GainAdjust("ki", KI_STEP),
    pygame.K_LEFT: GainAdjust("ki", -KI_STEP),
    pygame.K_PAGEUP: GainAdjust("kd", KD_STEP),
    pygame.K_PAGEDOWN: GainAdjust("kd", -KD_STEP),
    pygame.K_r: ResetRequest(),
    pygame.K_ESCAPE: Quit(),
}


def event_to_input(event: pygame.event.Event, extent: float) -> InputEvent | None:
    """Translate one pygame event, or return None if it is not mapped."""
    if event.type == pygame.QUIT:
        return Quit()
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        return SetpointRequest(extent - event.pos[1])
    if event.type == pygame.KEYDOWN:
        return KEYMAP.get(event.key)
    return None


class PygameClock:
    """Milliseconds since pygame.init()."""

    def now(self) -> float:
        return float(pygame.time.get_ticks())


class PygameInput:
    """Drains the pygame event queue without blocking."""

    def __init__(self, extent: float) -> None:
        self.extent = extent

    def poll(self) -> list[InputEvent]:
        events = []
        for event in pygame.event.get():
            mapped = event_to_input(event, self.extent)
            if mapped is not None:
                events.append(mapped)
        return events


class PygameRenderer(RendererAdapter):
    """Draws the setpoint line, the ball and the gain readout."""

    def __init__(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        self.surface = surface
        self.font = font

    def begin_frame(self, time: float) -> None:
        self.surface.fill(BACKGROUND)

    def draw_state(self, state: FrameState) -> None:
        width = self.surface.get_width()

        sp_row = int(state.extent - state.setpoint)
        pygame.draw.line(self.surface, SETPOINT_COLOR, (0, sp_row), (width, sp_row))

        size = int(state.size)
        top = int(state.extent - state.position - state.size)
        pygame.draw.rect(self.surface, BALL_COLOR, pygame.Rect(width // 2 - size // 2, top, size, size))

        lines = [
            "Controls:",
            "Mouse Click - Set Target",
            f"Up/Down - Kp: {state.kp:.2f}",
            f"Left/Right - Ki: {state.ki:.2f}",
            f"PgUp/PgDn - Kd: {state.kd:.2f}",
            "R - Reset PID",
            f"Height: {state.measured:.1f}  Target: {state.setpoint:.1f}",
        ]
        y = 10
        for line in lines:
            text = self.font.render(line, True, TEXT_COLOR)
            self.surface.blit(text, (10, y))
            y += text.get_height()

    def end_frame(self) -> None:
        pygame.display.flip()


def run_app(config: SimConfig | None = None, fps: int = 60, profiler: Profiler | None = None) -> FrameState:
    """
    Open the window and run until the user quits.

    Args:
        config: Session parameters.
        fps: Host frame-rate cap. The simulation rate is config.timestep
             regardless.
        profiler: Optional per-phase profiler.

    Returns:
        The last FrameState.
    """
    config = config or SimConfig()
    pygame.init()
    try:
        pygame.display.set_caption("PID Control Simulator")
        surface = pygame.display.set_mode((WINDOW_WIDTH, int(config.extent)))
        font = pygame.font.SysFont("arial,freesans", 24)

        loop = SimulationLoop(
            config,
            clock=PygameClock(),
            inputs=PygameInput(config.extent),
            renderer=PygameRenderer(surface, font),
            profiler=profiler,
        )
        logger.info("Window open (%dx%d), timestep %.4fs", WINDOW_WIDTH, int(config.extent), config.timestep)

        pacer = pygame.time.Clock()
        state = loop.snapshot()
        while loop.running:
            state = loop.step_frame()
            pacer.tick(fps)
        return state
    finally:
        pygame.quit()
