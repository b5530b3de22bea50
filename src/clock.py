"""
Frame clocks: the time source that drives TetrisGame.update().

The game never reads the wall clock itself. A host picks a clock and, once
per frame, passes clock.tick() to update().
"""

from __future__ import annotations

from typing import Protocol

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]


class Clock(Protocol):
    def tick(self) -> float:
        """Return milliseconds elapsed since the previous tick."""
        ...


class PygameClock:
    """Wall-clock frame timer capped at a target frame rate.

    Args:
        fps: Maximum frames per second; 0 means uncapped.
    """

    def __init__(self, fps: int = 60) -> None:
        if pygame is None:
            raise ImportError("pygame is required for PygameClock. Install it: pip install pygame")
        self.fps = fps
        self._clock = pygame.time.Clock()

    def tick(self) -> float:
        return float(self._clock.tick(self.fps))


class FixedStepClock:
    """Deterministic clock that reports the same step on every tick.

    Used for headless simulation and tests.
    """

    def __init__(self, step_ms: float = 1000.0 / 60) -> None:
        if step_ms < 0:
            raise ValueError(f"step_ms must not be negative, got {step_ms}")
        self.step_ms = float(step_ms)
        self.elapsed_ms = 0.0

    def tick(self) -> float:
        self.elapsed_ms += self.step_ms
        return self.step_ms
