from __future__ import annotations
import random
from typing import Optional, Protocol

from ..geometry import Position
from .config import pcfg


class StepGenerator(Protocol):
    def step(self) -> Position: ...


class RandomWalk:
    """Unbiased four-direction random walk.

    Each call returns up, down, left or right scaled by ``step_size_px``, with
    equal probability. Never a diagonal and never a zero step, so the expected
    displacement is zero while its variance grows with the tick count.
    """

    def __init__(
        self,
        step_size_px: float = pcfg.STEP_SIZE_PX,
        rng: Optional[random.Random] = None,
    ):
        if not step_size_px > 0:
            raise ValueError(f"step_size_px must be positive, got {step_size_px!r}")
        self.step_size_px = float(step_size_px)
        self.rng = rng if rng is not None else random.Random()

    def step(self) -> Position:
        s = self.step_size_px
        direction = self.rng.randrange(4)
        if direction == 0:
            return Position(0.0, s)
        if direction == 1:
            return Position(0.0, -s)
        if direction == 2:
            return Position(s, 0.0)
        return Position(-s, 0.0)
