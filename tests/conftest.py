from typing import Callable, List, Optional, Sequence

import pytest

from lazypeon.errors import BackendError
from lazypeon.geometry import Position


class FakePointerBackend:
    """In-memory pointer: moves truncate to whole pixels and clamp to bounds."""

    name = "fake"

    def __init__(
        self,
        start=(100.0, 100.0),
        *,
        bounds: Optional[Sequence[float]] = None,
        noise: Optional[Callable[[], Position]] = None,
    ):
        self.position = Position.of(*start)
        self.bounds = bounds  # (min_x, min_y, max_x, max_y)
        self.noise = noise
        self.moves: List[Position] = []
        self.reads = 0
        self.fail_read_after: Optional[int] = None
        self.fail_move = False

    async def read_position(self) -> Position:
        if self.fail_read_after is not None and self.reads >= self.fail_read_after:
            raise BackendError("read_position", self.name, RuntimeError("unplugged"))
        self.reads += 1
        if self.noise is not None:
            return self.position + self.noise()
        return self.position

    async def move_to(self, position: Position) -> None:
        if self.fail_move:
            raise BackendError("move_to", self.name, RuntimeError("rejected"))
        x, y = float(int(position.x)), float(int(position.y))
        if self.bounds is not None:
            min_x, min_y, max_x, max_y = self.bounds
            x = max(min_x, min(max_x, x))
            y = max(min_y, min(max_y, y))
        self.moves.append(Position(float(int(position.x)), float(int(position.y))))
        self.position = Position(x, y)


class FakeKeystrokeBackend:
    name = "fake"

    def __init__(self):
        self.pressed: List[str] = []
        self.fail = False

    async def press(self, character: str) -> None:
        if self.fail:
            raise BackendError("press", self.name, RuntimeError("no keyboard"))
        self.pressed.append(character)


class FixedSteps:
    """Step generator replaying a fixed list of steps, then repeating the last."""

    def __init__(self, *steps):
        self.steps = [Position.of(*s) for s in steps]
        self.calls = 0

    def step(self) -> Position:
        step = self.steps[min(self.calls, len(self.steps) - 1)]
        self.calls += 1
        return step


@pytest.fixture
def pointer_backend():
    return FakePointerBackend()


@pytest.fixture
def keystroke_backend():
    return FakeKeystrokeBackend()
