from __future__ import annotations
import logging
from typing import Optional

from ..backends.base import PointerBackend
from ..geometry import Position
from .config import pcfg
from .generator import StepGenerator
from .telemetry import TrajectoryRecorder


class PointerAgent:
    """Keeps the pointer drifting without fighting a human who grabs it.

    The agent owns a float ``intended_pos`` that the random walk accumulates
    into, and the last position the backend actually reported. Every tick it
    first reconciles against a fresh read: if the pointer moved further than a
    pixel since the last read, somebody else moved it, and the intended
    position is dropped in favour of where the pointer really is. Sub-pixel
    drift is only sent to the backend once it exceeds a pixel.
    """

    def __init__(
        self,
        backend: PointerBackend,
        step_generator: StepGenerator,
        initial_pos: Position,
        *,
        recorder: Optional[TrajectoryRecorder] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.backend = backend
        self.step_generator = step_generator
        self.recorder = recorder
        self.logger = logger or logging.getLogger(__name__)
        self._last_read_pos = initial_pos
        self._intended_pos = initial_pos
        self.ticks = 0
        self.moves = 0
        self.manual_resets = 0

    @classmethod
    async def create(
        cls,
        backend: PointerBackend,
        step_generator: StepGenerator,
        *,
        recorder: Optional[TrajectoryRecorder] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "PointerAgent":
        """Build an agent starting from the backend's current position."""
        pos = await backend.read_position()
        return cls(backend, step_generator, pos, recorder=recorder, logger=logger)

    @property
    def last_read_pos(self) -> Position:
        return self._last_read_pos

    @property
    def intended_pos(self) -> Position:
        return self._intended_pos

    async def update(self) -> None:
        """Run one tick. The read/compare/mutate/write order matters."""
        # Check if the pointer was moved by someone else since the last tick.
        current_pos = await self.backend.read_position()
        if (current_pos - self._last_read_pos).exceeds(pcfg.MANUAL_MOVE_THRESHOLD_PX):
            self._intended_pos = current_pos
            self.manual_resets += 1
            self.logger.debug(
                "Manual movement detected at %s. Resetting position.", current_pos
            )
            if self.recorder is not None:
                self.recorder.log_manual(current_pos.x, current_pos.y)
        self._last_read_pos = current_pos

        self._intended_pos = self._intended_pos + self.step_generator.step()

        if (self._intended_pos - self._last_read_pos).exceeds(
            pcfg.VISIBILITY_THRESHOLD_PX
        ):
            await self.backend.move_to(self._intended_pos)
            self.moves += 1
            self.logger.debug("Moving pointer to: %s", self._intended_pos)
            if self.recorder is not None:
                self.recorder.log_move(self._intended_pos.x, self._intended_pos.y)

        # Ground truth after the move; the backend may clamp or round.
        self._last_read_pos = await self.backend.read_position()
        self.ticks += 1
