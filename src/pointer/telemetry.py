from __future__ import annotations
from dataclasses import dataclass, field
from typing import List
import time


@dataclass
class PointerEvent:
    """One pointer event captured by the recorder.

    Attributes:
        x (float): X pixel coordinate of the event.
        y (float): Y pixel coordinate of the event.
        t (float): Seconds since the recorder started (monotonic).
        kind (str): "move" for an agent move, "manual" for a detected human move.
    """

    x: float
    y: float
    t: float  # seconds since start (monotonic)
    kind: str  # "move"|"manual"


@dataclass
class TrajectoryRecorder:
    """Collects pointer agent events during a session for summaries and plots.

    Typical flow:
      recorder.reset()
      agent = await PointerAgent.create(backend, walk, recorder=recorder)
      ...
      summarize_moves(recorder)
    """

    events: List[PointerEvent] = field(default_factory=list)
    start_ts: float = field(default_factory=lambda: time.perf_counter())

    def _now(self) -> float:
        """Return current monotonic time offset from the recorder's start."""
        return time.perf_counter() - self.start_ts

    def log_move(self, x: float, y: float) -> None:
        """Append a 'move' event (the agent asked the backend to move)."""
        self.events.append(PointerEvent(x, y, self._now(), "move"))

    def log_manual(self, x: float, y: float) -> None:
        """Append a 'manual' event at the position a human left the pointer."""
        self.events.append(PointerEvent(x, y, self._now(), "manual"))

    def reset(self) -> None:
        """Clear all recorded events and reset the time origin to now."""
        self.events.clear()
        self.start_ts = time.perf_counter()


# Singleton recorder
recorder = TrajectoryRecorder()
