from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import time


@dataclass(frozen=True)
class KeystrokeEvent:
    t: float
    value: str  # character pressed


@dataclass
class KeystrokeRecorder:
    events: List[KeystrokeEvent] = field(default_factory=list)
    start_ts: float = field(default_factory=lambda: time.perf_counter())
    seed: Optional[int] = None

    def _now(self) -> float:
        return time.perf_counter() - self.start_ts

    def log(self, value: str) -> None:
        self.events.append(KeystrokeEvent(self._now(), value))

    def reset(self, seed: Optional[int] = None) -> None:
        self.events.clear()
        self.start_ts = time.perf_counter()
        self.seed = seed


recorder = KeystrokeRecorder()
