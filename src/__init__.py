from __future__ import annotations
from .errors import BackendError
from .geometry import Position
from .pointer import PointerAgent, RandomWalk, summarize_moves, save_pointer_trajectory_jpeg
from .keyboard import KeystrokeAgent, RandomKeyGenerator, summarize_keystrokes
from .scheduler import FixedInterval, JitterInterval, pointer_interval, run_agents

__all__ = [
    "BackendError",
    "Position",
    "PointerAgent",
    "RandomWalk",
    "summarize_moves",
    "save_pointer_trajectory_jpeg",
    "KeystrokeAgent",
    "RandomKeyGenerator",
    "summarize_keystrokes",
    "FixedInterval",
    "JitterInterval",
    "pointer_interval",
    "run_agents",
]
