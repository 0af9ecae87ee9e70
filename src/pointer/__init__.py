from .agent import PointerAgent
from .generator import StepGenerator, RandomWalk
from .telemetry import TrajectoryRecorder, recorder
from .analysis import summarize_moves
from .render import save_pointer_trajectory_jpeg

__all__ = [
    "PointerAgent",
    "StepGenerator",
    "RandomWalk",
    "TrajectoryRecorder",
    "recorder",
    "summarize_moves",
    "save_pointer_trajectory_jpeg",
]
