from .agent import KeystrokeAgent
from .generator import KeyGenerator, RandomKeyGenerator
from .analysis import summarize_keystrokes
from .telemetry import KeystrokeRecorder, recorder

__all__ = [
    "KeystrokeAgent",
    "KeyGenerator",
    "RandomKeyGenerator",
    "summarize_keystrokes",
    "KeystrokeRecorder",
    "recorder",
]
