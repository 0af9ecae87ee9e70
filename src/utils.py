from __future__ import annotations
import ctypes
import platform


class HiResTimer:
    """Hold the Windows system timer at 1 ms while the agents run.

    The default ~15.6 ms tick rounds a 60 Hz pointer period up to 31 ms.
    Elsewhere the sleeps are already fine-grained and this does nothing.
    """

    def __init__(self, period_ms: int = 1):
        self.period_ms = period_ms
        self.active = False

    def __enter__(self):
        if platform.system() == "Windows":
            ctypes.windll.winmm.timeBeginPeriod(self.period_ms)
            self.active = True
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.active:
            ctypes.windll.winmm.timeEndPeriod(self.period_ms)
            self.active = False
