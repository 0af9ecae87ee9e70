from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Tuple

from .base import PointerBackend, KeystrokeBackend

BACKEND_NAMES = ("pyautogui", "pynput", "browser")


@asynccontextmanager
async def open_backends(
    name: str,
    *,
    url: Optional[str] = None,
    headless: bool = False,
    failsafe: bool = True,
) -> AsyncIterator[Tuple[PointerBackend, KeystrokeBackend]]:
    """Yield ``(pointer, keystroke)`` backends for the named implementation.

    Implementations are imported on demand so that a missing display or an
    uninstalled optional library only matters for the backend actually chosen.
    ``failsafe`` only applies to pyautogui.
    """
    if name == "pyautogui":
        from .pyautogui_backend import (
            PyAutoGUIPointerBackend,
            PyAutoGUIKeystrokeBackend,
        )

        yield PyAutoGUIPointerBackend(failsafe=failsafe), PyAutoGUIKeystrokeBackend()
    elif name == "pynput":
        from .pynput_backend import PynputPointerBackend, PynputKeystrokeBackend

        yield PynputPointerBackend(), PynputKeystrokeBackend()
    elif name == "browser":
        if not url:
            raise ValueError("the browser backend needs a url")
        from .browser import open_browser_backends

        async with open_browser_backends(url, headless=headless) as pair:
            yield pair
    else:
        raise ValueError(f"unknown backend {name!r}; choose from {BACKEND_NAMES}")


__all__ = ["BACKEND_NAMES", "PointerBackend", "KeystrokeBackend", "open_backends"]
