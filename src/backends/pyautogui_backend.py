from __future__ import annotations
import asyncio

from ..errors import BackendError
from ..geometry import Position


def _load_pyautogui():
    # pyautogui talks to the display server on import; keep it out of module import
    try:
        import pyautogui
    except Exception as exc:
        raise BackendError("load", "pyautogui", exc) from exc
    return pyautogui


class PyAutoGUIPointerBackend:
    """Pointer backend on top of pyautogui (native OS injection).

    pyautogui's fail-safe raises on any call made while the pointer sits in a
    screen corner. That is how a user aborts the run, but the random walk can
    also reach a corner on its own when the screen edge clamps it, which ends
    an unattended run with a ``BackendError``. Pass ``failsafe=False``
    (``--no-failsafe``) for long unattended sessions.
    """

    name = "pyautogui"

    def __init__(self, module=None, *, failsafe: bool = True):
        self._gui = module if module is not None else _load_pyautogui()
        # module-wide switch; covers the keystroke backend as well
        self._gui.FAILSAFE = failsafe

    async def read_position(self) -> Position:
        try:
            x, y = await asyncio.to_thread(self._gui.position)
        except Exception as exc:
            raise BackendError("read_position", self.name, exc) from exc
        return Position.of(x, y)

    async def move_to(self, position: Position) -> None:
        try:
            # _pause=False skips pyautogui's global 100ms post-call sleep
            await asyncio.to_thread(
                self._gui.moveTo, int(position.x), int(position.y), _pause=False
            )
        except Exception as exc:
            # includes FailSafeException while the pointer is in a corner
            raise BackendError("move_to", self.name, exc) from exc

    def __str__(self) -> str:
        return self.name


class PyAutoGUIKeystrokeBackend:
    """Keystroke backend on top of pyautogui."""

    name = "pyautogui"

    def __init__(self, module=None):
        self._gui = module if module is not None else _load_pyautogui()

    async def press(self, character: str) -> None:
        try:
            await asyncio.to_thread(self._gui.press, character, _pause=False)
        except Exception as exc:
            raise BackendError("press", self.name, exc) from exc

    def __str__(self) -> str:
        return self.name
