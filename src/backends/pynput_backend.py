from __future__ import annotations
import asyncio

from ..errors import BackendError
from ..geometry import Position


class PynputPointerBackend:
    """Pointer backend on top of pynput's mouse controller."""

    name = "pynput"

    def __init__(self, controller=None):
        if controller is None:
            try:
                from pynput.mouse import Controller
            except Exception as exc:
                raise BackendError("load", self.name, exc) from exc
            controller = Controller()
        self._controller = controller

    async def read_position(self) -> Position:
        try:
            x, y = await asyncio.to_thread(getattr, self._controller, "position")
        except Exception as exc:
            raise BackendError("read_position", self.name, exc) from exc
        return Position.of(x, y)

    async def move_to(self, position: Position) -> None:
        try:
            target = (int(position.x), int(position.y))
            await asyncio.to_thread(setattr, self._controller, "position", target)
        except Exception as exc:
            raise BackendError("move_to", self.name, exc) from exc

    def __str__(self) -> str:
        return self.name


class PynputKeystrokeBackend:
    """Keystroke backend on top of pynput's keyboard controller."""

    name = "pynput"

    def __init__(self, controller=None):
        if controller is None:
            try:
                from pynput.keyboard import Controller
            except Exception as exc:
                raise BackendError("load", self.name, exc) from exc
            controller = Controller()
        self._controller = controller

    async def press(self, character: str) -> None:
        try:
            await asyncio.to_thread(self._controller.tap, character)
        except Exception as exc:
            raise BackendError("press", self.name, exc) from exc

    def __str__(self) -> str:
        return self.name
