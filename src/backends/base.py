from __future__ import annotations
from typing import Protocol, runtime_checkable

from ..geometry import Position


@runtime_checkable
class PointerBackend(Protocol):
    """Reads and moves the pointer in absolute screen coordinates.

    Implementations raise ``BackendError`` for any failure and convert the
    float position they are given into their own integer coordinate system.
    """

    name: str

    async def read_position(self) -> Position: ...

    async def move_to(self, position: Position) -> None: ...


@runtime_checkable
class KeystrokeBackend(Protocol):
    """Synthesizes a single key press (down + up) for one character."""

    name: str

    async def press(self, character: str) -> None: ...
