from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Position:
    """A screen location in pixels, or the difference of two locations.

    Coordinates are floats so that sub-pixel drift can accumulate between
    real pointer moves.
    """

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"

    def exceeds(self, threshold: float) -> bool:
        """True when either axis is strictly larger than threshold in magnitude."""
        return abs(self.x) > threshold or abs(self.y) > threshold

    @classmethod
    def of(cls, x: float, y: float) -> "Position":
        return cls(float(x), float(y))
