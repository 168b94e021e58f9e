"""Screen-space rectangles supplied by the rendering layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DropZone(Enum):
    """Named containers outside the field that accept a dropped player."""

    BENCH = "bench"
    ROSTER = "roster"


@dataclass(frozen=True)
class Rect:
    """A bounding rectangle in screen pixels (y grows downward)."""

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect size must not be negative, got {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def contains(self, x: float, y: float) -> bool:
        """Edges count as inside."""
        return self.left <= x <= self.right and self.top <= y <= self.bottom


@dataclass(frozen=True)
class Layout:
    """
    Where the field and the drop containers currently are on screen.

    The engine never measures layout itself; the rendering layer passes a
    fresh Layout whenever it changes.
    """

    field: Rect
    bench: Optional[Rect] = None
    roster: Optional[Rect] = None

    @property
    def zones(self) -> dict[DropZone, Rect]:
        """Drop containers that are currently on screen, bench first."""
        zones = {}
        if self.bench is not None:
            zones[DropZone.BENCH] = self.bench
        if self.roster is not None:
            zones[DropZone.ROSTER] = self.roster
        return zones
