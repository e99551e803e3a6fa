"""Basic maze types.

Cell        – an ``(x, y)`` grid coordinate
Direction   – the four grid directions
BFSResults  – result of a breadth-first traversal from a cell
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

Cell = tuple[int, int]


# --------------------------------------------------------------------------- #
# Errors
# --------------------------------------------------------------------------- #


class MazeError(ValueError):
    """Base class for invalid maze input."""


class IllegalDimensionsError(MazeError):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"Illegal maze dimensions {width}x{height}: both must be positive.")
        self.width = width
        self.height = height


class OutOfBoundsError(MazeError):
    def __init__(self, cell: Cell, width: int, height: int) -> None:
        super().__init__(f"Cell {cell} is not in bounds of the {width}x{height} maze.")
        self.cell = cell


# --------------------------------------------------------------------------- #
# Directions
# --------------------------------------------------------------------------- #


class Direction(Enum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def offset(self) -> tuple[int, int]:
        return _OFFSETS[self]

    def flip(self) -> "Direction":
        return Direction((self.value + 2) % 4)

    def step(self, cell: Cell) -> Cell:
        dx, dy = self.offset
        return cell[0] + dx, cell[1] + dy

    @classmethod
    def between(cls, a: Cell, b: Cell) -> "Direction":
        """Return the direction leading from *a* to the adjacent cell *b*."""
        delta = (b[0] - a[0], b[1] - a[1])
        for d, off in _OFFSETS.items():
            if off == delta:
                return d
        raise ValueError(f"Cells {a} and {b} are not adjacent.")


# y grows southwards (row index)
_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


def raster_key(cell: Cell) -> tuple[int, int]:
    """Sort key for raster (row-major) order."""
    return cell[1], cell[0]


# --------------------------------------------------------------------------- #
# Traversal results
# --------------------------------------------------------------------------- #


@dataclass
class BFSResults:
    """Cells reachable from *start*, overall and grouped by distance."""

    start: Cell
    connected_cells: list[Cell] = field(default_factory=list)
    distance_levels: list[list[Cell]] = field(default_factory=list)

    @property
    def eccentricity(self) -> int:
        return len(self.distance_levels) - 1

    def distance_to(self, cell: Cell) -> int | None:
        for dist, level in enumerate(self.distance_levels):
            if cell in level:
                return dist
        return None
