"""Thick maze: every grid position is either floor or wall."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from maze2topo.maze.base import AbstractMaze
from maze2topo.maze.model import Cell, Direction

WALL_CHAR = "#"
FLOOR_CHAR = "."


class ThickMaze(AbstractMaze):
    """Immutable thick maze backed by a boolean floor array indexed ``[x, y]``."""

    def __init__(self, floor: np.ndarray) -> None:
        floor = np.array(floor, dtype=bool)
        if floor.ndim != 2:
            raise ValueError(f"Floor array must be 2-D, got shape {floor.shape}.")
        width, height = floor.shape
        super().__init__(width, height)
        floor.flags.writeable = False
        self._floor = floor

    @classmethod
    def from_rows(cls, rows: Iterable[str]) -> "ThickMaze":
        """Build from text rows where ``#`` is wall and anything else is floor."""
        rows = list(rows)
        width = max((len(r) for r in rows), default=0)
        floor = np.zeros((width, len(rows)), dtype=bool)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                floor[x, y] = ch != WALL_CHAR
        return cls(floor)

    @property
    def floor(self) -> np.ndarray:
        return self._floor

    def cell_in_bounds(self, cell: Cell) -> bool:
        return self.on_grid(cell) and bool(self._floor[cell])

    def neighbours(self, cell: Cell) -> list[Cell]:
        if not self.cell_in_bounds(cell):
            return []
        return [n for n in (d.step(cell) for d in Direction) if self.cell_in_bounds(n)]

    def num_cell_walls(self, cell: Cell) -> int:
        return 4 - len(self.neighbours(cell))

    def to_rows(self) -> list[str]:
        return [
            "".join(FLOOR_CHAR if self._floor[x, y] else WALL_CHAR for x in range(self.width))
            for y in range(self.height)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThickMaze):
            return NotImplemented
        return bool(np.array_equal(self._floor, other._floor))

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._floor.tobytes()))

    def __repr__(self) -> str:
        return f"ThickMaze({self.width}x{self.height}, floor={int(self._floor.sum())})"
