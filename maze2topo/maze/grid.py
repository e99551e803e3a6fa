"""Walled grid maze.

Every pair of orthogonally adjacent cells is separated by a wall that is
either present or carved.  Internal walls are ranked densely:

* ranks ``0 .. (w-1)*h - 1`` are the walls east of ``(x, y)`` for
  ``x < w-1``, in raster order;
* the following ``w*(h-1)`` ranks are the walls south of ``(x, y)`` for
  ``y < h-1``, in raster order.

Boundary walls have no rank and are always present.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

import numpy as np

from maze2topo.maze.base import AbstractMaze
from maze2topo.maze.model import Cell, Direction

logger = logging.getLogger(__name__)

NO_WALL = -1


def count_walls(width: int, height: int) -> int:
    return (width - 1) * height + width * (height - 1)


class GridMaze(AbstractMaze):
    """Immutable walled maze; operations that carve return a new maze."""

    def __init__(self, width: int, height: int, walls: Optional[np.ndarray] = None) -> None:
        super().__init__(width, height)
        n = count_walls(width, height)
        if walls is None:
            walls = np.ones(n, dtype=bool)
        else:
            walls = np.array(walls, dtype=bool)
            if walls.shape != (n,):
                raise ValueError(
                    f"Wall incidence for a {width}x{height} maze needs {n} entries, got {walls.shape}."
                )
        walls.flags.writeable = False
        self._walls = walls

    # ------------------------------------------------------------------ #
    # Factories
    # ------------------------------------------------------------------ #

    @classmethod
    def empty(cls, width: int, height: int) -> "GridMaze":
        """A maze with every internal wall removed."""
        return cls(width, height, np.zeros(count_walls(width, height), dtype=bool))

    @classmethod
    def from_passages(
        cls,
        width: int,
        height: int,
        passages: Iterable[tuple[Cell, Cell]],
    ) -> "GridMaze":
        """A maze with all walls present except between the given cell pairs."""
        return cls(width, height).with_passages(passages)

    # ------------------------------------------------------------------ #
    # Wall ranking
    # ------------------------------------------------------------------ #

    @property
    def walls(self) -> np.ndarray:
        return self._walls

    def rank_position(self, cell: Cell, direction: Direction) -> int:
        """Return the rank of the wall on *direction* side of *cell*, or -1."""
        x, y = cell
        w, h = self.width, self.height
        if not self.on_grid(cell):
            return NO_WALL
        if direction is Direction.EAST:
            return NO_WALL if x == w - 1 else y * (w - 1) + x
        if direction is Direction.WEST:
            return NO_WALL if x == 0 else y * (w - 1) + x - 1
        if direction is Direction.SOUTH:
            return NO_WALL if y == h - 1 else (w - 1) * h + y * w + x
        return NO_WALL if y == 0 else (w - 1) * h + (y - 1) * w + x

    def unrank(self, rank: int) -> tuple[Cell, Direction]:
        """Inverse of :meth:`rank_position` (EAST/SOUTH form)."""
        w, h = self.width, self.height
        vertical = (w - 1) * h
        if rank < 0 or rank >= len(self._walls):
            raise ValueError(f"Wall rank {rank} out of range 0..{len(self._walls) - 1}.")
        if rank < vertical:
            y, x = divmod(rank, w - 1)
            return (x, y), Direction.EAST
        y, x = divmod(rank - vertical, w)
        return (x, y), Direction.SOUTH

    def wall(self, cell: Cell, direction: Direction) -> bool:
        rk = self.rank_position(cell, direction)
        return rk == NO_WALL or bool(self._walls[rk])

    def num_cell_walls(self, cell: Cell) -> int:
        return sum(1 for d in Direction if self.wall(cell, d))

    # ------------------------------------------------------------------ #
    # AbstractMaze
    # ------------------------------------------------------------------ #

    def cell_in_bounds(self, cell: Cell) -> bool:
        # A fully walled cell cannot be entered.
        return self.on_grid(cell) and self.num_cell_walls(cell) < 4

    def neighbours(self, cell: Cell) -> list[Cell]:
        if not self.on_grid(cell):
            return []
        return [d.step(cell) for d in Direction if not self.wall(cell, d)]

    # ------------------------------------------------------------------ #
    # Derived mazes
    # ------------------------------------------------------------------ #

    def with_passages(self, passages: Iterable[tuple[Cell, Cell]]) -> "GridMaze":
        walls = self._walls.copy()
        for a, b in passages:
            rk = self.rank_position(a, Direction.between(a, b))
            if rk == NO_WALL:
                raise ValueError(f"Cannot carve a passage from {a} to {b}: boundary wall.")
            walls[rk] = False
        return GridMaze(self.width, self.height, walls)

    def carve(self, cell: Cell, direction: Direction) -> "GridMaze":
        return self.with_passages([(cell, direction.step(cell))])

    def braid(self, probability: float = 1.0, rng: Optional[random.Random] = None) -> "GridMaze":
        """Remove dead ends by knocking down one wall of each.

        Dead ends are visited in shuffled order; each one that is still a
        dead end is opened, with the given probability, towards the
        neighbouring cell that has the most walls.  Ties are broken at random.
        """
        rng = rng or random.Random()
        walls = self._walls.copy()

        def n_walls(c: Cell) -> int:
            return sum(
                1
                for d in Direction
                if (rk := self.rank_position(c, d)) == NO_WALL or walls[rk]
            )

        dead_ends = self.find_dead_ends()
        rng.shuffle(dead_ends)
        opened = 0
        for c in dead_ends:
            if rng.random() > probability or n_walls(c) < 3:
                continue
            candidates: list[int] = []
            best = 0
            for d in Direction:
                rk = self.rank_position(c, d)
                if rk == NO_WALL or not walls[rk]:
                    continue
                nb_walls = n_walls(d.step(c))
                if nb_walls < best:
                    continue
                if nb_walls > best:
                    candidates.clear()
                    best = nb_walls
                candidates.append(rk)
            if candidates:
                walls[rng.choice(candidates)] = False
                opened += 1
        logger.debug("Braiding opened %d of %d dead ends", opened, len(dead_ends))
        return GridMaze(self.width, self.height, walls)

    def to_thick(self) -> "ThickMaze":
        """Return the equivalent thick maze of size ``(2w+1) x (2h+1)``."""
        from maze2topo.maze.thick import ThickMaze

        floor = np.zeros((2 * self.width + 1, 2 * self.height + 1), dtype=bool)
        for x, y in self.cells():
            floor[2 * x + 1, 2 * y + 1] = True
            if not self.wall((x, y), Direction.EAST):
                floor[2 * x + 2, 2 * y + 1] = True
            if not self.wall((x, y), Direction.SOUTH):
                floor[2 * x + 1, 2 * y + 2] = True
        return ThickMaze(floor)

    # ------------------------------------------------------------------ #
    # Dunder
    # ------------------------------------------------------------------ #

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridMaze):
            return NotImplemented
        return self.dimensions() == other.dimensions() and bool(
            np.array_equal(self._walls, other._walls)
        )

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._walls.tobytes()))

    def __repr__(self) -> str:
        return f"GridMaze({self.width}x{self.height}, open_walls={int((~self._walls).sum())})"
