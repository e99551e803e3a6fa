"""Abstract base class for grid mazes.

Concrete mazes only have to answer two questions – is a cell part of the
maze, and which cells can be reached from it in one step.  Everything the
room finder and the topology reducer need is derived from those.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator

import networkx as nx

from maze2topo.maze.model import (
    BFSResults,
    Cell,
    IllegalDimensionsError,
    OutOfBoundsError,
)

logger = logging.getLogger(__name__)


class AbstractMaze(ABC):
    """All mazes must implement :meth:`cell_in_bounds` and :meth:`neighbours`."""

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise IllegalDimensionsError(width, height)
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def dimensions(self) -> tuple[int, int]:
        return self._width, self._height

    def on_grid(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self._width and 0 <= y < self._height

    @abstractmethod
    def cell_in_bounds(self, cell: Cell) -> bool:
        """Return True if *cell* is a usable maze cell.

        False for off-grid positions and for cells that cannot be entered
        (e.g. wall cells of a thick maze).
        """

    @abstractmethod
    def neighbours(self, cell: Cell) -> list[Cell]:
        """Return the cells reachable from *cell* without crossing a wall.

        Ordered NORTH, EAST, SOUTH, WEST.
        """

    # ------------------------------------------------------------------ #
    # Shared helpers
    # ------------------------------------------------------------------ #

    def check_cell(self, cell: Cell) -> None:
        if not self.cell_in_bounds(cell):
            raise OutOfBoundsError(cell, self._width, self._height)

    def cells(self) -> Iterator[Cell]:
        """Yield in-bounds cells in raster order."""
        for y in range(self._height):
            for x in range(self._width):
                if self.cell_in_bounds((x, y)):
                    yield x, y

    def degree(self, cell: Cell) -> int:
        return len(self.neighbours(cell))

    def find_dead_ends(self) -> list[Cell]:
        return [c for c in self.cells() if self.degree(c) == 1]

    def find_junctions(self) -> list[Cell]:
        return [c for c in self.cells() if self.degree(c) >= 3]

    def find_invalid_cells(self) -> list[Cell]:
        return [
            (x, y)
            for y in range(self._height)
            for x in range(self._width)
            if not self.cell_in_bounds((x, y))
        ]

    def to_networkx(self) -> nx.Graph:
        """Return the cell adjacency graph (nodes in raster order)."""
        g = nx.Graph()
        for c in self.cells():
            g.add_node(c)
        for c in list(g.nodes):
            for n in self.neighbours(c):
                g.add_edge(c, n)
        return g

    def perform_bfs_from(self, start: Cell) -> BFSResults:
        """Breadth-first traversal of the component containing *start*."""
        self.check_cell(start)
        levels: list[list[Cell]] = []
        seen = {start}
        frontier = [start]
        while frontier:
            levels.append(frontier)
            nxt: list[Cell] = []
            for c in frontier:
                for n in self.neighbours(c):
                    if n not in seen:
                        seen.add(n)
                        nxt.append(n)
            frontier = nxt
        connected = [c for level in levels for c in level]
        return BFSResults(start=start, connected_cells=connected, distance_levels=levels)

    def find_connected_components(self) -> list[list[Cell]]:
        components: list[list[Cell]] = []
        claimed: set[Cell] = set()
        for c in self.cells():
            if c in claimed:
                continue
            comp = self.perform_bfs_from(c).connected_cells
            claimed.update(comp)
            components.append(comp)
        logger.debug("Found %d connected components", len(components))
        return components

    def num_passages(self) -> int:
        """Number of open walls (each counted once)."""
        return sum(self.degree(c) for c in self.cells()) // 2
