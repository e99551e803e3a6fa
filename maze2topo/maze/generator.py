"""Randomized depth-first maze generator.

Strategy
--------
1. Start from a random cell with every wall present.
2. Walk with an explicit stack: carve towards a random unvisited neighbour,
   backtrack when none is left.  The result is a perfect maze (a spanning
   tree of the grid).
3. Optionally braid the result to remove some or all dead ends.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

import numpy as np

from maze2topo.config import GeneratorConfig
from maze2topo.maze.grid import GridMaze
from maze2topo.maze.model import Cell, Direction

logger = logging.getLogger(__name__)


class DFSMazeGenerator:
    """Seeded generator; the same config always yields the same maze."""

    def __init__(self, config: Optional[GeneratorConfig] = None) -> None:
        self.config = config or GeneratorConfig()
        self._rng = random.Random(self.config.seed)

    def generate(self) -> GridMaze:
        width, height = self.config.width, self.config.height
        base = GridMaze(width, height)
        walls = base.walls.copy()
        visited = np.zeros((width, height), dtype=bool)

        start: Cell = (self._rng.randrange(width), self._rng.randrange(height))
        stack = [start]
        while stack:
            c = stack[-1]
            visited[c] = True
            options = [
                d
                for d in Direction
                if base.on_grid(n := d.step(c)) and not visited[n]
            ]
            if not options:
                stack.pop()
                continue
            d = self._rng.choice(options)
            walls[base.rank_position(c, d)] = False
            stack.append(d.step(c))

        maze = GridMaze(width, height, walls)
        logger.debug("Generated %dx%d perfect maze from %s", width, height, start)

        if self.config.braid_probability > 0:
            maze = maze.braid(self.config.braid_probability, self._rng)
        return maze
