"""Room finder.

Collapses open areas of a maze into rooms.

Strategy
--------
1. Give every in-bounds cell its own room id, in raster order.
2. Sweep all 2x2 blocks of in-bounds cells.  A block with no wall between
   its four cells merges every room it touches into the lowest of their ids.
   Repeat full sweeps until one makes no change.
3. Drop single-cell rooms and renumber the survivors densely, in ascending
   order of their surviving id.

Always keeping the lowest id means every merge strictly reduces the number
of distinct ids, so the sweep loop terminates.
"""

from __future__ import annotations

import logging

import numpy as np

from maze2topo.maze.base import AbstractMaze
from maze2topo.maze.model import Cell, raster_key
from maze2topo.topology.model import NO_ROOM, RoomPartition

logger = logging.getLogger(__name__)


def block_cells(x: int, y: int) -> tuple[Cell, Cell, Cell, Cell]:
    """The 2x2 block anchored at ``(x, y)`` in cyclic order."""
    return (x, y), (x + 1, y), (x + 1, y + 1), (x, y + 1)


def block_is_open(maze: AbstractMaze, block: tuple[Cell, ...]) -> bool:
    """True if every cell of *block* is in bounds and open to both cyclic neighbours."""
    if not all(maze.cell_in_bounds(c) for c in block):
        return False
    for i, c in enumerate(block):
        nbrs = maze.neighbours(c)
        if block[(i + 1) % 4] not in nbrs or block[(i - 1) % 4] not in nbrs:
            return False
    return True


class RoomFinder:
    """Partition a maze into maximal rooms of 2x2-connected open cells."""

    def find(self, maze: AbstractMaze) -> RoomPartition:
        width, height = maze.dimensions()
        cell_to_room = np.full((width, height), NO_ROOM, dtype=int)
        contents: dict[int, set[Cell]] = {}

        next_id = 0
        for c in maze.cells():
            cell_to_room[c] = next_id
            contents[next_id] = {c}
            next_id += 1

        # Openness depends only on the maze, so evaluate each block once.
        open_blocks = []
        for y in range(height - 1):
            for x in range(width - 1):
                block = block_cells(x, y)
                if block_is_open(maze, block):
                    open_blocks.append(block)

        passes = 0
        changed = True
        while changed:
            changed = False
            passes += 1
            for block in open_blocks:
                ids = {int(cell_to_room[c]) for c in block}
                if len(ids) == 1:
                    continue
                target = min(ids)
                for rid in ids - {target}:
                    for c in contents.pop(rid):
                        cell_to_room[c] = target
                        contents[target].add(c)
                changed = True

        logger.debug("Room merging reached a fixed point after %d passes", passes)
        return self._renumber(width, height, contents)

    @staticmethod
    def _renumber(
        width: int,
        height: int,
        contents: dict[int, set[Cell]],
    ) -> RoomPartition:
        cell_to_room = np.full((width, height), NO_ROOM, dtype=int)
        rooms: dict[int, tuple[Cell, ...]] = {}
        for rid in sorted(contents):
            cells = contents[rid]
            if len(cells) <= 1:
                continue
            new_id = len(rooms)
            rooms[new_id] = tuple(sorted(cells, key=raster_key))
            for c in cells:
                cell_to_room[c] = new_id
        cell_to_room.flags.writeable = False
        logger.info("Found %d rooms covering %d cells", len(rooms), sum(len(r) for r in rooms.values()))
        return RoomPartition(width, height, cell_to_room, rooms)
