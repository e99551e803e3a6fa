"""Topology data model.

RoomPartition – cells grouped into open rooms by the RoomFinder
VertexKind    – why a cell became a vertex of the reduced graph
Vertex        – a cell of interest in the reduced graph
Edge          – a corridor (or room crossing, or isolated loop) between vertices
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

import numpy as np

from maze2topo.maze.base import AbstractMaze
from maze2topo.maze.model import Cell

NO_ROOM = -1


# --------------------------------------------------------------------------- #
# Rooms
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class RoomPartition:
    """Result of the RoomFinder.

    ``cell_to_room[x, y]`` is the room id of the cell or :data:`NO_ROOM`;
    ``room_contents`` maps the dense ids ``0..k-1`` to the room's cells in
    raster order.  Only rooms of more than one cell are kept.
    """

    width: int
    height: int
    cell_to_room: np.ndarray
    room_contents: dict[int, tuple[Cell, ...]] = field(default_factory=dict)

    @classmethod
    def empty(cls, maze: AbstractMaze) -> "RoomPartition":
        """A partition with no rooms at all."""
        table = np.full(maze.dimensions(), NO_ROOM, dtype=int)
        table.flags.writeable = False
        return cls(maze.width, maze.height, table, {})

    def room_of(self, cell: Cell) -> Optional[int]:
        x, y = cell
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        room = int(self.cell_to_room[x, y])
        return None if room == NO_ROOM else room

    def room_cells(self) -> Iterator[Cell]:
        for contents in self.room_contents.values():
            yield from contents

    def __len__(self) -> int:
        return len(self.room_contents)

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "rooms": {
                str(rid): [list(c) for c in cells]
                for rid, cells in self.room_contents.items()
            },
        }


# --------------------------------------------------------------------------- #
# Graph elements
# --------------------------------------------------------------------------- #


class VertexKind(str, Enum):
    ROOM_ENTRANCE = "room_entrance"
    DEAD_END = "dead_end"
    JUNCTION = "junction"
    LOOP_ANCHOR = "loop_anchor"


@dataclass(frozen=True)
class Vertex:
    """A cell of interest in the reduced graph."""

    vertex_id: int
    cell: Cell
    kind: VertexKind
    room_id: Optional[int] = None  # entrances only

    def to_dict(self) -> dict:
        return {
            "id": self.vertex_id,
            "cell": list(self.cell),
            "kind": self.kind.value,
            "room_id": self.room_id,
        }


@dataclass(frozen=True)
class Edge:
    """Corridor between vertices *u* and *v*.

    ``path`` runs from the cell of *u* to the cell of *v* inclusive, so
    ``weight == len(path) - 1``.  For a loop (``u == v``) the path holds every
    cell of the cycle in breadth-first order from its anchor.
    """

    u: int
    v: int
    weight: int
    path: tuple[Cell, ...]
    room_id: Optional[int] = None  # set when the edge crosses a room

    @property
    def is_loop(self) -> bool:
        return self.u == self.v

    @property
    def endpoints(self) -> frozenset[int]:
        return frozenset((self.u, self.v))

    def to_dict(self) -> dict:
        return {
            "u": self.u,
            "v": self.v,
            "weight": self.weight,
            "room_id": self.room_id,
            "path": [list(c) for c in self.path],
        }
