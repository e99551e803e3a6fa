"""Topology reducer.

Squashes a maze into a :class:`WeightedTopologyGraph` that keeps only the
cells where a walker has a decision to make.

Strategy
--------
1. Mark every grid position that is not in bounds as visited.
2. Rooms: each room cell bordering the outside becomes an entrance vertex,
   and every pair of entrances of a room is joined by the shortest path
   through the room.  All room cells are marked visited; non-entrance room
   cells become room interior and are never walked again.
3. Every unvisited dead end and junction becomes a vertex.
4. Edge extension: from each vertex, follow the corridors cell by cell
   until another vertex is hit.  Between two vertices only the lightest
   corridor is kept; a corridor that returns to its own vertex becomes a
   self-loop on it.
5. Whatever is still unvisited is made of isolated cycles; each becomes a
   single self-loop on an anchor vertex.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Optional

import networkx as nx
import numpy as np

from maze2topo.config import ReductionConfig
from maze2topo.maze.base import AbstractMaze
from maze2topo.maze.model import Cell
from maze2topo.topology.graph import WeightedTopologyGraph
from maze2topo.topology.model import RoomPartition, VertexKind
from maze2topo.topology.rooms import RoomFinder

logger = logging.getLogger(__name__)


class TopologyReducer:
    """Build the reduced graph of a maze.

    Each call to :meth:`build` works on fresh buffers, so one reducer can be
    reused for any number of mazes.
    """

    def __init__(self, config: Optional[ReductionConfig] = None) -> None:
        self.config = config or ReductionConfig()

    def build(
        self,
        maze: AbstractMaze,
        rooms: Optional[RoomPartition] = None,
    ) -> WeightedTopologyGraph:
        """Return the frozen reduced graph of *maze*.

        Raises
        ------
        ValueError
            If *rooms* was computed for a maze of other dimensions.
        RuntimeError
            If an internal invariant is broken (disconnected room entrances,
            cells left unvisited).
        """
        if rooms is None:
            rooms = RoomFinder().find(maze) if self.config.detect_rooms else RoomPartition.empty(maze)
        if (rooms.width, rooms.height) != maze.dimensions():
            raise ValueError(
                f"Room partition is {rooms.width}x{rooms.height} but the maze is "
                f"{maze.width}x{maze.height}."
            )

        graph = WeightedTopologyGraph()
        visited = self._initial_visited(maze)
        queue: deque[tuple[int, tuple[Cell, ...]]] = deque()

        self._process_rooms(maze, rooms, graph, visited, queue)
        self._seed_vertices(maze, graph, visited, queue)
        self._extend_edges(maze, graph, visited, queue)
        self._sweep_loops(maze, graph, visited)

        if not visited.all():
            left = [tuple(int(i) for i in c) for c in np.argwhere(~visited)]
            raise RuntimeError(f"Topology reduction left {len(left)} cells unvisited, e.g. {left[:5]}.")

        logger.info(
            "Reduced %dx%d maze to %d vertices and %d edges",
            maze.width, maze.height, len(graph), len(graph.edges),
        )
        return graph.freeze()

    # ------------------------------------------------------------------ #
    # Phase A – preprocessing
    # ------------------------------------------------------------------ #

    @staticmethod
    def _initial_visited(maze: AbstractMaze) -> np.ndarray:
        visited = np.ones(maze.dimensions(), dtype=bool)
        for c in maze.cells():
            visited[c] = False
        return visited

    # ------------------------------------------------------------------ #
    # Phase B – rooms
    # ------------------------------------------------------------------ #

    def _process_rooms(
        self,
        maze: AbstractMaze,
        rooms: RoomPartition,
        graph: WeightedTopologyGraph,
        visited: np.ndarray,
        queue: deque,
    ) -> None:
        if not rooms.room_contents:
            return
        cell_graph = maze.to_networkx()
        for rid, contents in sorted(rooms.room_contents.items()):
            members = set(contents)
            entrances = [
                c for c in contents
                if any(n not in members for n in maze.neighbours(c))
            ]
            vertex_ids = [graph.add_vertex(c, VertexKind.ROOM_ENTRANCE, room_id=rid).vertex_id for c in entrances]

            inside = cell_graph.subgraph(contents)
            for i, u in enumerate(entrances):
                for j in range(i + 1, len(entrances)):
                    v = entrances[j]
                    try:
                        path = nx.shortest_path(inside, u, v)
                    except nx.NetworkXNoPath as exc:
                        raise RuntimeError(
                            f"Room {rid} entrances {u} and {v} are not connected inside the room."
                        ) from exc
                    graph.offer_edge(vertex_ids[i], vertex_ids[j], path, room_id=rid)

            for c in contents:
                visited[c] = True
            graph.mark_room_interior(c for c in contents if c not in entrances)

            for vid, c in zip(vertex_ids, entrances):
                queue.append((vid, (c,)))
            logger.debug("Room %d: %d cells, %d entrances", rid, len(contents), len(entrances))

    # ------------------------------------------------------------------ #
    # Phase C – dead ends and junctions
    # ------------------------------------------------------------------ #

    @staticmethod
    def _seed_vertices(
        maze: AbstractMaze,
        graph: WeightedTopologyGraph,
        visited: np.ndarray,
        queue: deque,
    ) -> None:
        for kind, cells in (
            (VertexKind.DEAD_END, maze.find_dead_ends()),
            (VertexKind.JUNCTION, maze.find_junctions()),
        ):
            seeded = 0
            for c in cells:
                if visited[c]:
                    continue
                vertex = graph.add_vertex(c, kind)
                visited[c] = True
                queue.append((vertex.vertex_id, (c,)))
                seeded += 1
            logger.debug("Seeded %d %s vertices", seeded, kind.value)

    # ------------------------------------------------------------------ #
    # Phase D – edge extension
    # ------------------------------------------------------------------ #

    @staticmethod
    def _extend_edges(
        maze: AbstractMaze,
        graph: WeightedTopologyGraph,
        visited: np.ndarray,
        queue: deque,
    ) -> None:
        """Walk corridors outwards from every queued vertex.

        A queue item is ``(origin vertex, path so far)``.  Room interior
        cells are ignored, and so are neighbours already on the path, except
        for the origin itself: a corridor that comes back to its origin closes
        a self-loop on that vertex.  A visited neighbour that is a vertex
        closes an edge; a visited neighbour without a vertex lies on a
        corridor already being walked from the other side, so the walk
        carries on through it.
        """
        steps = 0
        while queue:
            origin, path = queue.popleft()
            steps += 1
            cell = path[-1]
            visited[cell] = True
            on_path = set(path)

            for n in maze.neighbours(cell):
                if n == path[0] and len(path) > 2:
                    graph.offer_edge(origin, origin, path + (n,))
                    continue
                if n in on_path or graph.is_room_interior(n):
                    continue
                hit = graph.vertex_at(n) if visited[n] else None
                if hit is not None:
                    graph.offer_edge(origin, hit.vertex_id, path + (n,))
                else:
                    queue.append((origin, path + (n,)))
        logger.debug("Edge extension finished after %d steps", steps)

    # ------------------------------------------------------------------ #
    # Phase E – isolated loops
    # ------------------------------------------------------------------ #

    @staticmethod
    def _sweep_loops(
        maze: AbstractMaze,
        graph: WeightedTopologyGraph,
        visited: np.ndarray,
    ) -> None:
        loops = 0
        for c in maze.cells():
            if visited[c]:
                continue
            component = maze.perform_bfs_from(c).connected_cells
            vertex = graph.add_vertex(c, VertexKind.LOOP_ANCHOR)
            graph.add_edge(vertex.vertex_id, vertex.vertex_id, component)
            for cc in component:
                visited[cc] = True
            loops += 1
        logger.debug("Found %d isolated loops", loops)
