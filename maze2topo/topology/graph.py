"""WeightedTopologyGraph – NetworkX-backed reduced maze graph."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import networkx as nx

from maze2topo.maze.model import Cell
from maze2topo.topology.model import Edge, Vertex, VertexKind

logger = logging.getLogger(__name__)


class WeightedTopologyGraph:
    """Undirected graph whose nodes are :class:`Vertex` ids and whose edges
    carry an :class:`Edge`.

    At most one edge joins any pair of vertices; self-loops are allowed.
    Once :meth:`freeze` has been called any modification raises
    :class:`networkx.NetworkXError`.
    """

    def __init__(self) -> None:
        self._g: nx.Graph = nx.Graph()
        self._cell_to_vertex: dict[Cell, int] = {}
        self._room_interior: set[Cell] = set()

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    def add_vertex(self, cell: Cell, kind: VertexKind, room_id: Optional[int] = None) -> Vertex:
        if cell in self._cell_to_vertex:
            raise ValueError(f"Cell {cell} already has vertex {self._cell_to_vertex[cell]}.")
        vertex = Vertex(len(self._g), cell, kind, room_id)
        self._g.add_node(vertex.vertex_id, vertex=vertex)
        self._cell_to_vertex[cell] = vertex.vertex_id
        return vertex

    def add_edge(
        self,
        u: int,
        v: int,
        path: Iterable[Cell],
        room_id: Optional[int] = None,
    ) -> Edge:
        """Store an edge unconditionally, replacing any edge between *u* and *v*."""
        self._validate_node(u)
        self._validate_node(v)
        path = tuple(path)
        edge = Edge(u, v, len(path) - 1, path, room_id)
        self._g.add_edge(u, v, edge=edge)
        return edge

    def offer_edge(
        self,
        u: int,
        v: int,
        path: Iterable[Cell],
        room_id: Optional[int] = None,
    ) -> bool:
        """Keep the shorter of *path* and any existing edge between *u* and *v*.

        The new edge is stored if there is none yet or the existing one is
        strictly heavier; on equal weight the first one found is kept.
        Returns True if the edge was stored.
        """
        path = tuple(path)
        existing = self.get_edge(u, v)
        if existing is not None and existing.weight <= len(path) - 1:
            return False
        if existing is not None:
            logger.debug(
                "Replacing edge %d-%d of weight %d with weight %d",
                u, v, existing.weight, len(path) - 1,
            )
        self.add_edge(u, v, path, room_id)
        return True

    def mark_room_interior(self, cells: Iterable[Cell]) -> None:
        if self.is_frozen:
            raise nx.NetworkXError("Frozen graph can't be modified")
        self._room_interior.update(cells)

    def freeze(self) -> "WeightedTopologyGraph":
        nx.freeze(self._g)
        return self

    # ------------------------------------------------------------------ #
    # Query helpers
    # ------------------------------------------------------------------ #

    @property
    def is_frozen(self) -> bool:
        return nx.is_frozen(self._g)

    @property
    def vertices(self) -> list[Vertex]:
        return [data["vertex"] for _, data in self._g.nodes(data=True)]

    @property
    def edges(self) -> list[Edge]:
        return sorted(
            (data["edge"] for _, _, data in self._g.edges(data=True)),
            key=lambda e: (min(e.u, e.v), max(e.u, e.v)),
        )

    @property
    def cell_to_vertex(self) -> dict[Cell, int]:
        return dict(self._cell_to_vertex)

    @property
    def room_interior(self) -> frozenset[Cell]:
        return frozenset(self._room_interior)

    def is_room_interior(self, cell: Cell) -> bool:
        return cell in self._room_interior

    def get_vertex(self, vertex_id: int) -> Vertex:
        return self._g.nodes[vertex_id]["vertex"]

    def vertex_at(self, cell: Cell) -> Optional[Vertex]:
        vid = self._cell_to_vertex.get(cell)
        return None if vid is None else self.get_vertex(vid)

    def get_edge(self, u: int, v: int) -> Optional[Edge]:
        data = self._g.get_edge_data(u, v)
        return None if data is None else data["edge"]

    def vertices_of_kind(self, kind: VertexKind) -> list[Vertex]:
        return [v for v in self.vertices if v.kind is kind]

    def degree(self, vertex_id: int) -> int:
        return self._g.degree(vertex_id)

    def shortest_distance(self, u: int, v: int) -> Optional[int]:
        """Weighted distance between two vertices, or None if unreachable."""
        self._validate_node(u)
        self._validate_node(v)
        try:
            return nx.dijkstra_path_length(
                self._g, u, v, weight=lambda a, b, data: data["edge"].weight
            )
        except nx.NetworkXNoPath:
            return None

    def number_of_components(self) -> int:
        return nx.number_connected_components(self._g)

    def __len__(self) -> int:
        return len(self._g)

    def to_dict(self) -> dict:
        return {
            "vertices": [v.to_dict() for v in self.vertices],
            "edges": [e.to_dict() for e in self.edges],
        }

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    def _validate_node(self, vertex_id: int) -> None:
        if vertex_id not in self._g:
            raise ValueError(f"Vertex {vertex_id} referenced in edge but not defined.")
