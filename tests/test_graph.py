"""Tests for WeightedTopologyGraph."""

import networkx as nx
import pytest

from maze2topo.topology.graph import WeightedTopologyGraph
from maze2topo.topology.model import VertexKind


def _two_vertices() -> WeightedTopologyGraph:
    g = WeightedTopologyGraph()
    g.add_vertex((0, 0), VertexKind.DEAD_END)
    g.add_vertex((2, 0), VertexKind.JUNCTION)
    return g


def _straight(n: int) -> list:
    return [(x, 0) for x in range(n)]


class TestWeightedTopologyGraph:
    def test_vertex_ids_are_sequential(self):
        g = _two_vertices()
        assert [v.vertex_id for v in g.vertices] == [0, 1]
        assert g.vertex_at((2, 0)).kind is VertexKind.JUNCTION
        assert g.vertex_at((1, 0)) is None
        assert g.cell_to_vertex == {(0, 0): 0, (2, 0): 1}

    def test_duplicate_cell_rejected(self):
        g = _two_vertices()
        with pytest.raises(ValueError):
            g.add_vertex((0, 0), VertexKind.JUNCTION)

    def test_edge_weight_is_path_steps(self):
        g = _two_vertices()
        edge = g.add_edge(0, 1, [(0, 0), (1, 0), (2, 0)])
        assert edge.weight == 2
        assert g.get_edge(1, 0) is edge

    def test_edge_to_unknown_vertex_rejected(self):
        with pytest.raises(ValueError):
            _two_vertices().add_edge(0, 7, [(0, 0)])

    def test_offer_keeps_shortest(self):
        g = _two_vertices()
        assert g.offer_edge(0, 1, _straight(6))
        assert g.get_edge(0, 1).weight == 5
        assert g.offer_edge(1, 0, _straight(4))
        assert g.get_edge(0, 1).weight == 3
        assert not g.offer_edge(0, 1, _straight(4))
        assert not g.offer_edge(0, 1, _straight(9))
        assert len(g.edges) == 1

    def test_first_of_equal_weight_kept(self):
        g = _two_vertices()
        first = [(0, 0), (1, 0), (2, 0)]
        g.offer_edge(0, 1, first)
        g.offer_edge(0, 1, [(0, 0), (1, 1), (2, 0)])
        assert g.get_edge(0, 1).path == tuple(first)

    def test_self_loop(self):
        g = WeightedTopologyGraph()
        g.add_vertex((0, 0), VertexKind.LOOP_ANCHOR)
        edge = g.add_edge(0, 0, [(0, 0), (1, 0), (0, 1), (1, 1)])
        assert edge.is_loop
        assert edge.weight == 3
        assert g.degree(0) == 2

    def test_shortest_distance(self):
        g = WeightedTopologyGraph()
        for x in (0, 3, 5):
            g.add_vertex((x, 0), VertexKind.JUNCTION)
        g.add_vertex((9, 9), VertexKind.DEAD_END)
        g.add_edge(0, 1, _straight(4))
        g.add_edge(1, 2, [(3, 0), (4, 0), (5, 0)])
        assert g.shortest_distance(0, 2) == 5
        assert g.shortest_distance(2, 2) == 0
        assert g.shortest_distance(0, 3) is None
        assert g.number_of_components() == 2

    def test_frozen_graph_rejects_changes(self):
        g = _two_vertices().freeze()
        assert g.is_frozen
        with pytest.raises(nx.NetworkXError):
            g.add_vertex((5, 5), VertexKind.DEAD_END)
        with pytest.raises(nx.NetworkXError):
            g.add_edge(0, 1, _straight(3))
        with pytest.raises(nx.NetworkXError):
            g.mark_room_interior([(1, 1)])

    def test_to_dict(self):
        g = _two_vertices()
        g.add_edge(0, 1, _straight(3))
        data = g.to_dict()
        assert data["vertices"][0] == {"id": 0, "cell": [0, 0], "kind": "dead_end", "room_id": None}
        assert data["edges"][0]["weight"] == 2
        assert data["edges"][0]["path"] == [[0, 0], [1, 0], [2, 0]]
