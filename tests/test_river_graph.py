"""Tests for the river network graph."""

import pytest

from py_terrain.core.geometry import Point3
from py_terrain.core.river_graph import RiverGraph, RiverNode


@pytest.fixture
def small_graph():
    """Mouth with two children, one of which has a child of its own."""
    graph = RiverGraph()
    mouth = graph.add_node(RiverNode(Point3(0.0, 0.0, 0.0), 5))
    left = graph.add_node(RiverNode(Point3(-1.0, 1.0, 0.5), 4))
    right = graph.add_node(RiverNode(Point3(1.0, 1.0, 0.7), 4))
    tip = graph.add_node(RiverNode(Point3(1.0, 2.0, 1.0), 4))
    graph.add_edge(mouth, left)
    graph.add_edge(mouth, right)
    graph.add_edge(right, tip)
    return graph


class TestRiverNode:
    """Test node attributes."""

    def test_position_coerced_to_point(self):
        node = RiverNode((1.0, 2.0, 3.0), 2)
        assert isinstance(node.position, Point3)
        assert node.position.z == 3.0

    def test_negative_priority(self):
        with pytest.raises(ValueError):
            RiverNode(Point3(0.0, 0.0, 0.0), -1)


class TestRiverGraph:
    """Test graph structure."""

    def test_handles_are_insertion_indices(self):
        graph = RiverGraph()
        assert graph.add_node(RiverNode(Point3(0.0, 0.0, 0.0), 1)) == 0
        assert graph.add_node(RiverNode(Point3(1.0, 0.0, 0.0), 1)) == 1
        assert len(graph) == 2
        assert list(graph.node_indices()) == [0, 1]

    def test_connectivity(self, small_graph):
        assert small_graph.edge_count == 3
        assert small_graph.has_outgoing(0)
        assert small_graph.has_outgoing(2)
        assert not small_graph.has_outgoing(1)
        assert small_graph.successors(0) == [1, 2]
        assert small_graph.predecessors(3) == [2]

    def test_roots_and_leaves(self, small_graph):
        assert small_graph.roots() == [0]
        assert small_graph.leaves() == [1, 3]

    def test_unknown_node(self, small_graph):
        with pytest.raises(KeyError):
            small_graph.add_edge(0, 42)
        with pytest.raises(KeyError):
            small_graph[42]

    def test_edge_segments(self, small_graph):
        segments = list(small_graph.edge_segments())
        assert segments[0] == ((0.0, 0.0), (-1.0, 1.0))
        assert segments[2] == ((1.0, 1.0), (1.0, 2.0))

    def test_flatten_edges(self, small_graph):
        flat = small_graph.flatten_edges()
        assert len(flat) == 6 * small_graph.edge_count
        assert flat[:6] == [0.0, 0.0, 0.0, -1.0, 1.0, 0.5]

    def test_build_from_lists(self, small_graph):
        rebuilt = RiverGraph(nodes=list(small_graph.nodes), edges=list(small_graph.edges))
        assert rebuilt == small_graph
        assert rebuilt.successors(0) == [1, 2]

    def test_copy_is_independent(self, small_graph):
        clone = small_graph.copy()
        assert clone == small_graph

        clone.add_node(RiverNode(Point3(5.0, 5.0, 5.0), 1))
        clone.nodes[0].priority = 1
        assert len(small_graph) == 4
        assert small_graph[0].priority == 5
        assert clone != small_graph
