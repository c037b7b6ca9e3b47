"""Unit tests for undirected weighted graphs and Prim's spanning tree."""

import random

import pytest

from weighted_graph import (
    Edge,
    SpanningTree,
    Vertex,
    WeightedGraph,
    minimum_spanning_tree,
)


def find(parent, x):
    while parent[x] != x:
        parent[x] = parent[parent[x]]
        x = parent[x]
    return x


def has_cycle(edges):
    """Union-find cycle check over an iterable of edges."""
    parent = {}
    for edge in edges:
        for v in edge:
            parent.setdefault(v, v)
        a, b = find(parent, edge.first), find(parent, edge.second)
        if a == b:
            return True
        parent[a] = b
    return False


def grid_graph(rows, cols, rng):
    graph = WeightedGraph(Vertex(0, 0))
    for r in range(rows):
        for c in range(cols):
            if c > 0:
                graph.add_edge(
                    Vertex(r, c - 1), Vertex(r, c), rng.randrange(10)
                )
            if r > 0:
                graph.add_edge(
                    Vertex(r - 1, c), Vertex(r, c), rng.randrange(10)
                )
    return graph


class TestVertexAndEdge:
    """Structural equality of vertices and unordered edges."""

    def test_vertex_equality_is_structural(self):
        assert Vertex(1, 3) == Vertex(1, 3)
        assert hash(Vertex(1, 3)) == hash(Vertex(1, 3))
        assert Vertex(1, 3) != Vertex(3, 1)

    def test_edge_is_unordered(self):
        a, b = Vertex(1, 1), Vertex(1, 3)

        assert Edge(a, b) == Edge(b, a)
        assert hash(Edge(a, b)) == hash(Edge(b, a))
        assert len({Edge(a, b), Edge(b, a)}) == 1

    def test_edge_keeps_construction_order(self):
        edge = Edge("x", "y")

        assert (edge.first, edge.second) == ("x", "y")
        assert list(edge) == ["x", "y"]
        assert edge.other("x") == "y"

    def test_edge_needs_distinct_endpoints(self):
        with pytest.raises(ValueError):
            Edge(Vertex(1, 1), Vertex(1, 1))

    def test_other_rejects_foreign_vertex(self):
        with pytest.raises(ValueError):
            Edge("a", "b").other("c")


class TestWeightedGraph:
    """Edge map behaviour."""

    def test_reversed_edge_replaces_weight(self):
        graph = WeightedGraph("a")
        graph.add_edge("a", "b", 4)
        graph.add_edge("b", "a", 2)

        assert len(graph) == 1
        assert graph.weights[Edge("a", "b")] == 2

    def test_vertices_include_root(self):
        graph = WeightedGraph("r", {Edge("a", "b"): 1})

        assert graph.vertices() == {"r", "a", "b"}

    def test_root_is_required(self):
        with pytest.raises(ValueError):
            WeightedGraph(None)


class TestMinimumSpanningTree:
    """Prim's algorithm on small fixed graphs."""

    def test_square_with_diagonal(self):
        graph = WeightedGraph(
            "a",
            {
                Edge("a", "b"): 1,
                Edge("b", "c"): 2,
                Edge("c", "d"): 1,
                Edge("d", "a"): 3,
                Edge("a", "c"): 5,
            },
        )
        tree = minimum_spanning_tree(graph)

        assert isinstance(tree, SpanningTree)
        assert tree.root == "a"
        assert set(tree.edges) == {
            Edge("a", "b"), Edge("b", "c"), Edge("c", "d")
        }
        assert tree.total_weight() == 4

    def test_source_graph_is_not_modified(self):
        graph = WeightedGraph(
            "a", {Edge("a", "b"): 1, Edge("b", "c"): 1, Edge("a", "c"): 1}
        )
        graph.spanning_tree()

        assert len(graph) == 3

    @pytest.mark.parametrize("seed", [0, 1, 7, 42])
    def test_grid_tree_spans_without_cycles(self, seed):
        graph = grid_graph(4, 5, random.Random(seed))
        tree = graph.spanning_tree()

        assert len(tree) == len(graph.vertices()) - 1
        assert tree.reachable() == graph.vertices()
        assert not has_cycle(tree.edges)

    def test_tree_has_minimum_weight(self):
        # Every spanning tree of a 4-cycle drops exactly one edge.
        weights = {Edge(0, 1): 4, Edge(1, 2): 9, Edge(2, 3): 2, Edge(3, 0): 6}
        tree = WeightedGraph(0, weights).spanning_tree()

        assert tree.total_weight() == sum(weights.values()) - 9

    def test_ties_follow_insertion_order(self):
        graph = WeightedGraph("a")
        graph.add_edge("a", "b", 0)
        graph.add_edge("b", "c", 0)
        graph.add_edge("a", "c", 0)

        first = graph.spanning_tree()
        second = graph.spanning_tree()

        assert first.edges == [Edge("a", "b"), Edge("b", "c")]
        assert first.edges == second.edges

    def test_equal_weights_do_not_duplicate_edges(self):
        graph = grid_graph(3, 3, random.Random(0))
        for edge in graph.edges:
            graph.weights[edge] = 5
        tree = graph.spanning_tree()

        assert len(tree.edges) == len(set(tree.edges)) == 8
        assert not has_cycle(tree.edges)

    def test_unreachable_vertices_are_left_out(self):
        graph = WeightedGraph("a", {Edge("a", "b"): 3, Edge("c", "d"): 1})
        tree = graph.spanning_tree()

        assert tree.edges == [Edge("a", "b")]
        assert tree.reachable() == {"a", "b"}

    def test_root_without_edges(self):
        tree = WeightedGraph("a", {Edge("b", "c"): 1}).spanning_tree()

        assert len(tree) == 0
        assert tree.reachable() == {"a"}
