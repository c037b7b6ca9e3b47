"""Undirected weighted graphs and Prim's minimum spanning tree.

Nothing here knows about mazes: vertices can be any hashable value.

Basic usage:

    from weighted_graph import Edge, WeightedGraph

    graph = WeightedGraph("a", {Edge("a", "b"): 3, Edge("b", "c"): 1})
    tree = graph.spanning_tree()
"""

from dataclasses import dataclass, field
import heapq
import logging
from typing import (
    Dict,
    FrozenSet,
    Generic,
    Hashable,
    Iterator,
    List,
    Mapping,
    Optional,
    Set,
    Tuple,
    TypeVar,
)


logger = logging.getLogger(__name__)

V = TypeVar("V", bound=Hashable)


@dataclass(frozen=True)
class Vertex:
    """A grid coordinate; equal when row and column are equal."""

    row: int
    col: int

    def as_coord(self) -> Tuple[int, int]:
        return (self.row, self.col)


@dataclass(frozen=True)
class Edge(Generic[V]):
    """Unordered pair of two distinct vertices.

    `Edge(a, b) == Edge(b, a)` and both hash the same. `first` and `second`
    keep the order the edge was built with.
    """

    first: V = field(compare=False)
    second: V = field(compare=False)
    ends: FrozenSet[V] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.first == self.second:
            raise ValueError(f"Edge endpoints must differ: {self.first!r}")
        object.__setattr__(self, "ends", frozenset((self.first, self.second)))

    def __iter__(self) -> Iterator[V]:
        yield self.first
        yield self.second

    def other(self, vertex: V) -> V:
        """Return the endpoint that is not `vertex`."""

        if vertex == self.first:
            return self.second
        if vertex == self.second:
            return self.first
        raise ValueError(f"{vertex!r} is not an endpoint of {self!r}")


class WeightedGraph(Generic[V]):
    """A root vertex plus a mapping from undirected edge to weight.

    The mapping keeps insertion order, which is what breaks weight ties in
    `spanning_tree`.
    """

    root: V
    weights: Dict[Edge[V], int]

    def __init__(
        self,
        root: V,
        weights: Optional[Mapping[Edge[V], int]] = None,
    ) -> None:
        if root is None:
            raise ValueError("Root required")
        self.root = root
        self.weights = dict(weights or {})

    def add_edge(self, a: V, b: V, weight: int) -> Edge[V]:
        edge = Edge(a, b)
        self.weights[edge] = weight
        return edge

    @property
    def edges(self) -> List[Edge[V]]:
        return list(self.weights)

    def vertices(self) -> Set[V]:
        out: Set[V] = {self.root}
        for edge in self.weights:
            out.update(edge.ends)
        return out

    def total_weight(self) -> int:
        return sum(self.weights.values())

    def __len__(self) -> int:
        return len(self.weights)

    def spanning_tree(self) -> "SpanningTree[V]":
        return minimum_spanning_tree(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(root={self.root!r}, "
            f"edges={len(self.weights)})"
        )


class SpanningTree(WeightedGraph[V]):
    """Edges chosen by `minimum_spanning_tree`, same root as the source."""

    def reachable(self) -> Set[V]:
        """Vertices reachable from the root using tree edges only."""

        adjacency: Dict[V, List[V]] = {}
        for edge in self.weights:
            adjacency.setdefault(edge.first, []).append(edge.second)
            adjacency.setdefault(edge.second, []).append(edge.first)

        seen: Set[V] = {self.root}
        stack: List[V] = [self.root]
        while stack:
            cur = stack.pop()
            for nxt in adjacency.get(cur, ()):
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        return seen


def minimum_spanning_tree(graph: WeightedGraph[V]) -> SpanningTree[V]:
    """Grow a minimum spanning tree from `graph.root` (Prim's algorithm).

    Each step takes, among the remaining edges with exactly one endpoint in
    the frontier, the lightest one; equal weights go to the edge inserted
    first into `graph.weights`. The heap may hold edges whose endpoints have
    both joined the frontier since they were pushed; those are dropped when
    popped, so the choice matches a full rescan of the remaining edges.

    Vertices unreachable from the root are left out of the tree.
    """

    incident: Dict[V, List[Tuple[int, int, Edge[V]]]] = {}
    for index, (edge, weight) in enumerate(graph.weights.items()):
        entry = (weight, index, edge)
        incident.setdefault(edge.first, []).append(entry)
        incident.setdefault(edge.second, []).append(entry)

    frontier: Set[V] = {graph.root}
    tree: Dict[Edge[V], int] = {}
    remaining: List[Tuple[int, int, Edge[V]]] = list(
        incident.get(graph.root, ())
    )
    heapq.heapify(remaining)

    while remaining:
        weight, _index, edge = heapq.heappop(remaining)
        inside_first = edge.first in frontier
        inside_second = edge.second in frontier
        if inside_first and inside_second:
            continue

        new_vertex = edge.second if inside_first else edge.first
        tree[edge] = weight
        frontier.add(new_vertex)
        for candidate in incident[new_vertex]:
            if candidate[2].other(new_vertex) not in frontier:
                heapq.heappush(remaining, candidate)

    # Keep the tree in the source graph's order.
    ordered = {edge: tree[edge] for edge in graph.weights if edge in tree}
    logger.debug(
        "Spanning tree: %d of %d edges, %d vertices reached",
        len(ordered),
        len(graph.weights),
        len(frontier),
    )
    return SpanningTree(graph.root, ordered)
