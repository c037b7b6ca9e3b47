"""Perfect maze generator over a wall/passage grid.

Basic usage:

    from mazegen import random_maze

    maze = random_maze(15, 21, rng=42)
    print(maze)

Logical cells sit on odd rows and odd columns of the grid; the cells between
them are walls until a passage is carved. A random weight is put on every
pair of neighbouring cells (plus one entry edge on the left border and one
exit edge on the right border), the minimum spanning tree of that graph is
computed, and each tree edge is carved into an all-walls grid. Since the
tree has no cycles and reaches every cell, the maze is perfect.
"""

import logging
import random
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from mazegrid import OPEN, WALL, Coord, MazeGrid, check_dimensions
from weighted_graph import SpanningTree, Vertex, WeightedGraph


logger = logging.getLogger(__name__)

WALL_CHAR = "█"

RandomSource = Union[random.Random, int, None]


DEMO_ROWS: Tuple[Tuple[int, ...], ...] = (
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
    (0, 0, 0, 0, 1, 0, 0, 0, 0, 1),
    (1, 1, 1, 0, 1, 1, 0, 1, 1, 1),
    (1, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (1, 0, 1, 1, 1, 1, 0, 1, 1, 1),
    (1, 0, 0, 0, 1, 1, 0, 1, 0, 1),
    (1, 0, 1, 0, 0, 0, 0, 0, 0, 1),
    (1, 0, 1, 1, 0, 1, 0, 1, 1, 1),
    (1, 0, 0, 1, 0, 1, 0, 0, 0, 1),
    (1, 1, 1, 1, 1, 1, 1, 1, 1, 1),
)
DEMO_ENTRY: Coord = (1, 0)
DEMO_EXIT: Coord = (3, 9)


class Maze:
    """A finished maze holding its own read-only copy of the grid."""

    entry: Optional[Coord]
    exit: Optional[Coord]

    def __init__(
        self,
        grid: MazeGrid,
        *,
        entry: Optional[Coord] = None,
        exit_: Optional[Coord] = None,
    ) -> None:
        self._grid = MazeGrid.from_array(grid.cells)
        self._grid.freeze()
        self.entry = entry
        self.exit = exit_

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[int]],
        *,
        entry: Optional[Coord] = None,
        exit_: Optional[Coord] = None,
    ) -> "Maze":
        """Wrap a hand-authored matrix of 1 (wall) and 0 (open)."""

        height = len(rows)
        width = len(rows[0]) if height else 0
        check_dimensions(height, width)
        if any(len(row) != width for row in rows):
            raise ValueError("All maze rows must have the same length")

        raw = np.asarray(rows)
        if not np.isin(raw, (WALL, OPEN)).all():
            raise ValueError("Maze cells must be 0 (open) or 1 (wall)")

        matrix = raw.astype(np.int8)
        return cls(MazeGrid.from_array(matrix), entry=entry, exit_=exit_)

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def shape(self) -> Tuple[int, int]:
        return self._grid.shape

    @property
    def cells(self) -> np.ndarray:
        return self._grid.cells

    def is_wall(self, row: int, col: int) -> bool:
        return self._grid.is_wall(row, col)

    def to_rows(self) -> List[List[int]]:
        return self._grid.cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Maze):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return render_text(self)

    def __repr__(self) -> str:
        return (
            f"Maze({self.height}x{self.width}, "
            f"entry={self.entry}, exit={self.exit})"
        )


def render_text(maze: Maze) -> str:
    """Render walls as two block glyphs and passages as two spaces."""

    wall = WALL_CHAR * 2
    return "\n".join(
        "".join(wall if cell == WALL else "  " for cell in row)
        for row in maze.to_rows()
    )


def new_maze(height: int, width: int) -> Maze:
    """Return a maze of the given size made only of walls."""

    return Maze(MazeGrid(height, width))


def demo() -> Maze:
    """Return the fixed hand-authored 10x10 demo maze."""

    return Maze.from_rows(DEMO_ROWS, entry=DEMO_ENTRY, exit_=DEMO_EXIT)


def _as_random(rng: RandomSource) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def build_cell_graph(
    height: int,
    width: int,
    rng: random.Random,
) -> Tuple[WeightedGraph[Vertex], Vertex]:
    """Lay out logical cells and weight every edge between them.

    Returns the graph (rooted at the entry vertex on the left border) and
    the exit vertex on the right border. Weights are drawn from
    `range(width)`.
    """

    rows = (height - 1) // 2
    cols = (width - 1) // 2
    entry_index = rng.randrange(rows)
    exit_index = rng.randrange(rows)
    logger.debug(
        "Cell lattice %dx%d, entry row %d, exit row %d",
        rows,
        cols,
        1 + 2 * entry_index,
        1 + 2 * exit_index,
    )

    entry = Vertex(1 + 2 * entry_index, 0)
    exit_ = Vertex(1 + 2 * exit_index, width - 1)
    graph: WeightedGraph[Vertex] = WeightedGraph(entry)

    lattice: List[List[Vertex]] = []
    for i in range(rows):
        line: List[Vertex] = []
        for j in range(cols):
            vertex = Vertex(1 + 2 * i, 1 + 2 * j)
            line.append(vertex)
            if j == 0 and i == entry_index:
                graph.add_edge(entry, vertex, rng.randrange(width))
            if j == cols - 1 and i == exit_index:
                graph.add_edge(vertex, exit_, rng.randrange(width))
            if j > 0:
                graph.add_edge(line[j - 1], vertex, rng.randrange(width))
            if i > 0:
                graph.add_edge(lattice[i - 1][j], vertex, rng.randrange(width))
        lattice.append(line)

    return graph, exit_


def assemble_maze(
    height: int,
    width: int,
    tree: SpanningTree[Vertex],
    *,
    exit_: Optional[Vertex] = None,
) -> Maze:
    """Carve every tree edge into an all-walls grid."""

    grid = MazeGrid(height, width)
    for edge in tree.edges:
        grid.carve_passage(edge.first.as_coord(), edge.second.as_coord())
    return Maze(
        grid,
        entry=tree.root.as_coord(),
        exit_=exit_.as_coord() if exit_ is not None else None,
    )


def random_maze(height: int, width: int, rng: RandomSource = None) -> Maze:
    """Generate a random perfect maze.

    `rng` is a `random.Random`, an integer seed, or None for a fresh
    unseeded generator. The same seed always gives the same maze.
    """

    check_dimensions(height, width)
    source = _as_random(rng)
    graph, exit_ = build_cell_graph(height, width, source)
    tree = graph.spanning_tree()
    maze = assemble_maze(height, width, tree, exit_=exit_)
    logger.debug("Generated %r from %d tree edges", maze, len(tree))
    return maze
