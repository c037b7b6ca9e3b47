"""Wall/passage cell grid used as the canvas for maze carving.

The grid is a 2D numpy array (`cells[row, col]`) where `WALL` (1) is a closed
cell and `OPEN` (0) is a passage. Cells only ever go from WALL to OPEN.
"""

from typing import Tuple

import numpy as np


Coord = Tuple[int, int]  # (row, col)


WALL = 1
OPEN = 0

MIN_SIZE = 3


class InvalidDimensions(ValueError):
    """Grid smaller than 3x3 (no room for a cell inside a wall ring)."""

    pass


def check_dimensions(height: int, width: int) -> None:
    """Raise InvalidDimensions unless both sides are at least 3."""

    if height < MIN_SIZE or width < MIN_SIZE:
        raise InvalidDimensions(
            f"Maze must be at least {MIN_SIZE}x{MIN_SIZE}, "
            f"got {height}x{width}"
        )


class MazeGrid:
    """Rectangular grid of WALL/OPEN cells, all walls on creation."""

    height: int
    width: int

    def __init__(self, height: int, width: int) -> None:
        check_dimensions(height, width)
        self.height = height
        self.width = width
        self._cells = np.full((height, width), WALL, dtype=np.int8)

    @classmethod
    def from_array(cls, cells: np.ndarray) -> "MazeGrid":
        """Build a grid holding a copy of an existing 2D WALL/OPEN array."""

        if cells.ndim != 2:
            raise ValueError(f"Expected a 2D array, got {cells.ndim}D")
        grid = cls(*cells.shape)
        grid._cells[...] = cells
        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the cell array."""

        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def frozen(self) -> bool:
        return not self._cells.flags.writeable

    def is_wall(self, row: int, col: int) -> bool:
        return bool(self._cells[row, col] == WALL)

    def open_rectangle(
        self, row1: int, col1: int, row2: int, col2: int
    ) -> None:
        """Open every cell of the inclusive rectangle between two corners.

        The corners may be given in any order. Raises ValueError once the
        grid has been frozen.
        """

        r0, r1 = min(row1, row2), max(row1, row2)
        c0, c1 = min(col1, col2), max(col1, col2)
        if r0 < 0 or c0 < 0 or r1 >= self.height or c1 >= self.width:
            raise IndexError(
                f"Rectangle ({row1},{col1})-({row2},{col2}) "
                f"is outside the {self.height}x{self.width} grid"
            )
        self._cells[r0:r1 + 1, c0:c1 + 1] = OPEN

    def carve_passage(self, start: Coord, end: Coord) -> None:
        """Open a corridor from `start` to `end`.

        Aligned points get a straight segment. Otherwise the corridor is
        L-shaped: down `start`'s column to `end`'s row, then along that row.
        """

        sr, sc = start
        er, ec = end
        if sr == er or sc == ec:
            self.open_rectangle(sr, sc, er, ec)
        else:
            self.open_rectangle(sr, sc, er, sc)
            self.open_rectangle(er, sc, er, ec)

    def freeze(self) -> None:
        """Make the grid read-only; later carving raises ValueError."""

        self._cells.flags.writeable = False

    def __repr__(self) -> str:
        state = "frozen" if self.frozen else "open"
        return f"MazeGrid({self.height}x{self.width}, {state})"
