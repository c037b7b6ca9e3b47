"""Output file writer for finished mazes.

The file holds one line of `1` (wall) / `0` (open) digits per grid row,
a blank line, then the entry and exit as `row,col`.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from mazegen import Maze


logger = logging.getLogger(__name__)


def format_rows(maze: Maze) -> List[str]:
    """Return the maze rows as strings of 0/1 digits."""

    return ["".join(str(cell) for cell in row) for row in maze.to_rows()]


def format_coord(coord: Optional[Tuple[int, int]]) -> str:
    if coord is None:
        return ""
    return f"{coord[0]},{coord[1]}"


def write_output_file(path: Path, maze: Maze) -> None:
    """Write the maze to `path`, creating parent directories.

    Args:
        path: Destination file.
        maze: Finished maze to save.
    """

    lines = format_rows(maze)
    lines.append("")
    lines.append(format_coord(maze.entry))
    lines.append(format_coord(maze.exit))

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    logger.info("Wrote %dx%d maze to %s", maze.height, maze.width, path)
