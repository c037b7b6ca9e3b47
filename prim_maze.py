import logging
import sys
from collections import deque
from pathlib import Path
from typing import Deque, List, Optional, Sequence, Set

import numpy as np

from mazegen import Maze, demo, random_maze, render_text
from mazegrid import OPEN, Coord, InvalidDimensions
from maze_writer import write_output_file
from parsing import Config, ConfigError, read_config


logger = logging.getLogger(__name__)


class MazeValidationError(RuntimeError):
    """A maze breaks one of the perfect-maze rules."""

    pass


def neighbors_open(cells: np.ndarray, row: int, col: int) -> List[Coord]:
    """Return the open 4-neighbours of (row,col)."""

    h, w = cells.shape
    out: List[Coord] = []
    steps = ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1))
    for r, c in steps:
        if 0 <= r < h and 0 <= c < w and cells[r, c] == OPEN:
            out.append((r, c))
    return out


def flood_fill(cells: np.ndarray, start: Coord) -> Set[Coord]:
    """Return every open cell reachable from `start` (BFS)."""

    if cells[start] != OPEN:
        return set()

    reached: Set[Coord] = {start}
    q: Deque[Coord] = deque([start])
    while q:
        cur = q.popleft()
        for nxt in neighbors_open(cells, cur[0], cur[1]):
            if nxt in reached:
                continue
            reached.add(nxt)
            q.append(nxt)
    return reached


def validate_maze(maze: Maze) -> None:
    """Validate the maze structure.

    Checks:
    - Corners are walls and the border is closed except at entry/exit.
    - Every open cell is reachable from the entry, and so is the exit.
    - The open cells form a tree (one path between any two of them).
    - No 2x2 block is fully open.
    """

    cells = maze.cells
    h, w = cells.shape
    is_open = cells == OPEN

    for corner in ((0, 0), (0, w - 1), (h - 1, 0), (h - 1, w - 1)):
        if is_open[corner]:
            raise MazeValidationError(f"Invalid maze: corner {corner} is open")

    doors = {c for c in (maze.entry, maze.exit) if c is not None}
    border = np.zeros_like(is_open)
    border[0, :] = border[-1, :] = border[:, 0] = border[:, -1] = True
    for r, c in np.argwhere(is_open & border):
        if (int(r), int(c)) not in doors:
            raise MazeValidationError(
                f"Invalid maze: border opening at ({r},{c})"
            )

    total_open = int(is_open.sum())
    if total_open == 0:
        raise MazeValidationError("Invalid maze: no open cells")

    start: Coord
    if maze.entry is not None:
        start = maze.entry
    else:
        first = np.argwhere(is_open)[0]
        start = (int(first[0]), int(first[1]))

    reached = flood_fill(cells, start)
    if not reached:
        raise MazeValidationError("Invalid maze: ENTRY is not open")
    if maze.exit is not None and maze.exit not in reached:
        raise MazeValidationError("Invalid maze: no path from ENTRY to EXIT")
    if len(reached) != total_open:
        raise MazeValidationError("Invalid maze: disconnected cells exist")

    # A connected graph is a tree iff edges == nodes - 1.
    links = int((is_open[:, :-1] & is_open[:, 1:]).sum())
    links += int((is_open[:-1, :] & is_open[1:, :]).sum())
    if links != total_open - 1:
        raise MazeValidationError("Invalid maze: maze contains loops")

    rooms = (
        is_open[:-1, :-1] & is_open[1:, :-1]
        & is_open[:-1, 1:] & is_open[1:, 1:]
    )
    if rooms.any():
        raise MazeValidationError("Invalid maze: contains a 2x2 open area")


def build_maze(config: Config) -> Maze:
    """Return the demo maze or a validated random maze for `config`."""

    if config.demo:
        return demo()

    maze = random_maze(config.height, config.width, rng=config.seed)
    validate_maze(maze)
    return maze


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run(config: Config) -> int:
    """Generate the maze, write the output file, then print it."""

    maze = build_maze(config)
    logger.info("Built %r (seed=%s)", maze, config.seed)

    if config.output_file is not None:
        write_output_file(config.output_file, maze)

    print(render_text(maze))
    return 0


def main(argv: Sequence[str]) -> int:
    """CLI entrypoint."""

    if len(argv) != 2:
        print("Usage: prim-maze config.txt", file=sys.stderr)
        return 2

    try:
        config = read_config(Path(argv[1]))
        configure_logging(config.log_level)
        return run(config)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except (ConfigError, InvalidDimensions, OSError,
            MazeValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def cli(argv: Optional[Sequence[str]] = None) -> None:
    raise SystemExit(main(sys.argv if argv is None else argv))


if __name__ == "__main__":
    cli()
