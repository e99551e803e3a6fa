"""ASCII maze loader.

Reads a text file and converts it into a :class:`GridMaze` or a
:class:`ThickMaze`, depending on the first non-blank character:

``+`` – walled format, ``2h+1`` lines of ``2w+1`` characters::

    +-+-+-+-+
    |       |
    +-+-+-+-+

``#`` / ``.`` – thick format, one character per cell, ``#`` is wall.
"""

from __future__ import annotations

import logging
from pathlib import Path

from maze2topo.maze.base import AbstractMaze
from maze2topo.maze.grid import GridMaze
from maze2topo.maze.model import Cell, Direction
from maze2topo.maze.thick import ThickMaze

logger = logging.getLogger(__name__)


def _content_lines(text: str) -> list[str]:
    lines = [ln.rstrip("\r\n") for ln in text.splitlines()]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def parse_grid_maze(text: str) -> GridMaze:
    lines = _content_lines(text)
    if not lines:
        raise ValueError("Maze text is empty.")
    cols = max(len(ln) for ln in lines)
    if len(lines) < 3 or cols < 3 or len(lines) % 2 == 0 or cols % 2 == 0:
        raise ValueError(
            f"Walled maze text must be (2w+1) x (2h+1) characters, got {cols} x {len(lines)}."
        )
    lines = [ln.ljust(cols) for ln in lines]
    width, height = (cols - 1) // 2, (len(lines) - 1) // 2

    passages: list[tuple[Cell, Cell]] = []
    for y in range(height):
        row = lines[2 * y + 1]
        below = lines[2 * y + 2]
        for x in range(width):
            if x < width - 1 and row[2 * x + 2] != "|":
                passages.append(((x, y), Direction.EAST.step((x, y))))
            if y < height - 1 and below[2 * x + 1] != "-":
                passages.append(((x, y), Direction.SOUTH.step((x, y))))
    return GridMaze.from_passages(width, height, passages)


def parse_thick_maze(text: str) -> ThickMaze:
    lines = _content_lines(text)
    if not lines:
        raise ValueError("Maze text is empty.")
    cols = max(len(ln) for ln in lines)
    return ThickMaze.from_rows(ln.ljust(cols, "#") for ln in lines)


class MazeLoader:
    """Load a maze text file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> AbstractMaze:
        if not self.path.exists():
            raise FileNotFoundError(f"Maze file not found: {self.path}")
        text = self.path.read_text(encoding="utf-8")
        maze = self.parse(text)
        logger.debug("Loaded %r from %s", maze, self.path)
        return maze

    @staticmethod
    def parse(text: str) -> AbstractMaze:
        stripped = text.strip()
        if not stripped:
            raise ValueError("Maze text is empty.")
        if stripped[0] == "+":
            return parse_grid_maze(text)
        if stripped[0] in "#.":
            return parse_thick_maze(text)
        raise ValueError(f"Unrecognised maze format (starts with {stripped[0]!r}).")
