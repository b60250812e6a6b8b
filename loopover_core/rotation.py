from __future__ import annotations

from typing import List, Optional, Tuple

from .grid import Coord, Direction, Grid, UP, DOWN, LEFT, RIGHT


def rotate(cells: List[int], start: int, length: int, step: int) -> None:
    """
    Cyclically shifts ``length`` cells reachable from ``start`` by striding ``step``.
    The value at ``start`` ends up at the far end; every other value moves back one stride.
    """
    first = cells[start]
    idx = start
    for _ in range(length - 1):
        nxt = idx + step
        cells[idx] = cells[nxt]
        idx = nxt
    cells[idx] = first


def line_params(width: int, height: int, direction: Direction, pos: Coord) -> Tuple[int, int, int]:
    """Returns (start, length, step) for rotating the line through ``pos`` in ``direction``."""
    x, y = pos
    if direction == UP:
        return x, height, width
    if direction == DOWN:
        return x + width * (height - 1), height, -width
    if direction == LEFT:
        return y * width, width, 1
    if direction == RIGHT:
        return y * width + width - 1, width, -1
    raise ValueError(f"unknown direction: {direction!r}")


def rotate_line(grid: Grid, direction: Direction, pos: Optional[Coord] = None) -> None:
    """Rotates the column (up/down) or row (left/right) through ``pos``, default the cursor."""
    start, length, step = line_params(grid.width, grid.height, direction, pos or grid.cursor)
    rotate(grid.cells, start, length, step)
