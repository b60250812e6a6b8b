from __future__ import annotations

import random
from typing import Optional

from .grid import DIRECTIONS, Grid
from .rotation import rotate_line


def mixing_iterations(width: int, height: int) -> int:
    """Number of random rotations used to mix a board. Empirical, not a uniformity bound."""
    return width * width * height * height


def scramble(grid: Grid, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> Grid:
    """
    Scrambles the grid in place with random row/column rotations.

    Rotation mixing alone can land back on the solved board (more likely on
    tiny grids), so the cells are then reshuffled wholesale until the board is
    unsolved. That loop ends with probability 1 but has no fixed bound.
    The cursor is left untouched.
    """
    rng = rng or random.Random(seed)
    for _ in range(mixing_iterations(grid.width, grid.height)):
        pos = (rng.randrange(grid.width), rng.randrange(grid.height))
        rotate_line(grid, rng.choice(DIRECTIONS), pos)
    while grid.solved():
        rng.shuffle(grid.cells)
    return grid
