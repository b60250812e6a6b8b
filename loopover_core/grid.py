from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import ConfigError

Coord = Tuple[int, int]  # (x, y)
Direction = str  # 'up', 'down', 'left', 'right'

UP: Direction = 'up'
DOWN: Direction = 'down'
LEFT: Direction = 'left'
RIGHT: Direction = 'right'
DIRECTIONS: Tuple[Direction, ...] = (UP, DOWN, LEFT, RIGHT)

# Cursor translation per direction, as (dx, dy).
DELTAS: Dict[Direction, Coord] = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

MIN_SIZE = 2
# Scrambling costs width² · height² rotations, so boards are capped well before that gets slow.
MAX_SIZE = 20


def validate_size(width: int, height: int) -> Tuple[int, int]:
    """Checks board dimensions before a Grid is built from them."""
    if width < MIN_SIZE or height < MIN_SIZE:
        raise ConfigError(f"minimum supported size is {MIN_SIZE}, got {width}x{height}")
    if width > MAX_SIZE or height > MAX_SIZE:
        raise ConfigError(f"maximum supported size is {MAX_SIZE}, got {width}x{height}")
    return width, height


def solved_cells(width: int, height: int) -> List[int]:
    return list(range(1, width * height + 1))


@dataclass
class Grid:
    """The tile arrangement and the selected cell.

    Cells are stored row-major, so the tile at (x, y) lives at ``y * width + x``.
    Dimensions are assumed valid; use ``validate_size`` at the boundary.
    """
    width: int
    height: int
    cells: List[int] = field(default_factory=list)
    cursor: Coord = (0, 0)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = solved_cells(self.width, self.height)

    @classmethod
    def new(cls, width: int, height: int) -> 'Grid':
        """Creates a solved grid with the cursor at the origin."""
        return cls(width=width, height=height)

    @property
    def size(self) -> Coord:
        return self.width, self.height

    def index(self, x: int, y: int) -> int:
        """Calculates the flat index for a given column and row."""
        return y * self.width + x

    def at(self, x: int, y: int) -> int:
        """Gets the tile at a given column and row with wrap-around logic."""
        return self.cells[self.index(x % self.width, y % self.height)]

    def coords(self) -> Iterable[Coord]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def solved(self) -> bool:
        """True when every tile is smaller than the one after it."""
        for i in range(len(self.cells) - 1):
            if self.cells[i] >= self.cells[i + 1]:
                return False
        return True

    def restart(self) -> None:
        """Puts the tiles back in order; the cursor stays where it is."""
        self.cells = solved_cells(self.width, self.height)

    def select(self, pos: Coord) -> None:
        self.cursor = (pos[0], pos[1])

    def move_cursor(self, direction: Direction) -> None:
        """Moves the cursor one cell, wrapping around the board edges."""
        dx, dy = DELTAS[direction]
        x, y = self.cursor
        self.cursor = ((x + dx) % self.width, (y + dy) % self.height)

    def rotate_through_cursor(self, direction: Direction) -> None:
        """Rotates the row or column passing through the cursor."""
        from .rotation import rotate_line

        rotate_line(self, direction)

    def scramble(self, seed: Optional[int] = None) -> None:
        from .scramble import scramble

        scramble(self, seed=seed)

    def apply_move(self, token: str) -> None:
        from .moves import apply_move

        apply_move(self, token)

    def apply_inverse_move(self, token: str) -> None:
        from .moves import apply_inverse_move

        apply_inverse_move(self, token)

    def apply_solution(self, moves: str, end_cursor: Coord) -> None:
        from .replay import apply_solution

        apply_solution(self, moves, end_cursor)

    def copy(self) -> 'Grid':
        return Grid(width=self.width, height=self.height, cells=list(self.cells), cursor=self.cursor)

    def snapshot(self) -> Tuple[Tuple[int, ...], Coord]:
        """Immutable (cells, cursor) pair, handy for comparing states."""
        return tuple(self.cells), self.cursor

    def pretty(self) -> str:
        """Generates a human-readable string of the grid, with the selected cell in brackets."""
        pad = len(str(self.width * self.height))
        lines: List[str] = []
        for y in range(self.height):
            row: List[str] = []
            for x in range(self.width):
                text = str(self.at(x, y)).rjust(pad)
                if (x, y) == self.cursor:
                    row.append(f"[{text}]")
                else:
                    row.append(f" {text} ")
            lines.append("".join(row))
        return "\n".join(lines)
