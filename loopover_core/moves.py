from __future__ import annotations

from typing import Dict, Tuple

from .errors import InvalidToken
from .grid import Direction, Grid, UP, DOWN, LEFT, RIGHT
from .rotation import rotate_line

# token -> (direction, rotates)
TOKENS: Dict[str, Tuple[Direction, bool]] = {
    'U': (UP, True),
    'u': (UP, False),
    'D': (DOWN, True),
    'd': (DOWN, False),
    'L': (LEFT, True),
    'l': (LEFT, False),
    'R': (RIGHT, True),
    'r': (RIGHT, False),
}

INVERSES: Dict[str, str] = {
    'U': 'D', 'D': 'U', 'L': 'R', 'R': 'L',
    'u': 'd', 'd': 'u', 'l': 'r', 'r': 'l',
}

_LETTERS: Dict[Direction, str] = {UP: 'u', DOWN: 'd', LEFT: 'l', RIGHT: 'r'}


def decode(token: str) -> Tuple[Direction, bool]:
    """Maps a token to (direction, rotates). Raises InvalidToken for anything else."""
    try:
        return TOKENS[token]
    except KeyError:
        raise InvalidToken(token) from None


def is_rotation(token: str) -> bool:
    return decode(token)[1]


def inverse_token(token: str) -> str:
    decode(token)
    return INVERSES[token]


def token_for(direction: Direction, rotate: bool) -> str:
    """Encodes a direction (and whether it rotated) as a move token."""
    letter = _LETTERS[direction]
    return letter.upper() if rotate else letter


def apply_move(grid: Grid, token: str) -> None:
    """Applies one token: rotate the line through the cursor (uppercase only), then move the cursor."""
    direction, rotates = decode(token)
    if rotates:
        rotate_line(grid, direction)
    grid.move_cursor(direction)


def apply_inverse_move(grid: Grid, token: str) -> None:
    """Undoes ``apply_move(grid, token)``."""
    apply_move(grid, inverse_token(token))
