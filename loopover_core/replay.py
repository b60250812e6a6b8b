from __future__ import annotations

from typing import Iterator, List

from .grid import Coord, Grid
from .moves import apply_inverse_move, apply_move, decode


def iter_tokens(moves: str) -> Iterator[str]:
    """Yields move tokens from a log; whitespace only separates tokens."""
    for ch in moves:
        if not ch.isspace():
            yield ch


def parse_moves(moves: str) -> List[str]:
    """Splits a move log into tokens, raising InvalidToken on the first bad character."""
    tokens = list(iter_tokens(moves))
    for token in tokens:
        decode(token)
    return tokens


def apply_solution(grid: Grid, moves: str, end_cursor: Coord) -> Grid:
    """
    Rewinds a solved grid back to the scramble a move log was recorded from.

    The grid is reset to the solved order with the cursor at ``end_cursor``,
    then the inverse of every token is applied from last to first. The log is
    validated up front, so an InvalidToken leaves ``grid`` untouched.
    """
    tokens = parse_moves(moves)
    grid.restart()
    grid.select(end_cursor)
    for token in reversed(tokens):
        apply_inverse_move(grid, token)
    return grid


def scramble_from_solution(width: int, height: int, moves: str, end_cursor: Coord) -> Grid:
    return apply_solution(Grid.new(width, height), moves, end_cursor)


class SolutionPlayback:
    """Steps through a recorded solve one token at a time, starting from its scramble."""

    def __init__(self, width: int, height: int, moves: str, end_cursor: Coord) -> None:
        self.tokens = parse_moves(moves)
        self.end_cursor = end_cursor
        self.grid = Grid.new(width, height)
        self.offset = 0
        self.reset()

    def reset(self) -> None:
        apply_solution(self.grid, " ".join(self.tokens), self.end_cursor)
        self.offset = 0

    @property
    def finished(self) -> bool:
        return self.offset >= len(self.tokens)

    def next_move(self) -> bool:
        """Applies the next token; returns False when already at the end of the log."""
        if self.finished:
            return False
        apply_move(self.grid, self.tokens[self.offset])
        self.offset += 1
        return True

    def prev_move(self) -> bool:
        """Undoes the previous token; returns False when already at the scramble."""
        if self.offset == 0:
            return False
        self.offset -= 1
        apply_inverse_move(self.grid, self.tokens[self.offset])
        return True

    def seek(self, offset: int) -> None:
        offset = max(0, min(offset, len(self.tokens)))
        while self.offset < offset:
            self.next_move()
        while self.offset > offset:
            self.prev_move()
