from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from .grid import Direction, Grid
from .moves import apply_move, decode, token_for
from .stat import Stat

logger = logging.getLogger(__name__)

IDLE = 'idle'
SCRAMBLED = 'scrambled'
PLAYING = 'playing'


class Session:
    """
    A single player's game on one grid.

    Scrambling arms the session; the first rotation afterwards starts the
    clock and the move log. Cursor moves made before that first rotation are
    not recorded, since replay starts from the cursor position the log ends on.
    A rotation that solves the board finishes the solve and hands a Stat to
    ``on_solve``.
    """

    def __init__(
        self,
        grid: Grid,
        on_solve: Optional[Callable[[Stat], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.grid = grid
        self.on_solve = on_solve
        self.clock = clock
        self.state = IDLE
        self.moves: List[str] = []
        self.move_count = 0
        self.started_at: Optional[float] = None
        self.last_stat: Optional[Stat] = None

    def scramble(self, seed: Optional[int] = None) -> None:
        self.grid.scramble(seed=seed)
        self.state = SCRAMBLED
        self.moves = []
        self.move_count = 0
        self.started_at = None

    def restart(self) -> None:
        """Abandons the current solve and puts the tiles back in order."""
        self.grid.restart()
        self.state = IDLE
        self.moves = []
        self.move_count = 0
        self.started_at = None

    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        return self.clock() - self.started_at

    @property
    def move_log(self) -> str:
        return ' '.join(self.moves)

    def apply(self, token: str) -> Optional[Stat]:
        direction, rotates = decode(token)
        return self.handle(direction, rotates)

    def handle(self, direction: Direction, rotate: bool) -> Optional[Stat]:
        """Moves the cursor (and rotates when asked). Returns the Stat when this move finished a solve."""
        token = token_for(direction, rotate)
        apply_move(self.grid, token)
        if not rotate:
            if self.state == PLAYING:
                self.moves.append(token)
            return None

        if self.state == SCRAMBLED:
            self.state = PLAYING
            self.started_at = self.clock()
            self.moves = [token]
            self.move_count = 1
        elif self.state == PLAYING:
            self.moves.append(token)
            self.move_count += 1
        else:
            return None

        if self.grid.solved():
            return self._finish()
        return None

    def _finish(self) -> Stat:
        stat = Stat.create(
            width=self.grid.width,
            height=self.grid.height,
            elapsed_time=self.elapsed(),
            move_count=self.move_count,
            move_log=self.move_log,
            end_cursor=self.grid.cursor,
        )
        self.state = IDLE
        self.last_stat = stat
        logger.info("solved %dx%d in %ss with %d moves", stat.width, stat.height,
                    stat.format_time(), stat.move_count)
        if self.on_solve is not None:
            self.on_solve(stat)
        return stat
