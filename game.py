from __future__ import annotations

# Facade module that re-exports the loopover engine.
# The Flask app and tests import from here; single-responsibility modules live under loopover_core/*.

from loopover_core.errors import LoopoverError, InvalidToken, ConfigError
from loopover_core.grid import (
    Grid,
    Coord,
    Direction,
    UP,
    DOWN,
    LEFT,
    RIGHT,
    DIRECTIONS,
    MIN_SIZE,
    MAX_SIZE,
    validate_size,
    solved_cells,
)
from loopover_core.rotation import rotate, line_params, rotate_line
from loopover_core.scramble import scramble, mixing_iterations
from loopover_core.moves import (
    TOKENS,
    decode,
    is_rotation,
    inverse_token,
    token_for,
    apply_move,
    apply_inverse_move,
)
from loopover_core.replay import (
    iter_tokens,
    parse_moves,
    apply_solution,
    scramble_from_solution,
    SolutionPlayback,
)
from loopover_core.session import Session, IDLE, SCRAMBLED, PLAYING
from loopover_core.stat import Stat, stat_to_json, stat_from_json
from loopover_core.db import (
    _ensure_db_dir,
    _resolve_db_path,
    db_store_stat,
    db_load_stats,
    db_best_stat,
    StatsStore,
)
from loopover_core.config import Config, config_dir, config_path, default_db_path


def main() -> None:
    # CLI driver delegated to loopover_core.cli
    from loopover_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
