from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from .config import Config, default_db_path
from .db import StatsStore
from .errors import ConfigError, InvalidToken
from .grid import Grid, validate_size
from .replay import iter_tokens
from .session import Session
from .stat import Stat

HELP = (
    "Commands: u d l r move the cursor, U D L R rotate through it (several per line are fine);\n"
    "s scramble, restart, stats, help, q quit."
)


def _setup_logging() -> None:
    debug = os.getenv('LOOPOVER_DEBUG', '0').lower() in ('1', 'true', 'yes', 'on')
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Loopover: sort the tiles by rotating rows and columns')
    parser.add_argument('-s', '--size', nargs=2, type=int, metavar=('WIDTH', 'HEIGHT'), default=None,
                        help='Board size (default from config, 3 3 otherwise)')
    parser.add_argument('--db', default=None, help='SQLite stats file path')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for scrambles')
    parser.add_argument('--stats', action='store_true', help='List stored solves for the size and exit')
    parser.add_argument('--replay', type=int, default=None, metavar='N',
                        help='Show the scramble of the N-th newest stored solve and exit')
    return parser


def format_stat(index: int, stat: Stat) -> str:
    return f"{index:>3}  {stat.timestamp}  {stat.format_time():>9}s  {stat.move_count:>4} moves"


def print_stats(store: StatsStore) -> None:
    solves = store.solves()
    if not solves:
        print(f'No solves stored for {store.width}x{store.height}.')
        return
    best = store.best()
    if best is not None:
        print(f'Best: {best.format_time()}s, {best.move_count} moves')
    for i, stat in enumerate(solves):
        print(format_stat(i, stat))


def print_replay(store: StatsStore, index: int) -> None:
    solves = store.solves()
    if not 0 <= index < len(solves):
        print(f'No solve #{index}; {len(solves)} stored.')
        return
    stat = solves[index]
    print(format_stat(index, stat))
    print('Scramble:')
    print(stat.scramble().pretty())
    print('Moves:', stat.move_log)


def run_command(session: Session, line: str) -> Optional[Stat]:
    """Applies every token on the line, stopping after the one that solves the board."""
    for token in iter_tokens(line):
        stat = session.apply(token)
        if stat is not None:
            return stat
    return None


def play(session: Session, store: StatsStore, seed: Optional[int] = None) -> None:
    print(HELP)
    print(session.grid.pretty())
    while True:
        try:
            text = input('> ').strip()
        except EOFError:
            return
        if not text:
            continue
        if text in ('q', 'quit', 'exit'):
            return
        if text == 'help':
            print(HELP)
            continue
        if text == 'stats':
            print_stats(store)
            continue
        if text == 's':
            session.scramble(seed=seed)
            seed = None if seed is None else seed + 1
        elif text == 'restart':
            session.restart()
        else:
            try:
                stat = run_command(session, text)
            except InvalidToken as e:
                print(f'{e}. Type help for commands.')
                continue
            if stat is not None:
                print(session.grid.pretty())
                print(f'Solved in {stat.format_time()}s with {stat.move_count} moves '
                      f'({stat.moves_per_second():.2f} mps).')
                continue
        print(session.grid.pretty())


def main(argv: Optional[List[str]] = None) -> None:
    _setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        # The config file is only consulted when no size was given.
        width, height = args.size if args.size else Config.load().default_size
        validate_size(width, height)
    except ConfigError as e:
        parser.error(str(e))

    store = StatsStore(args.db or default_db_path(), width, height)
    if args.stats:
        print_stats(store)
        return
    if args.replay is not None:
        print_replay(store, args.replay)
        return

    session = Session(Grid.new(width, height), on_solve=store.add)
    play(session, store, seed=args.seed)
