from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from typing import List, Optional, Tuple

from .grid import Coord
from .replay import SolutionPlayback
from .stat import Stat

logger = logging.getLogger(__name__)


def _ensure_db_dir(db_path: str) -> None:
    """Ensures the directory for the SQLite DB exists before connecting."""
    directory = os.path.dirname(db_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def _resolve_db_path(db_path: str) -> str:
    """Resolves a potentially unwritable DB path to a writable one, creating the directory if needed."""
    try:
        _ensure_db_dir(db_path)
        return db_path
    except PermissionError:
        logger.warning("stats directory for %s is not writable, looking for a fallback", db_path)
    candidates = [
        os.getenv('LOOPOVER_DB_DIR'),
        os.path.join(os.getcwd(), 'data'),
        tempfile.gettempdir(),
    ]
    base = os.path.basename(db_path) or 'stats.db'
    for d in candidates:
        if not d:
            continue
        try:
            os.makedirs(d, exist_ok=True)
        except OSError:
            continue
        resolved = os.path.join(d, base)
        logger.info("using stats database %s", resolved)
        return resolved
    # Last resort: current working directory
    return base


def _coord_to_str(c: Coord) -> str:
    return f"{c[0]},{c[1]}"


def _str_to_coord(text: str) -> Coord:
    x_s, y_s = text.split(',')
    return (int(x_s), int(y_s))


def _ensure_db(conn: sqlite3.Connection) -> None:
    """Ensures the table for storing finished solves exists."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS solves (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            width INTEGER NOT NULL,
            height INTEGER NOT NULL,
            elapsed_time REAL NOT NULL,
            move_count INTEGER NOT NULL,
            move_log TEXT NOT NULL,
            end_cursor TEXT NOT NULL,
            solved_at TEXT NOT NULL
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS solves_size ON solves (width, height)")
    conn.commit()


def _connect(db_path: str) -> sqlite3.Connection:
    resolved = _resolve_db_path(db_path)
    _ensure_db_dir(resolved)
    conn = sqlite3.connect(resolved)
    _ensure_db(conn)
    return conn


_COLUMNS = "width, height, elapsed_time, move_count, move_log, end_cursor, solved_at"


def _row_to_stat(row: Tuple) -> Stat:
    width, height, elapsed, move_count, move_log, end_cursor, solved_at = row
    return Stat(
        width=int(width),
        height=int(height),
        elapsed_time=float(elapsed),
        move_count=int(move_count),
        move_log=move_log,
        end_cursor=_str_to_coord(end_cursor),
        timestamp=solved_at,
    )


def db_store_stat(db_path: str, stat: Stat) -> None:
    """Appends a finished solve to the database."""
    conn = _connect(db_path)
    try:
        conn.execute(
            f"INSERT INTO solves ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                stat.width,
                stat.height,
                stat.elapsed_time,
                stat.move_count,
                stat.move_log,
                _coord_to_str(stat.end_cursor),
                stat.timestamp,
            ),
        )
        conn.commit()
        logger.debug("stored %dx%d solve: %.3fs, %d moves", stat.width, stat.height,
                     stat.elapsed_time, stat.move_count)
    finally:
        conn.close()


def db_load_stats(db_path: str, width: int, height: int) -> List[Stat]:
    """Loads all solves for a board size, newest first."""
    conn = _connect(db_path)
    try:
        cur = conn.execute(
            f"SELECT {_COLUMNS} FROM solves WHERE width = ? AND height = ? ORDER BY id DESC",
            (width, height),
        )
        return [_row_to_stat(row) for row in cur.fetchall()]
    finally:
        conn.close()


def db_best_stat(db_path: str, width: int, height: int) -> Optional[Stat]:
    """Fastest solve for a board size, earliest wins a tie."""
    conn = _connect(db_path)
    try:
        cur = conn.execute(
            f"SELECT {_COLUMNS} FROM solves WHERE width = ? AND height = ? "
            "ORDER BY elapsed_time ASC, id ASC LIMIT 1",
            (width, height),
        )
        row = cur.fetchone()
        return _row_to_stat(row) if row else None
    finally:
        conn.close()


class StatsStore:
    """Solves for a single board size, backed by the SQLite database."""

    def __init__(self, db_path: str, width: int, height: int) -> None:
        self.db_path = db_path
        self.width = width
        self.height = height

    def add(self, stat: Stat) -> None:
        db_store_stat(self.db_path, stat)

    def solves(self) -> List[Stat]:
        return db_load_stats(self.db_path, self.width, self.height)

    def best(self) -> Optional[Stat]:
        return db_best_stat(self.db_path, self.width, self.height)

    def playback(self, index: int) -> SolutionPlayback:
        """Playback of the ``index``-th solve (0 is the newest). Raises IndexError when out of range."""
        solves = self.solves()
        if not 0 <= index < len(solves):
            raise IndexError(f"no solve #{index}; {len(solves)} stored")
        return solves[index].playback()
