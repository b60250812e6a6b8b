from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .grid import Coord, Grid
from .replay import SolutionPlayback, scramble_from_solution


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='seconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class Stat:
    """One finished solve. The scramble is not stored; it is rebuilt from the log and end cursor."""
    width: int
    height: int
    elapsed_time: float  # seconds
    move_count: int
    move_log: str
    end_cursor: Coord
    timestamp: str = ''

    @classmethod
    def create(cls, width: int, height: int, elapsed_time: float, move_count: int,
               move_log: str, end_cursor: Coord, timestamp: Optional[str] = None) -> 'Stat':
        return cls(
            width=width,
            height=height,
            elapsed_time=elapsed_time,
            move_count=move_count,
            move_log=move_log,
            end_cursor=(int(end_cursor[0]), int(end_cursor[1])),
            timestamp=timestamp or utc_timestamp(),
        )

    def format_time(self) -> str:
        return f"{self.elapsed_time:.3f}"

    def moves_per_second(self) -> float:
        if self.elapsed_time <= 0:
            return 0.0
        return self.move_count / self.elapsed_time

    def scramble(self) -> Grid:
        return scramble_from_solution(self.width, self.height, self.move_log, self.end_cursor)

    def playback(self) -> SolutionPlayback:
        return SolutionPlayback(self.width, self.height, self.move_log, self.end_cursor)


def stat_to_json(s: Stat) -> Dict[str, Any]:
    return {
        "width": int(s.width),
        "height": int(s.height),
        "elapsedTime": float(s.elapsed_time),
        "timestamp": s.timestamp,
        "moveCount": int(s.move_count),
        "moveLog": s.move_log,
        "endCursor": [int(s.end_cursor[0]), int(s.end_cursor[1])],
    }


def stat_from_json(obj: Dict[str, Any]) -> Stat:
    x, y = obj["endCursor"]
    return Stat.create(
        width=int(obj["width"]),
        height=int(obj["height"]),
        elapsed_time=float(obj["elapsedTime"]),
        move_count=int(obj["moveCount"]),
        move_log=str(obj["moveLog"]),
        end_cursor=(int(x), int(y)),
        timestamp=obj.get("timestamp") or None,
    )
