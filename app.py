from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from game import (  # noqa: E402
    Grid,
    LoopoverError,
    Stat,
    StatsStore,
    apply_move,
    default_db_path,
    scramble_from_solution,
    stat_from_json,
    stat_to_json,
    validate_size,
)

logger = logging.getLogger(__name__)

DEFAULT_DB = default_db_path()

app = Flask(__name__)


def grid_to_json(g: Grid) -> Dict[str, Any]:
    return {
        "width": int(g.width),
        "height": int(g.height),
        "cells": list(g.cells),
        "cursor": [int(g.cursor[0]), int(g.cursor[1])],
    }


def json_to_grid(obj: Dict[str, Any]) -> Grid:
    """Builds a Grid from its JSON form, rejecting anything that is not a valid board state."""
    width, height = validate_size(int(obj["width"]), int(obj["height"]))
    cells = [int(v) for v in obj.get("cells") or []] or list(range(1, width * height + 1))
    if sorted(cells) != list(range(1, width * height + 1)):
        raise ValueError(f"cells must be a permutation of 1..{width * height}")
    cursor = _json_to_coord(obj.get("cursor", [0, 0]), width, height)
    return Grid(width=width, height=height, cells=cells, cursor=cursor)


def _json_to_coord(value: Any, width: int, height: int) -> Tuple[int, int]:
    x, y = (int(v) for v in value)
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"cursor {x},{y} outside {width}x{height} board")
    return (x, y)


def _size_from(obj: Dict[str, Any]) -> Tuple[int, int]:
    return validate_size(int(obj.get("width", 3)), int(obj.get("height", 3)))


def _error(message: str, status: int = 400) -> Any:
    return jsonify({"ok": False, "error": message}), status


def _json_body() -> Optional[Dict[str, Any]]:
    """The request body as a JSON object; None when it is anything else (array, scalar, garbage)."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


@app.errorhandler(LoopoverError)
def _loopover_error(e: LoopoverError) -> Any:
    return _error(str(e))


def _store(width: int, height: int) -> StatsStore:
    return StatsStore(DEFAULT_DB, width, height)


@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _error("bad request: expected a JSON object")
    try:
        width, height = _size_from(body)
        seed: Optional[int] = body.get("seed")
        if seed is not None:
            seed = int(seed)
    except LoopoverError:
        raise
    except (TypeError, ValueError) as e:
        return _error(f"bad request: {e}")
    grid = Grid.new(width, height)
    grid.scramble(seed=seed)
    return jsonify({"ok": True, "grid": grid_to_json(grid), "solved": grid.solved()})


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    if body is None:
        return _error("bad request: expected a JSON object")
    try:
        grid = json_to_grid(body["grid"])
        token = str(body["token"])
    except LoopoverError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        return _error(f"bad request: {e}")
    if len(token) != 1:
        return _error("token must be a single character")
    apply_move(grid, token)
    return jsonify({"ok": True, "grid": grid_to_json(grid), "solved": grid.solved()})


@app.post("/api/solution")
def api_solution() -> Any:
    body = _json_body()
    if body is None:
        return _error("bad request: expected a JSON object")
    try:
        width, height = _size_from(body)
        moves = str(body["moves"])
        end_cursor = _json_to_coord(body["endCursor"], width, height)
    except LoopoverError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        return _error(f"bad request: {e}")
    grid = scramble_from_solution(width, height, moves, end_cursor)
    return jsonify({"ok": True, "grid": grid_to_json(grid)})


@app.get("/api/stats")
def api_stats() -> Any:
    try:
        width, height = _size_from(request.args)
    except LoopoverError:
        raise
    except (TypeError, ValueError) as e:
        return _error(f"bad request: {e}")
    store = _store(width, height)
    best = store.best()
    solves: List[Stat] = store.solves()
    return jsonify({
        "ok": True,
        "solves": [stat_to_json(s) for s in solves],
        "best": stat_to_json(best) if best is not None else None,
    })


@app.post("/api/stats")
def api_stats_add() -> Any:
    body = _json_body()
    if body is None:
        return _error("bad request: expected a JSON object")
    try:
        stat = stat_from_json(body["stat"])
        validate_size(stat.width, stat.height)
        _json_to_coord(stat.end_cursor, stat.width, stat.height)
    except LoopoverError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        return _error(f"bad stat: {e}")
    # Reject logs that cannot be replayed before they reach the store.
    stat.scramble()
    _store(stat.width, stat.height).add(stat)
    logger.info("stored %dx%d solve via API", stat.width, stat.height)
    return jsonify({"ok": True, "stat": stat_to_json(stat)})


if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=False)
