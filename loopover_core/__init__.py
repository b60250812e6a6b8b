"""
Loopover core Python package.

The puzzle-state engine plus the thin layers around it:
- grid.py: Grid, Coord, directions
- rotation.py / scramble.py: row/column rotations and scrambling
- moves.py / replay.py: move tokens, inverses and scramble reconstruction
- session.py, stat.py, db.py, config.py, cli.py: play session, solve records, storage, settings, CLI
"""
