"""
Rule engine for the 2048 sliding-tile puzzle.

Modules:
- grid.py: Grid, the N x N board with an occupied-cell count
- core.py: Direction, tilt(), is_terminal() and the move/merge events
- tiles.py: random and scripted sources of new tiles
- session.py: GameSession, score bookkeeping around the engine
- api.py, cli_driver.py: HTTP and terminal front ends
"""

from .core import (
    Direction,
    GameProgressState,
    MergeEvent,
    MoveEvent,
    TiltResult,
    is_terminal,
    tilt,
)
from .grid import Grid
from .session import GameSession

__all__ = [
    "Direction",
    "GameProgressState",
    "GameSession",
    "Grid",
    "MergeEvent",
    "MoveEvent",
    "TiltResult",
    "is_terminal",
    "tilt",
]
