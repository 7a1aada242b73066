# session.py
# A game in progress: the grid plus the score bookkeeping and tile spawning
# that sit around the stateless tilt engine.

from typing import Optional
import logging

from .core import (
    Direction,
    GameProgressState,
    TiltResult,
    determine_game_status,
    is_terminal,
    tilt,
)
from .grid import Grid
from .tiles import RandomTileSource, Tile, TileSource

logger = logging.getLogger(__name__)


class GameSession(object):
    """
    Owns one board, the current score and the best final score seen in this
    session. MAX_SCORE survives new_game().
    """

    def __init__(self, size: int = 4, win_tile: int = 2048,
                 tile_source: Optional[TileSource] = None):
        self.grid = Grid(size)
        self.win_tile = win_tile
        self.tile_source: TileSource = tile_source or RandomTileSource()
        self.score = 0
        self.max_score = 0

    @property
    def progress(self) -> GameProgressState:
        return determine_game_status(self.grid, self.win_tile)

    def is_over(self) -> bool:
        return is_terminal(self.grid)

    def new_game(self) -> None:
        """Reset the score to 0, clear the board and put down two tiles."""
        self.score = 0
        self.grid.clear()
        self.spawn_tile()
        self.spawn_tile()

    def spawn_tile(self) -> Optional[Tile]:
        """
        Add a tile to an empty position chosen by the tile source. Has no
        effect if the board is currently full.
        Returns:
            Optional[Tuple[int, int, int]]: The (value, row, col) placed, or None.
        """
        if self.grid.is_full():
            return None
        while True:
            value, row, col = self.tile_source.next_tile(self.grid.size)
            if self.grid.place(value, row, col):
                break
        logger.info("Tile %d at (%d, %d)", value, row, col)
        return value, row, col

    def move(self, direction: Direction) -> TiltResult:
        """
        Tilts the board, adds the score gained and, if anything moved, spawns
        a new tile. A finished game ignores further moves.
        """
        if self.is_over():
            self.max_score = max(self.max_score, self.score)
            return TiltResult(False, 0)

        new_grid, result = tilt(self.grid, direction)
        logger.info("Move %s: changed=%s score +%d", direction.name,
                    result.changed, result.score_delta)
        if result.changed:
            self.grid = new_grid
            self.score += result.score_delta
            self.spawn_tile()

        if self.progress != GameProgressState.IN_PROGRESS:
            self.max_score = max(self.max_score, self.score)
        return result
