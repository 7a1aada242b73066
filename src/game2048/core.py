# core.py
# This file is the stateless tilt engine for a 2048 game.

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union
import logging

from .grid import Cell, Grid

logger = logging.getLogger(__name__)


class GameProgressState(Enum):
    """Represents the current progress state of the game."""
    IN_PROGRESS = 1
    GAME_OVER = 2  # Lost
    GAME_WON = 3


class Direction(Enum):
    """The four sides of the board a tilt can push tiles toward."""
    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4


# --- Events reported to a renderer ---

@dataclass(frozen=True)
class MoveEvent:
    """A tile slid from one cell to another, in real grid coordinates."""
    value: int
    src_row: int
    src_col: int
    dst_row: int
    dst_col: int


@dataclass(frozen=True)
class MergeEvent:
    """A tile at src was folded into the equal tile at dst."""
    old_value: int
    new_value: int
    src_row: int
    src_col: int
    dst_row: int
    dst_col: int


TileEvent = Union[MoveEvent, MergeEvent]


@dataclass(frozen=True)
class TiltResult:
    changed: bool
    score_delta: int
    events: Tuple[TileEvent, ...] = ()


# --- Direction normalization ---

# Canonical (r, c) -> real (row, col) for a board turned so that the given
# side is row 0.
_TO_REAL: Dict[Direction, Callable[[int, int, int], Cell]] = {
    Direction.NORTH: lambda r, c, n: (r, c),
    Direction.EAST: lambda r, c, n: (c, n - 1 - r),
    Direction.SOUTH: lambda r, c, n: (n - 1 - r, n - 1 - c),
    Direction.WEST: lambda r, c, n: (n - 1 - c, r),
}

# Undoing a quarter turn is the opposite quarter turn.
_INVERSE: Dict[Direction, Direction] = {
    Direction.NORTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.SOUTH: Direction.SOUTH,
    Direction.WEST: Direction.EAST,
}


def real_position(direction: Direction, r: int, c: int, size: int) -> Cell:
    """
    Returns the (row, col) on the playing board that corresponds to row R and
    column C of a board turned so that row 0 faces DIRECTION.
    Args:
        direction (Direction): The side the tilt pushes toward.
        r (int): Row in the turned board.
        c (int): Column in the turned board.
        size (int): Board dimension.
    Returns:
        Tuple[int, int]: The matching cell on the untouched board.
    """
    return _TO_REAL[direction](r, c, size)


def canonical_position(direction: Direction, row: int, col: int, size: int) -> Cell:
    """Inverse of real_position: where a real cell lands on the turned board."""
    return _TO_REAL[_INVERSE[direction]](row, col, size)


# --- Column collapse ---

def collapse_column(board: List[List[int]], col: int,
                    direction: Direction) -> Tuple[bool, int, List[TileEvent]]:
    """
    Slides and merges one column of a turned board toward row 0, in place.

    Each destination row, from 0 down, takes the first tile below it if it
    is empty, then may absorb one further equal tile. A merged destination
    is settled for the rest of the tilt, so [2, 2, 2, 0] becomes [4, 2, 0, 0].
    Args:
        board (List[List[int]]): Turned board, modified in place.
        col (int): The column to collapse.
        direction (Direction): Orientation of BOARD, used to report events
                               in real coordinates.
    Returns:
        Tuple[bool, int, List[TileEvent]]: Whether anything moved, the score
                                           gained, and the events in order.
    """
    n = len(board)
    changed = False
    score = 0
    events: List[TileEvent] = []

    for r0 in range(n - 1):
        value = board[r0][col]
        r = r0 + 1
        while r < n:
            source = board[r][col]
            if source == 0:
                r += 1
                continue
            src = real_position(direction, r, col, n)
            dst = real_position(direction, r0, col, n)
            if value == 0:
                board[r0][col] = source
                board[r][col] = 0
                events.append(MoveEvent(source, src[0], src[1], dst[0], dst[1]))
                value = source
                changed = True
                r = r0 + 1
                continue
            if source == value:
                board[r0][col] = 2 * value
                board[r][col] = 0
                score += 2 * value
                events.append(MergeEvent(value, 2 * value, src[0], src[1], dst[0], dst[1]))
                changed = True
            break

    return changed, score, events


# --- Tilting ---

def turned_board(grid: Grid, direction: Direction) -> List[List[int]]:
    """Copies GRID into a list of lists with DIRECTION facing row 0."""
    n = grid.size
    return [[grid[real_position(direction, r, c, n)] for c in range(n)]
            for r in range(n)]


def tilt(grid: Grid, direction: Direction) -> Tuple[Grid, TiltResult]:
    """
    Tilts the board toward DIRECTION on a copy of the grid.
    Args:
        grid (Grid): The current board. It is not modified.
        direction (Direction): The side to push every tile toward.
    Returns:
        Tuple[Grid, TiltResult]:
            - The board after sliding and merging.
            - Whether it changed, the score gained and the move/merge events.
    """
    n = grid.size
    board = turned_board(grid, direction)
    changed = False
    score_delta = 0
    events: List[TileEvent] = []

    for c in range(n):
        col_changed, col_score, col_events = collapse_column(board, c, direction)
        changed = col_changed or changed
        score_delta += col_score
        events.extend(col_events)

    result = grid.copy()
    for r in range(n):
        for c in range(n):
            result[real_position(direction, r, c, n)] = board[r][c]

    logger.debug("tilt %s: changed=%s score_delta=%d events=%d",
                 direction.name, changed, score_delta, len(events))
    return result, TiltResult(changed, score_delta, tuple(events))


def can_tilt(grid: Grid, direction: Direction) -> bool:
    """
    Check if any tile can move or merge toward the given side.
    Args:
        grid (Grid): The game board.
        direction (Direction): The side to check.
    Returns:
        bool: True if a tilt that way would change the board.
    """
    n = grid.size
    board = turned_board(grid, direction)
    for c in range(n):
        for r in range(1, n):
            value = board[r][c]
            if value != 0 and board[r - 1][c] in (0, value):
                return True
    return False


def available_directions(grid: Grid) -> List[Direction]:
    return [d for d in Direction if can_tilt(grid, d)]


# --- Game State Checks ---

def merge_possible(grid: Grid) -> bool:
    """
    Returns True if any two edge-adjacent cells hold the same value.
    Meant for a full board, where it decides whether the game goes on.
    """
    n = grid.size
    for r, c in grid.cells():
        value = grid[r, c]
        if r + 1 < n and grid[r + 1, c] == value:
            return True
        if c + 1 < n and grid[r, c + 1] == value:
            return True
    return False


def is_terminal(grid: Grid) -> bool:
    """
    The game is over when the board is full and no merge is left.
    A board with an empty cell is never terminal.
    """
    if not grid.is_full():
        return False
    return not merge_possible(grid)


def determine_game_status(grid: Grid, win_tile: int = 2048) -> GameProgressState:
    """
    Determines the current progress state of the game based on the board.
    Args:
        grid (Grid): The current game board.
        win_tile (int): The tile value that signifies a win. Default is 2048.
    Returns:
        GameProgressState: The current state (IN_PROGRESS, GAME_WON, GAME_OVER).
    """
    if grid.contains(win_tile):
        return GameProgressState.GAME_WON
    if is_terminal(grid):
        return GameProgressState.GAME_OVER
    return GameProgressState.IN_PROGRESS


# --- Input keys ---

_KEYS: Dict[str, Direction] = {
    "Up": Direction.NORTH,
    "Down": Direction.SOUTH,
    "Left": Direction.WEST,
    "Right": Direction.EAST,
}


def key_to_direction(key: str) -> Direction:
    """
    Return the side indicated by KEY ("Up", "Down", "Left" or "Right").
    Raises:
        ValueError: For any other key.
    """
    try:
        return _KEYS[key]
    except KeyError:
        raise ValueError(f"Unknown key designation: {key!r}") from None
