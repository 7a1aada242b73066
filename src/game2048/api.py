from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field
from typing import List, Optional
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
import logging

from . import core
from .config import load_settings
from .grid import Grid
from .session import GameSession
from .tiles import RandomTileSource

logger = logging.getLogger(__name__)

settings = load_settings()

# One bucket per client address
limiter = Limiter(key_func=get_remote_address)
app = FastAPI(
    title="2048 Tilt Engine API",
    description="Tilts 2048 boards without keeping any state on the server. "\
                "Clients send the board, score and best score with every request.",
    version="1.0.0"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# --- Request and response bodies ---

class NewGameRequest(BaseModel):
    """Board size, winning tile and seed for a fresh game."""
    size: Optional[int] = Field(
        default=settings.board_size,
        gt=1,
        description="Number of rows (and columns) on the board; 2 or more."
    )
    win_tile: Optional[int] = Field(
        default=settings.win_tile,
        gt=0,
        description="Reaching a tile of this value wins."
    )
    seed: Optional[int] = Field(
        default=settings.seed,
        description="Seed for placing the first two tiles; omit for a random start."
    )

class TileEventData(BaseModel):
    """One tile movement, in board coordinates, for animating a move."""
    kind: str = Field(..., description="'move' for a slide, 'merge' for two tiles combining.")
    value: int = Field(..., description="Value of the tile that travelled.")
    new_value: Optional[int] = Field(default=None, description="Value of the combined tile (merges only).")
    src_row: int
    src_col: int
    dst_row: int
    dst_col: int

class BoardState(BaseModel):
    """A board together with its score bookkeeping and win/loss status."""
    board: List[List[int]] = Field(..., description="Tile values by row; 0 marks an empty cell.")
    score: int = Field(..., ge=0, description="Points scored in this game so far.")
    max_score: int = Field(default=0, ge=0, description="Best final score seen by the client so far.")
    progress: core.GameProgressState = Field(
        ...,
        description="1 while moves remain, 2 once the board is stuck, 3 once the winning tile appears."
    )
    win_tile: int = Field(..., gt=0, description="Tile value that ends the game as a win.")
    board_size: int = Field(..., gt=0, description="Rows (and columns) on the board.")


class TiltRequest(BaseModel):
    """A board and the side to tilt it toward."""
    board: List[List[int]] = Field(..., description="Tile values by row, before the tilt.")
    score: int = Field(..., ge=0, description="Points scored before the tilt.")
    max_score: int = Field(default=0, ge=0, description="Best final score so far.")
    direction: core.Direction = Field(
        ...,
        description="Side to tilt the board toward (1=NORTH, 2=EAST, 3=SOUTH, 4=WEST)."
    )
    win_tile: int = Field(default=settings.win_tile, gt=0, description="Tile value that ends the game as a win.")
    seed: Optional[int] = Field(default=None, description="Seed for placing the new tile.")

class TiltResponse(BoardState):
    """The board after a tilt, plus what the tilt did."""
    move_was_effective: bool = Field(
        ...,
        description="False when no tile could slide or merge, so no tile was added."
    )
    score_delta: int = Field(..., ge=0, description="Points gained by merges in this move.")
    events: List[TileEventData] = Field(
        default_factory=list,
        description="Slides and merges performed by the move, in the order they happened."
    )
    message: Optional[str] = Field(
        default=None,
        description="Human-readable note about a wasted tilt, a win or a loss."
    )

class StatusRequestData(BaseModel):
    board: List[List[int]] = Field(..., description="Tile values by row.")
    win_tile: int = Field(default=settings.win_tile, gt=0)

class StatusResponseData(BaseModel):
    progress: core.GameProgressState
    terminal: bool = Field(..., description="True if the board is full and no merge is left.")
    available_directions: List[core.Direction] = Field(
        ..., description="Directions in which a tilt would change the board."
    )


def _event_data(event: core.TileEvent) -> TileEventData:
    if isinstance(event, core.MergeEvent):
        return TileEventData(
            kind="merge", value=event.old_value, new_value=event.new_value,
            src_row=event.src_row, src_col=event.src_col,
            dst_row=event.dst_row, dst_col=event.dst_col,
        )
    return TileEventData(
        kind="move", value=event.value,
        src_row=event.src_row, src_col=event.src_col,
        dst_row=event.dst_row, dst_col=event.dst_col,
    )


def _parse_board(rows: List[List[int]]) -> Grid:
    try:
        return Grid.from_rows(rows)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Bad board: {e}")

# --- Routes ---

@app.post("/game/new", response_model=BoardState, summary="Deal a fresh board")
@limiter.limit(settings.rate_limit)
async def start_new_game(request: Request, new_game: NewGameRequest):
    """
    Deals an empty board of the requested size and drops two tiles on it.

    - **size**: rows and columns, at least 2 (server default from GAME2048_SIZE).
    - **win_tile**: value that wins (server default from GAME2048_WIN_TILE).
    - **seed**: makes the two starting tiles reproducible.
    """
    size = new_game.size if new_game.size is not None else settings.board_size
    win_tile = new_game.win_tile if new_game.win_tile is not None else settings.win_tile
    try:
        session = GameSession(
            size, win_tile,
            RandomTileSource(new_game.seed, settings.four_rate),
        )
        session.new_game()

        return BoardState(
            board=session.grid.rows(),
            score=session.score,
            progress=session.progress,
            win_tile=win_tile,
            board_size=size
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Cannot deal board: {e}")
    except Exception as e:
        logger.exception("Dealing a %dx%d board failed", size, size)
        raise HTTPException(status_code=500, detail=f"Internal error while dealing a board: {e}")


@app.post("/game/move", response_model=TiltResponse, summary="Tilt a board")
@limiter.limit(settings.rate_limit)
async def make_move(request: Request, tilt_request: TiltRequest):
    """
    Tilts the board toward `direction`. When anything slid or merged, the
    merge points are added to `score` and a 2 or 4 is dropped on an empty
    cell. `max_score` is raised to `score` once the game is won or lost,
    including when the board sent in was already finished.

    `events` lists each slide and merge in board coordinates, in the order
    they happened, for clients that animate the tilt.
    """
    current_grid = _parse_board(tilt_request.board)
    note: Optional[str] = None

    try:
        session = GameSession(
            current_grid.size, tilt_request.win_tile,
            RandomTileSource(tilt_request.seed, settings.four_rate),
        )
        session.grid = current_grid
        session.score = tilt_request.score
        session.max_score = tilt_request.max_score

        result = session.move(tilt_request.direction)

        if not result.changed:
            note = "Nothing could slide or merge that way; the board is unchanged."

        progress = session.progress
        if progress == core.GameProgressState.GAME_WON:
            note = f"The {tilt_request.win_tile} tile is on the board: game won."
        elif progress == core.GameProgressState.GAME_OVER:
            note = "The board is full and nothing can merge: game over."

        return TiltResponse(
            board=session.grid.rows(),
            score=session.score,
            max_score=session.max_score,
            progress=progress,
            win_tile=tilt_request.win_tile,
            board_size=current_grid.size,
            move_was_effective=result.changed,
            score_delta=result.score_delta,
            events=[_event_data(event) for event in result.events],
            message=note
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Cannot tilt board: {e}")
    except Exception as e:
        logger.exception("Tilting %s failed", tilt_request.direction.name)
        raise HTTPException(status_code=500, detail=f"Internal error while tilting: {e}")


@app.post("/game/status", response_model=StatusResponseData, summary="Inspect a board")
@limiter.limit(settings.rate_limit)
async def board_status(request: Request, status_request: StatusRequestData):
    """Reports whether a board is won, lost or still playable, and which tilts would change it."""
    grid = _parse_board(status_request.board)
    return StatusResponseData(
        progress=core.determine_game_status(grid, status_request.win_tile),
        terminal=core.is_terminal(grid),
        available_directions=core.available_directions(grid),
    )
