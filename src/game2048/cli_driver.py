# cli_driver.py
# This file is intended to be run to play or test the 2048 game on the CLI

from typing import Callable, Iterator, List, Optional, TextIO
import argparse
import logging
import sys

from .config import load_settings
from .core import (
    GameProgressState,
    MergeEvent,
    TiltResult,
    key_to_direction,
)
from .session import GameSession
from .tiles import RandomTileSource, ScriptedTileSource

logger = logging.getLogger(__name__)

QUIT = "Quit"
NEW_GAME = "New Game"

# Single letters typed at the prompt, mapped to the logical keys.
LETTER_KEYS = {
    "W": "Up", "A": "Left", "S": "Down", "D": "Right",
    "N": NEW_GAME, "Q": QUIT,
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = load_settings()
    parser = argparse.ArgumentParser(prog="game2048", description="Play 2048 in the terminal.")
    parser.add_argument("--seed", type=int, default=settings.seed,
                        help="random seed for new tiles")
    parser.add_argument("--log", action="store_true",
                        help="record moves and random tiles selected")
    parser.add_argument("--testing", action="store_true",
                        help="take new tiles and moves from standard input")
    parser.add_argument("--no-display", dest="display", action="store_false",
                        help="do not print the board")
    parser.add_argument("--size", type=int, default=settings.board_size,
                        help="board dimension N (default %(default)s)")
    parser.add_argument("--win-tile", type=int, default=settings.win_tile,
                        help="tile value that wins (default %(default)s)")
    parser.set_defaults(four_rate=settings.four_rate)
    args = parser.parse_args(argv)
    if args.size < 2:
        parser.error("--size must be at least 2")
    return args


def normalize_key(text: str) -> str:
    """Turns a typed letter (W/A/S/D/N/Q) or a full key name into a logical key."""
    text = text.strip()
    return LETTER_KEYS.get(text.upper(), text)


def prompt_reader() -> Callable[[], Optional[str]]:
    def read_key() -> Optional[str]:
        try:
            return input("Enter move (W/A/S/D for Up/Left/Down/Right, N new game, Q to quit): ")
        except EOFError:
            return None
    return read_key


def line_reader(lines: Iterator[str]) -> Callable[[], Optional[str]]:
    def read_key() -> Optional[str]:
        for line in lines:
            if line.strip():
                return line
        return None
    return read_key


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         out: Optional[TextIO] = None) -> int:
    args = parse_args(argv)
    stdin = stdin or sys.stdin
    out = out or sys.stdout

    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("game2048").setLevel(logging.INFO if args.log else logging.WARNING)

    if args.testing:
        # Tiles and keys share one stream, in the order the game asks for them.
        lines = iter(stdin)
        tile_source = ScriptedTileSource(lines)
        read_key = line_reader(lines)
    else:
        tile_source = RandomTileSource(args.seed, args.four_rate)
        read_key = prompt_reader()

    session = GameSession(args.size, args.win_tile, tile_source)

    try:
        play(session, read_key, out if args.display else None)
    except EOFError:
        if args.display:
            out.write("Ran out of scripted input.\n")
    except ValueError as e:
        out.write(f"Error: {e}\n")
        return 1
    return 0


def play(session: GameSession, read_key: Callable[[], Optional[str]],
         out: Optional[TextIO]) -> None:
    """Plays games until the player quits or input ends."""
    session.new_game()
    display_board_state(session, out)

    while True:
        key = read_key()
        if key is None:
            return
        key = normalize_key(key)

        if key == QUIT:
            if out is not None:
                out.write("Quitting game.\n")
            return
        if key == NEW_GAME:
            session.new_game()
            display_board_state(session, out)
            continue

        try:
            direction = key_to_direction(key)
        except ValueError:
            if out is not None:
                out.write("Invalid input. Use W, A, S, D.\n")
            continue

        if session.progress != GameProgressState.IN_PROGRESS:
            if out is not None:
                out.write("This game is finished. N for a new game, Q to quit.\n")
            continue

        result = session.move(direction)
        log_events(result)
        if not result.changed and out is not None:
            out.write("Move did not change the board. Try a different direction.\n")

        display_board_state(session, out)


def log_events(result: TiltResult) -> None:
    for event in result.events:
        if isinstance(event, MergeEvent):
            logger.info("merge %d+%d -> %d (%d, %d) -> (%d, %d)",
                        event.old_value, event.old_value, event.new_value,
                        event.src_row, event.src_col, event.dst_row, event.dst_col)
        else:
            logger.info("slide %d (%d, %d) -> (%d, %d)", event.value,
                        event.src_row, event.src_col, event.dst_row, event.dst_col)


# --- Display Function ---
def display_board_state(session: GameSession, out: Optional[TextIO]) -> None:
    """Prints the board, score, and game status."""
    if out is None:
        return
    progress = session.progress
    out.write(f"\nScore: {session.score}  Best: {session.max_score}\n")
    status_message = {
        GameProgressState.IN_PROGRESS: f"Status: {progress.name}",
        GameProgressState.GAME_WON: "YOU WON!",
        GameProgressState.GAME_OVER: "GAME OVER!"
    }
    out.write(status_message[progress] + "\n")
    out.write(session.grid.pretty() + "\n")
    out.write("-" * (session.grid.size * 6) + "\n")


if __name__ == "__main__":
    sys.exit(main())
