import io
import logging

import pytest

from game2048.cli_driver import main, normalize_key, parse_args


def run(script: str, *extra: str) -> tuple:
    out = io.StringIO()
    code = main(["--testing", "--size", "2", *extra], stdin=io.StringIO(script), out=out)
    return code, out.getvalue()


def test_scripted_game_plays_a_move() -> None:
    code, output = run("2 0 0\n2 0 1\nLeft\n4 1 1\nQuit\n")
    assert code == 0
    assert "Score: 4" in output
    assert "4\t0\n0\t4" in output
    assert "Quitting game." in output


def test_ineffective_move_is_reported() -> None:
    code, output = run("2 0 0\n4 1 0\nUp\nQuit\n")
    assert code == 0
    assert "Move did not change the board" in output


def test_new_game_resets_score() -> None:
    script = "2 0 0\n2 0 1\nLeft\n2 1 1\nNew Game\n2 1 0\n4 0 1\nQuit\n"
    code, output = run(script)
    assert code == 0
    assert output.rstrip().count("Score: 0") == 2


def test_end_of_input_stops_cleanly() -> None:
    code, output = run("2 0 0\n2 1 1\n")
    assert code == 0
    assert "Status: IN_PROGRESS" in output


def test_running_out_of_tiles() -> None:
    code, output = run("2 0 0\n")
    assert code == 0
    assert "Ran out of scripted input." in output


def test_bad_tile_line_fails() -> None:
    code, output = run("2 0 0\n3 0 1\n")
    assert code == 1
    assert "Error:" in output


def test_no_display_prints_nothing() -> None:
    code, output = run("2 0 0\n2 0 1\nLeft\n4 1 1\nQuit\n", "--no-display")
    assert code == 0
    assert output == ""


def test_size_must_be_at_least_two() -> None:
    with pytest.raises(SystemExit) as exc:
        parse_args(["--size", "1"])
    assert exc.value.code == 2


def test_normalize_key() -> None:
    assert normalize_key("w\n") == "Up"
    assert normalize_key("a") == "Left"
    assert normalize_key("q") == "Quit"
    assert normalize_key("Right\n") == "Right"
    assert normalize_key("New Game\n") == "New Game"


def test_log_option_records_tiles_and_events(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    code, _ = run("2 0 0\n2 0 1\nLeft\n4 1 1\nQuit\n", "--log")
    assert code == 0
    assert "Tile 2 at (0, 1)" in caplog.text
    assert "merge 2+2 -> 4 (0, 1) -> (0, 0)" in caplog.text


def test_without_log_option_events_are_quiet(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    run("2 0 0\n2 0 1\nLeft\n4 1 1\nQuit\n")
    assert "merge" not in caplog.text
    assert "Tile" not in caplog.text


def test_no_display_stays_silent_when_input_runs_out() -> None:
    code, output = run("2 0 0\n", "--no-display")
    assert code == 0
    assert output == ""
