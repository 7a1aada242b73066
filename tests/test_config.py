import pytest
from pydantic import ValidationError

from game2048.config import Settings, load_settings


def test_defaults() -> None:
    settings = load_settings({})
    assert settings == Settings()
    assert settings.board_size == 4
    assert settings.win_tile == 2048
    assert settings.seed is None
    assert settings.rate_limit == "100/minute"


def test_environment_overrides() -> None:
    settings = load_settings({
        "GAME2048_SIZE": "5",
        "GAME2048_WIN_TILE": "512",
        "GAME2048_FOUR_RATE": "0.25",
        "GAME2048_SEED": "9",
        "GAME2048_RATE_LIMIT": "10/second",
        "UNRELATED": "x",
    })
    assert settings.board_size == 5
    assert settings.win_tile == 512
    assert settings.four_rate == 0.25
    assert settings.seed == 9
    assert settings.rate_limit == "10/second"


def test_empty_variable_keeps_default() -> None:
    assert load_settings({"GAME2048_SEED": ""}).seed is None


@pytest.mark.parametrize("env", [
    {"GAME2048_SIZE": "1"},
    {"GAME2048_SIZE": "four"},
    {"GAME2048_FOUR_RATE": "1.5"},
])
def test_invalid_values_raise(env) -> None:
    with pytest.raises(ValidationError):
        load_settings(env)
