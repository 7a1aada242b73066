# config.py
# Defaults for the API and the CLI, overridable through GAME2048_* variables.

from typing import Mapping, Optional
import os

from pydantic import BaseModel, Field

ENV_PREFIX = "GAME2048_"

_ENV_FIELDS = {
    "SIZE": "board_size",
    "WIN_TILE": "win_tile",
    "FOUR_RATE": "four_rate",
    "SEED": "seed",
    "RATE_LIMIT": "rate_limit",
}


class Settings(BaseModel):
    """Game and server settings."""
    board_size: int = Field(default=4, ge=2, description="Dimension N of the N x N board.")
    win_tile: int = Field(default=2048, gt=0, description="Tile value that wins the game.")
    four_rate: float = Field(default=0.1, ge=0.0, le=1.0,
                             description="Probability that a new tile is a 4 rather than a 2.")
    seed: Optional[int] = Field(default=None, description="Seed for new tile placement.")
    rate_limit: str = Field(default="100/minute", description="Per-client limit for API calls.")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Builds Settings from the environment.
    Args:
        environ (Mapping[str, str]): Defaults to os.environ.
    Returns:
        Settings: The validated settings.
    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    env = os.environ if environ is None else environ
    values = {}
    for suffix, field in _ENV_FIELDS.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is not None and raw != "":
            values[field] = raw
    return Settings(**values)
