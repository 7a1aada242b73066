# tiles.py
# Sources of new tiles: random for real play, scripted for replaying games.

from typing import Iterable, Iterator, Optional, Protocol, Tuple
import random

Tile = Tuple[int, int, int]  # (value, row, col)


class TileSource(Protocol):
    def next_tile(self, size: int) -> Tile:
        """Proposes a new tile; the cell may already be occupied."""
        ...


class RandomTileSource(object):
    """
    Proposes a 2 (or a 4, with probability FOUR_RATE) on a uniformly chosen
    cell. Passing a seed makes the sequence reproducible.
    """

    def __init__(self, seed: Optional[int] = None, four_rate: float = 0.1):
        self.four_rate = four_rate
        self._rng = random.Random(seed)

    def next_tile(self, size: int) -> Tile:
        value = 4 if self._rng.random() < self.four_rate else 2
        row = self._rng.randrange(size)
        col = self._rng.randrange(size)
        return value, row, col


def parse_tile(line: str) -> Tile:
    """
    Parses "VALUE ROW COL", e.g. "2 0 3".
    Raises:
        ValueError: If the line does not hold three integers or the value is not 2 or 4.
    """
    parts = line.split()
    if len(parts) != 3:
        raise ValueError(f"Expected 'VALUE ROW COL', got {line.strip()!r}")
    value, row, col = (int(p) for p in parts)
    if value not in (2, 4):
        raise ValueError(f"New tiles must be 2 or 4, got {value}")
    return value, row, col


class ScriptedTileSource(object):
    """Takes tiles, one per line, from a stream of text lines."""

    def __init__(self, lines: Iterable[str]):
        self._lines: Iterator[str] = iter(lines)

    def next_tile(self, size: int) -> Tile:
        for line in self._lines:
            if not line.strip():
                continue
            value, row, col = parse_tile(line)
            if not (0 <= row < size and 0 <= col < size):
                raise ValueError(f"Tile position ({row}, {col}) is off a {size}x{size} board")
            return value, row, col
        raise EOFError("No more scripted tiles")
