import pytest

from game2048.tiles import RandomTileSource, ScriptedTileSource, parse_tile


def test_seeded_source_is_reproducible() -> None:
    a = RandomTileSource(seed=42)
    b = RandomTileSource(seed=42)
    assert [a.next_tile(4) for _ in range(20)] == [b.next_tile(4) for _ in range(20)]


def test_random_tiles_stay_on_board() -> None:
    source = RandomTileSource(seed=1)
    for _ in range(200):
        value, row, col = source.next_tile(3)
        assert value in (2, 4)
        assert 0 <= row < 3 and 0 <= col < 3


def test_four_rate_bounds() -> None:
    assert {RandomTileSource(seed=5, four_rate=0.0).next_tile(4)[0] for _ in range(50)} == {2}
    assert {RandomTileSource(seed=5, four_rate=1.0).next_tile(4)[0] for _ in range(50)} == {4}


def test_scripted_source_reads_lines_in_order() -> None:
    source = ScriptedTileSource(["2 0 1\n", "\n", "4 3 3\n"])
    assert source.next_tile(4) == (2, 0, 1)
    assert source.next_tile(4) == (4, 3, 3)
    with pytest.raises(EOFError):
        source.next_tile(4)


@pytest.mark.parametrize("line", ["2 0", "8 0 0", "two 0 0", "2 0 0 0"])
def test_parse_tile_rejects_malformed_lines(line: str) -> None:
    with pytest.raises(ValueError):
        parse_tile(line)


def test_scripted_tile_off_board() -> None:
    source = ScriptedTileSource(["2 4 0"])
    with pytest.raises(ValueError):
        source.next_tile(4)
