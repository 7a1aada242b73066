import pytest

from game2048.grid import Grid


def test_new_grid_is_empty() -> None:
    grid = Grid(4)
    assert grid.occupied_count == 0
    assert grid.capacity == 16
    assert len(grid.empty_cells()) == 16
    assert not grid.is_full()


def test_writes_keep_occupied_count() -> None:
    grid = Grid(3)
    grid[0, 0] = 2
    grid[1, 2] = 4
    assert grid.occupied_count == 2
    grid[0, 0] = 8  # overwrite a tile
    assert grid.occupied_count == 2
    grid[1, 2] = 0
    assert grid.occupied_count == 1
    grid[2, 2] = 0  # already empty
    assert grid.occupied_count == 1


def test_place_refuses_occupied_cell() -> None:
    grid = Grid(2)
    assert grid.place(2, 1, 1)
    assert not grid.place(4, 1, 1)
    assert grid[1, 1] == 2
    assert grid.occupied_count == 1


def test_from_rows_and_full_board() -> None:
    grid = Grid.from_rows([[2, 4], [8, 16]])
    assert grid.is_full()
    assert grid.max_tile() == 16
    assert grid.contains(8)
    assert not grid.contains(32)
    assert grid.rows() == [[2, 4], [8, 16]]


@pytest.mark.parametrize("rows", [
    [],
    [[2]],
    [[2, 4], [8]],
    [[2, 4, 0], [0, 0, 0]],
    [[3, 0], [0, 0]],
    [[-2, 0], [0, 0]],
    [[1, 0], [0, 0]],
])
def test_from_rows_rejects_bad_boards(rows) -> None:
    with pytest.raises(ValueError):
        Grid.from_rows(rows)


def test_size_below_two_is_rejected() -> None:
    with pytest.raises(ValueError):
        Grid(1)


def test_copy_is_independent() -> None:
    grid = Grid.from_rows([[2, 0], [0, 4]])
    twin = grid.copy()
    twin[0, 1] = 2
    assert grid[0, 1] == 0
    assert grid.occupied_count == 2
    assert twin.occupied_count == 3
    assert twin != grid


def test_clear_resets_cells_and_count() -> None:
    grid = Grid.from_rows([[2, 4], [8, 16]])
    grid.clear()
    assert grid == Grid(2)
    assert grid.occupied_count == 0


def test_pretty_prints_rows() -> None:
    grid = Grid.from_rows([[2, 0], [0, 4]])
    assert grid.pretty() == "2\t0\n0\t4"
