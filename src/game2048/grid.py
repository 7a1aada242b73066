# grid.py
# The N x N tile container the tilt engine reads from and writes to.

from typing import Iterator, List, Tuple

Cell = Tuple[int, int]


def _is_tile_value(value: int) -> bool:
    """True for 0 (empty) or a power of two that is at least 2."""
    if value == 0:
        return True
    return value >= 2 and (value & (value - 1)) == 0


class Grid(object):
    """
    A square board of tile values, 0 meaning empty.

    The number of occupied cells is kept up to date by every write, so
    callers can ask whether the board is full without rescanning it.
    """

    def __init__(self, size: int = 4):
        if not isinstance(size, int) or size < 2:
            raise ValueError("Board size must be an integer of at least 2.")
        self.size = size
        self._cells: List[List[int]] = [[0] * size for _ in range(size)]
        self._count = 0

    @classmethod
    def from_rows(cls, rows: List[List[int]]) -> "Grid":
        """
        Builds a grid from a list of rows.
        Args:
            rows (List[List[int]]): A non-empty square matrix of tile values.
        Returns:
            Grid: A new grid holding a copy of the values.
        Raises:
            ValueError: If the matrix is not square, is smaller than 2x2,
                        or holds a value that is not 0 or a power of two >= 2.
        """
        if not rows or not all(len(row) == len(rows) for row in rows):
            raise ValueError("Board must be a non-empty square matrix.")
        grid = cls(len(rows))
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if not isinstance(value, int) or not _is_tile_value(value):
                    raise ValueError(f"Invalid tile value {value!r} at ({r}, {c}).")
                grid[r, c] = value
        return grid

    def __getitem__(self, cell: Cell) -> int:
        r, c = cell
        return self._cells[r][c]

    def __setitem__(self, cell: Cell, value: int) -> None:
        r, c = cell
        old = self._cells[r][c]
        if old == 0 and value != 0:
            self._count += 1
        elif old != 0 and value == 0:
            self._count -= 1
        self._cells[r][c] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        return f"Grid({self._cells!r})"

    @property
    def occupied_count(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return self.size * self.size

    def is_full(self) -> bool:
        return self._count == self.capacity

    def cells(self) -> Iterator[Cell]:
        """Iterates over all (row, col) positions in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def empty_cells(self) -> List[Cell]:
        """
        Get coordinates of empty (0-value) cells.
        Returns:
            List[Tuple[int, int]]: List of (row, col) tuples for empty cells.
        """
        return [cell for cell in self.cells() if self[cell] == 0]

    def place(self, value: int, row: int, col: int) -> bool:
        """
        Puts a new tile on an empty cell.
        Args:
            value (int): The tile value (2 or 4 for spawned tiles).
            row (int): Target row.
            col (int): Target column.
        Returns:
            bool: False if the cell is already occupied (nothing is written),
                  True once the tile has been placed.
        """
        if self[row, col] != 0:
            return False
        self[row, col] = value
        return True

    def clear(self) -> None:
        for r in range(self.size):
            self._cells[r] = [0] * self.size
        self._count = 0

    def copy(self) -> "Grid":
        twin = Grid(self.size)
        twin._cells = self.rows()
        twin._count = self._count
        return twin

    def rows(self) -> List[List[int]]:
        """Returns the board as a fresh list of lists."""
        return [list(row) for row in self._cells]

    def max_tile(self) -> int:
        return max(max(row) for row in self._cells)

    def contains(self, value: int) -> bool:
        return any(value in row for row in self._cells)

    def pretty(self) -> str:
        """Tab separated rows, one per line, as the CLI prints them."""
        return "\n".join("\t".join(map(str, row)) for row in self._cells)
