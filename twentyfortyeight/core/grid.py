"""
Fixed-size two dimensional container of tiles.

Cells are addressed by ``(x, y)`` where ``x`` is the column and ``y`` the row. Every enumeration of the grid
is row-major: rows from top to bottom, and inside a row, columns from left to right.
"""

from typing import Callable, Iterator, Optional

from numpy import array_equal, empty, int64, ndarray, zeros

from twentyfortyeight.core.errors import OutOfBounds
from twentyfortyeight.core.tile import Tile

# ##>: Called once per cell with (x, y), returns the initial content of the cell.
CellInitializer = Callable[[int, int], Optional[Tile]]


class Grid:
    """
    A ``width x height`` grid where each cell is either empty or holds a tile.

    The tile stored at ``(x, y)`` always carries ``tile.x == x`` and ``tile.y == y``.
    """

    def __init__(self, width: int = 4, height: int = 4):
        if width <= 0 or height <= 0:
            raise ValueError(f'Grid dimensions must be positive, got {width}x{height}')
        self.width = width
        self.height = height
        self._cells: ndarray = empty((height, width), dtype=object)

    @classmethod
    def generate(cls, width: int, height: int, initializer: CellInitializer | None = None) -> 'Grid':
        """
        Build a grid of the given dimensions.

        Parameters
        ----------
        width : int
            Number of columns.
        height : int
            Number of rows.
        initializer : CellInitializer, optional
            Invoked once per cell, in row-major order, to produce the initial tile (or None).

        Returns
        -------
        Grid
            The new grid.
        """
        grid = cls(width, height)
        if initializer is not None:
            for y in range(height):
                for x in range(width):
                    grid.set(x, y, initializer(x, y))
        return grid

    @classmethod
    def from_values(cls, values: ndarray) -> 'Grid':
        """
        Build a grid from a matrix of tile values, 0 meaning an empty cell.

        Parameters
        ----------
        values : ndarray
            Matrix of shape (height, width).

        Returns
        -------
        Grid
            The grid holding a new tile for every non-zero value.
        """
        height, width = values.shape
        return cls.generate(width, height, lambda x, y: Tile(int(values[y, x]), x, y) if values[y, x] else None)

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(x, y, self.width, self.height)

    def get(self, x: int, y: int) -> Tile | None:
        """Return the tile at (x, y), or None if the cell is empty."""
        self._check_bounds(x, y)
        return self._cells[y, x]

    def set(self, x: int, y: int, tile: Tile | None) -> None:
        """
        Place a tile at (x, y), or empty the cell with None.

        Raises
        ------
        OutOfBounds
            If (x, y) lies outside of the grid.
        ValueError
            If the tile position does not match the cell.
        """
        self._check_bounds(x, y)
        if tile is not None and (tile.x, tile.y) != (x, y):
            raise ValueError(f'Tile at ({tile.x}, {tile.y}) cannot be stored in cell ({x}, {y})')
        self._cells[y, x] = tile

    def iterate(self) -> Iterator[tuple[int, int, Tile | None]]:
        """Yield (x, y, tile or None) for every cell, in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self._cells[y, x]

    def __iter__(self) -> Iterator[tuple[int, int, Tile | None]]:
        return self.iterate()

    def tiles(self) -> list[Tile]:
        """Non-empty cells, in row-major order."""
        return [tile for _, _, tile in self.iterate() if tile is not None]

    def empty_cells(self) -> list[tuple[int, int]]:
        """Coordinates of the empty cells, in row-major order."""
        return [(x, y) for x, y, tile in self.iterate() if tile is None]

    def tile_count(self) -> int:
        return len(self.tiles())

    def is_full(self) -> bool:
        return not self.empty_cells()

    def values(self) -> ndarray:
        """
        Matrix of tile values.

        Returns
        -------
        ndarray
            Array of shape (height, width) with the tile values, 0 for an empty cell.
        """
        result = zeros((self.height, self.width), dtype=int64)
        for x, y, tile in self.iterate():
            if tile is not None:
                result[y, x] = tile.value
        return result

    def copy(self) -> 'Grid':
        """Return an independent grid with the same tiles."""
        grid = Grid(self.width, self.height)
        grid._cells = self._cells.copy()
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and bool(
            array_equal(self.values(), other.values())
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f'Grid({self.width}x{self.height}, {self.values().tolist()})'
