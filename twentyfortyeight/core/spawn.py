"""
Placement of new tiles after a successful move.
"""

import logging
from typing import Mapping

from numpy.random import Generator, default_rng

from twentyfortyeight.core.errors import NoSpaceAvailable
from twentyfortyeight.core.grid import Grid
from twentyfortyeight.core.tile import Tile, is_tile_value

# ##>: Default distribution of spawned values: always 2.
DEFAULT_SPAWN_PROBS: dict[int, float] = {2: 1.0}

# ##>: Distribution of the classic game (90% for 2, 10% for 4).
CLASSIC_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

_logger = logging.getLogger(__name__)


def check_probabilities(probabilities: Mapping[int, float]) -> None:
    """
    Validate a spawn value distribution.

    Raises
    ------
    ValueError
        If the distribution is empty, has a non-tile value, a non-positive weight, or does not sum to 1.
    """
    if not probabilities:
        raise ValueError('Spawn probabilities must not be empty')
    for value, weight in probabilities.items():
        if not is_tile_value(value):
            raise ValueError(f'Spawn value must be a power of two >= 2, got {value}')
        if weight <= 0:
            raise ValueError(f'Spawn probability of {value} must be positive, got {weight}')
    if abs(sum(probabilities.values()) - 1.0) > 1e-9:
        raise ValueError(f'Spawn probabilities must sum to 1, got {sum(probabilities.values())}')


class SpawnPolicy:
    """
    Choose where and what to spawn on a grid.

    The cell is chosen uniformly among the empty cells, the value is drawn from ``probabilities``.

    Parameters
    ----------
    rng : Generator, optional
        Source of randomness. A fresh generator is created when omitted.
    probabilities : Mapping[int, float], optional
        Distribution of the spawned values (default is always 2).
    """

    def __init__(self, rng: Generator | None = None, probabilities: Mapping[int, float] | None = None):
        self.rng = rng if rng is not None else default_rng()
        self.probabilities = dict(probabilities if probabilities is not None else DEFAULT_SPAWN_PROBS)
        check_probabilities(self.probabilities)

        # ##>: Pre-computed values and weights for sampling.
        self._values = list(self.probabilities)
        self._weights = [self.probabilities[value] for value in self._values]

    @classmethod
    def from_seed(cls, seed: int | None, probabilities: Mapping[int, float] | None = None) -> 'SpawnPolicy':
        return cls(default_rng(seed), probabilities)

    def spawn(self, grid: Grid) -> Grid:
        """
        Place one new tile on a random empty cell.

        Parameters
        ----------
        grid : Grid
            The grid receiving the tile. Not modified.

        Returns
        -------
        Grid
            A copy of the grid holding one more tile.

        Raises
        ------
        NoSpaceAvailable
            If the grid has no empty cell.
        """
        cells = grid.empty_cells()
        if not cells:
            raise NoSpaceAvailable(f'No empty cell on a {grid.width}x{grid.height} grid')

        x, y = cells[int(self.rng.integers(len(cells)))]
        value = int(self.rng.choice(self._values, p=self._weights))

        result = grid.copy()
        result.set(x, y, Tile(value, x, y))
        _logger.debug('Spawned %d at (%d, %d)', value, x, y)
        return result

    def fill(self, grid: Grid, number_tile: int) -> Grid:
        """
        Spawn several tiles, stopping early when the grid is full.

        Parameters
        ----------
        grid : Grid
            The grid receiving the tiles. Not modified.
        number_tile : int
            Number of tiles to add.

        Returns
        -------
        Grid
            The grid with the new tiles.
        """
        result = grid
        for _ in range(number_tile):
            if result.is_full():
                break
            result = self.spawn(result)
        return result
