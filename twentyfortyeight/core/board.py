"""
Board of a 2048 game: a grid of tiles and the score accumulated on it.
"""

from dataclasses import dataclass

from twentyfortyeight.core.grid import Grid
from twentyfortyeight.core.spawn import SpawnPolicy


@dataclass
class Board:
    """
    A grid of tiles and its score.

    Attributes
    ----------
    tiles : Grid
        The tiles of the board.
    score : int
        Sum of all merged values since the board was created.
    """

    tiles: Grid
    score: int = 0

    def __post_init__(self):
        if self.score < 0:
            raise ValueError(f'Score must be non-negative, got {self.score}')

    @classmethod
    def create(cls, spawner: SpawnPolicy, width: int = 4, height: int = 4, initial_tiles: int = 2) -> 'Board':
        """
        Create a fresh board seeded with random tiles.

        Parameters
        ----------
        spawner : SpawnPolicy
            Policy placing the initial tiles.
        width : int, optional
            Number of columns (default is 4).
        height : int, optional
            Number of rows (default is 4).
        initial_tiles : int, optional
            Number of tiles to place (default is 2).

        Returns
        -------
        Board
            A board with score 0.
        """
        return cls(spawner.fill(Grid(width, height), initial_tiles), 0)

    @property
    def max_tile(self) -> int:
        return max((tile.value for tile in self.tiles.tiles()), default=0)

    def clone(self) -> 'Board':
        """Return a board with an independent copy of the grid."""
        return Board(self.tiles.copy(), self.score)
