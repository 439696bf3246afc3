"""
Tile value object placed inside a grid.
"""

from dataclasses import dataclass


def is_tile_value(value: int) -> bool:
    """
    Check if a value can be carried by a tile.

    Parameters
    ----------
    value : int
        Candidate value.

    Returns
    -------
    bool
        True if the value is a power of two greater or equal to 2.
    """
    return value >= 2 and value & (value - 1) == 0


@dataclass(frozen=True)
class Tile:
    """
    An immutable numbered game piece.

    Attributes
    ----------
    value : int
        Power of two, at least 2.
    x : int
        Column index.
    y : int
        Row index.
    """

    value: int
    x: int
    y: int

    def __post_init__(self):
        if not is_tile_value(int(self.value)):
            raise ValueError(f'Tile value must be a power of two >= 2, got {self.value}')
        if self.x < 0 or self.y < 0:
            raise ValueError(f'Tile position must be non-negative, got ({self.x}, {self.y})')

