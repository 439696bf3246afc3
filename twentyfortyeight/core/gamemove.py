"""
Move engine of the 2048 game: sliding and merging the tiles of a grid in one direction.

Every function of this module is pure: grids given as input are never modified.
"""

from enum import Enum
from typing import NamedTuple

from numpy import array, ndarray, rot90, zeros_like

from twentyfortyeight.core.grid import Grid


class Direction(Enum):
    """
    Direction of a move.

    The value is the number of counter-clockwise quarter turns bringing the direction to the left.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3

    @classmethod
    def from_name(cls, name: str) -> 'Direction':
        """
        Parse a direction from its name, ignoring case.

        Raises
        ------
        ValueError
            If the name is not a direction.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError as error:
            raise ValueError(f'Unknown direction: {name!r}') from error


class MoveResult(NamedTuple):
    """
    Outcome of a move.

    Attributes
    ----------
    grid : Grid
        The grid after sliding and merging, before any spawn.
    score : int
        Sum of the values produced by the merges.
    changed : bool
        Whether at least one cell differs from the input grid.
    """

    grid: Grid
    score: int
    changed: bool


def merge_line(line: ndarray) -> tuple[int, ndarray]:
    """
    Merge adjacent equal values of a line towards its start.

    Parameters
    ----------
    line : ndarray
        A 1D array of tile values, 0 for an empty cell, index 0 being the leading edge.

    Returns
    -------
    score : int
        The total score obtained from merging.
    merged_line : ndarray
        The non-empty values after merging, compacted against the leading edge.

    Notes
    -----
    - Empty cells are removed before merging.
    - A value produced by a merge never merges again in the same call.
    """
    non_zero = line[line != 0]
    if len(non_zero) <= 1:
        return 0, non_zero

    result = []
    score = 0

    # ##: Walk from the leading edge, skipping both inputs of a merge.
    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            merged = non_zero[i] * 2
            result.append(merged)
            score += int(merged)
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return score, array(result, dtype=line.dtype)


def slide_and_merge(values: ndarray) -> tuple[int, ndarray]:
    """
    Slide every row of a value matrix to the left and merge adjacent equal values.

    Parameters
    ----------
    values : ndarray
        Matrix of tile values, 0 for an empty cell.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated : ndarray
        The new matrix, empty cells padded on the right of each row.
    """
    result = zeros_like(values)
    score = 0

    for i, row in enumerate(values):
        score_row, merged_row = merge_line(row)
        score += score_row
        result[i, : len(merged_row)] = merged_row

    return score, result


def move(grid: Grid, direction: Direction) -> MoveResult:
    """
    Slide and merge all tiles of a grid in one direction.

    Parameters
    ----------
    grid : Grid
        The grid to move. Not modified.
    direction : Direction
        Direction of travel of the tiles.

    Returns
    -------
    MoveResult
        The moved grid, the score of the move, and whether anything changed.
    """
    rotated = rot90(grid.values(), k=direction.value)
    score, updated = slide_and_merge(rotated)
    moved = Grid.from_values(rot90(updated, k=-direction.value))
    return MoveResult(moved, score, moved != grid)


def can_move(grid: Grid, direction: Direction) -> bool:
    """Check if moving the grid in a direction would change it."""
    return move(grid, direction).changed


def legal_directions(grid: Grid) -> list[Direction]:
    """Directions that change the grid."""
    return [direction for direction in Direction if can_move(grid, direction)]


def is_game_over(grid: Grid) -> bool:
    """
    Check if the game is over.

    Parameters
    ----------
    grid : Grid
        The grid to check.

    Returns
    -------
    bool
        True if the grid is full and no direction would change it.
    """
    return grid.is_full() and not legal_directions(grid)
