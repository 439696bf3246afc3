"""
Exceptions raised by the 2048 board engine and its persistence boundary.
"""


class GameError(Exception):
    """Base class of every error raised by the engine."""


class OutOfBounds(GameError, IndexError):
    """
    A grid cell was addressed outside of the grid dimensions.

    This is a programming error: correct direction handling never produces it.
    """

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f'Cell ({x}, {y}) is outside of a {width}x{height} grid')
        self.x = x
        self.y = y


class NoSpaceAvailable(GameError):
    """A tile spawn was requested on a grid without any empty cell."""


class PersistenceUnavailable(GameError):
    """The persistence boundary failed to load or save data."""
