"""
Configuration of a 2048 game session.
"""

from dataclasses import dataclass, field

from twentyfortyeight.core.spawn import CLASSIC_SPAWN_PROBS, DEFAULT_SPAWN_PROBS, check_probabilities


@dataclass
class GameConfig:
    """
    Configuration of a game session.

    Attributes
    ----------
    width : int
        Number of columns of the board.
    height : int
        Number of rows of the board.
    initial_tiles : int
        Number of tiles spawned on a fresh board.
    spawn_probabilities : dict[int, float]
        Distribution of the spawned values.
    seed : int | None
        Seed of the spawn generator. None draws fresh entropy.
    resume : bool
        Whether the first board is loaded from the store when it holds one.
    autosave : bool
        Whether every successful move saves the board to the store.
    """

    # ##>: Board geometry.
    width: int = 4
    height: int = 4
    initial_tiles: int = 2

    # ##>: Spawn policy.
    spawn_probabilities: dict[int, float] = field(default_factory=lambda: dict(DEFAULT_SPAWN_PROBS))
    seed: int | None = None

    # ##>: Persistence.
    resume: bool = False
    autosave: bool = False

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f'Board dimensions must be positive, got {self.width}x{self.height}')
        if not 0 <= self.initial_tiles <= self.width * self.height:
            raise ValueError(f'initial_tiles must fit on the board, got {self.initial_tiles}')
        check_probabilities(self.spawn_probabilities)


def default_config() -> GameConfig:
    """Create the default configuration: 4x4 board, always spawning 2."""
    return GameConfig()


def classic_config() -> GameConfig:
    """Create the configuration of the classic game, spawning 4 one time out of ten."""
    return GameConfig(spawn_probabilities=dict(CLASSIC_SPAWN_PROBS))
