# -*- coding: utf-8 -*-
"""
Board engine of the 2048 game.

It provides the tile and grid containers, the pure move engine sliding and merging tiles, the spawn policy
placing new tiles, and the errors raised along the way.
"""

from .board import Board
from .errors import GameError, NoSpaceAvailable, OutOfBounds, PersistenceUnavailable
from .gamemove import Direction, MoveResult, can_move, is_game_over, legal_directions, merge_line, move, slide_and_merge
from .grid import Grid
from .spawn import CLASSIC_SPAWN_PROBS, DEFAULT_SPAWN_PROBS, SpawnPolicy
from .tile import Tile

__all__ = [
    "Board",
    "Direction",
    "Grid",
    "MoveResult",
    "SpawnPolicy",
    "Tile",
    "GameError",
    "NoSpaceAvailable",
    "OutOfBounds",
    "PersistenceUnavailable",
    "CLASSIC_SPAWN_PROBS",
    "DEFAULT_SPAWN_PROBS",
    "can_move",
    "is_game_over",
    "legal_directions",
    "merge_line",
    "move",
    "slide_and_merge",
]
