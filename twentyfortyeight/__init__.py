# -*- coding: utf-8 -*-
"""
2048 board engine.

Pure move engine and spawn policy, a game state tracker orchestrating them per user move, and a persistence
boundary for highscores and boards.
"""

from .config import GameConfig, classic_config, default_config
from .core import Board, Direction, Grid, SpawnPolicy, Tile, move
from .envs import GamePresenter, GameStateTracker, GameStatus
from .storage import JsonFileStore, MemoryStore

__all__ = [
    "GameConfig",
    "default_config",
    "classic_config",
    "Board",
    "Direction",
    "Grid",
    "SpawnPolicy",
    "Tile",
    "move",
    "GamePresenter",
    "GameStateTracker",
    "GameStatus",
    "JsonFileStore",
    "MemoryStore",
]
