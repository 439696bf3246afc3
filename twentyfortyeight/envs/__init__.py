# -*- coding: utf-8 -*-
"""
Python implementation of a 2048 game session.

This module provides the `GameStateTracker` class, which owns the live board and orchestrates the move engine,
the spawn policy and the board store, and the `GamePresenter` adapter mapping user events to display states.
"""

from .presenter import (
    ErrorState,
    GameOverState,
    GamePresenter,
    HighscoreLoadedState,
    InitialState,
    UpdateEndState,
    UpdateStartState,
)
from .tracker import GameStateTracker, GameStatus

__all__ = [
    "GameStateTracker",
    "GameStatus",
    "GamePresenter",
    "InitialState",
    "UpdateStartState",
    "UpdateEndState",
    "GameOverState",
    "ErrorState",
    "HighscoreLoadedState",
]
