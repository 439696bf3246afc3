# -*- coding: utf-8 -*-
"""
Persistence boundary of the game: where highscores and boards are loaded from and saved to.
"""
from typing import Optional, Protocol

from twentyfortyeight.core.board import Board


class BoardStore(Protocol):
    """
    Protocol defining the interface of a board store.

    The game state tracker calls out to a store to retrieve and persist the highscore, and optionally the
    current board so that a session can be resumed.

    Implementing classes should define the following methods:
    - load_highscore: Return the best score ever achieved
    - save_highscore: Persist a new best score
    - load_board: Return the saved board, if any
    - save_board: Persist a board

    Every method raises ``PersistenceUnavailable`` when the underlying storage cannot be reached.
    """

    def load_highscore(self) -> int:
        """
        Load the highscore.

        Returns
        -------
        int
            The stored highscore, 0 when none was ever saved.
        """

    def save_highscore(self, score: int) -> None:
        """
        Save a new highscore.

        Parameters
        ----------
        score : int
            The score to store.
        """

    def load_board(self) -> Optional[Board]:
        """
        Load the saved board.

        Returns
        -------
        Optional[Board]
            The saved board, or None if no board was saved.
        """

    def save_board(self, board: Board) -> None:
        """
        Save a board.

        Parameters
        ----------
        board : Board
            The board to store.
        """
