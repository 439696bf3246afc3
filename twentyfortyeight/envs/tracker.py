"""Game state tracker: owns the live board of a 2048 session and orchestrates every move."""

import logging
import threading
from enum import Enum
from typing import Optional

from twentyfortyeight.config import GameConfig, default_config
from twentyfortyeight.core.board import Board
from twentyfortyeight.core.errors import NoSpaceAvailable, PersistenceUnavailable
from twentyfortyeight.core.gamemove import Direction, is_game_over, move
from twentyfortyeight.core.spawn import SpawnPolicy
from twentyfortyeight.storage.store import BoardStore
from twentyfortyeight.utils.display import render_board

_logger = logging.getLogger(__name__)


class GameStatus(str, Enum):
    """
    Lifecycle of a game session.

    INITIAL: No board was created yet, or the board was just reset.
    PLAYING: A board is live and at least one move is possible.
    GAME_OVER: The board is full and no move changes it. Terminal until a reset.
    """

    INITIAL = 'initial'
    PLAYING = 'playing'
    GAME_OVER = 'game_over'


class GameStateTracker:
    """
    Tracker of a 2048 game session.

    This class keeps the current and previous boards, computes new boards from move directions with the move
    engine and the spawn policy, and reports highscores to the board store.

    Calls are serialized with a lock: overlapping moves never interleave. The in-memory state is always updated
    before the store is called, and store failures are logged without interrupting the game.
    """

    def __init__(
        self, store: BoardStore, config: GameConfig | None = None, spawner: SpawnPolicy | None = None
    ):
        """
        Initialize the tracker.

        Parameters
        ----------
        store : BoardStore
            Persistence boundary for highscores and boards.
        config : GameConfig, optional
            Session configuration (default is ``default_config()``).
        spawner : SpawnPolicy, optional
            Spawn policy. Built from the configuration seed and probabilities when omitted.
        """
        self.store = store
        self.config = config if config is not None else default_config()
        self.spawner = (
            spawner
            if spawner is not None
            else SpawnPolicy.from_seed(self.config.seed, self.config.spawn_probabilities)
        )

        self._lock = threading.Lock()
        self._current_board: Optional[Board] = None
        self._previous_board: Optional[Board] = None
        self._status = GameStatus.INITIAL

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_finished(self) -> bool:
        """True once a move left the board without any possible move."""
        return self._status is GameStatus.GAME_OVER

    def get_current_board(self) -> Board:
        """
        Get the live board, creating it on first call.

        Returns
        -------
        Board
            The same board object on every call until a move or a reset replaces it.

        Notes
        -----
        - A fresh board holds ``initial_tiles`` spawned tiles and a score of 0.
        - With ``config.resume`` set, the board saved in the store is used instead, when there is one.
        """
        with self._lock:
            if self._current_board is None:
                self._current_board = self._resume_board() or self._new_board()
                self._status = GameStatus.GAME_OVER if is_game_over(self._current_board.tiles) else GameStatus.PLAYING
            return self._current_board

    def reset_board(self) -> None:
        """Discard the current and previous boards. The next ``get_current_board`` creates a new one."""
        with self._lock:
            self._current_board = None
            self._previous_board = None
            self._status = GameStatus.INITIAL
        _logger.info('Board reset')

    def update_board(self, board: Board, direction: Direction) -> Board:
        """
        Apply a move to a board.

        Parameters
        ----------
        board : Board
            The board to move. Not modified.
        direction : Direction
            Direction of the move.

        Returns
        -------
        Board
            The new board, or ``board`` itself when the move changes nothing.

        Notes
        -----
        - When the move changes the grid, a clone of ``board`` becomes the previous board, a tile is spawned
          if a cell is free, the score of the merges is added, and the result becomes the current board.
        - When the move changes nothing, no tile is spawned and the previous board is left untouched.
        - Once the game is over, boards are returned unchanged until ``reset_board``.
        - A score strictly greater than the highscore is saved to the store.
        """
        with self._lock:
            if self._status is GameStatus.GAME_OVER:
                _logger.debug('Game is over, ignoring move %s', direction.name)
                return board

            result = move(board.tiles, direction)
            if result.changed:
                self._previous_board = board.clone()
                grid = result.grid
                if not grid.is_full():
                    try:
                        grid = self.spawner.spawn(grid)
                    except NoSpaceAvailable:
                        _logger.warning('Spawn refused after move %s, keeping the merged grid', direction.name)
                updated = Board(grid, board.score + result.score)
                self._current_board = updated
            else:
                updated = board

            self._status = GameStatus.GAME_OVER if is_game_over(updated.tiles) else GameStatus.PLAYING
            _logger.debug(
                'Move %s: changed=%s, +%d\n%s', direction.name, result.changed, result.score, render_board(updated)
            )
            if self._status is GameStatus.GAME_OVER:
                _logger.info('Game over with score %d (max tile %d)', updated.score, updated.max_tile)

            # ##: Persistence only after the in-memory state is settled.
            self._report_highscore(updated.score)
            if self.config.autosave and result.changed:
                self._save_board(updated)

            return updated

    def get_previous_board(self) -> Optional[Board]:
        """
        Get the board as it was before the last successful move.

        Returns
        -------
        Optional[Board]
            None until a move changed a board.
        """
        return self._previous_board

    def get_highscore(self) -> int:
        """
        Load the highscore from the store.

        Returns
        -------
        int
            The stored highscore, or 0 when the store is unavailable.
        """
        try:
            highscore = self.store.load_highscore()
        except PersistenceUnavailable as error:
            _logger.warning('Cannot load highscore, using 0: %s', error)
            return 0
        return highscore

    def _new_board(self) -> Board:
        board = Board.create(
            self.spawner, width=self.config.width, height=self.config.height, initial_tiles=self.config.initial_tiles
        )
        _logger.info('New %dx%d board created', self.config.width, self.config.height)
        return board

    def _resume_board(self) -> Optional[Board]:
        if not self.config.resume:
            return None
        try:
            board = self.store.load_board()
        except PersistenceUnavailable as error:
            _logger.warning('Cannot load saved board, starting a new one: %s', error)
            return None
        if board is not None:
            _logger.info('Resumed saved board with score %d', board.score)
        return board

    def _report_highscore(self, score: int) -> None:
        # ##>: Compare against the stored record, another session may have raised it.
        try:
            best = self.store.load_highscore()
        except PersistenceUnavailable as error:
            _logger.warning('Cannot load highscore, not saving %d: %s', score, error)
            return
        if score <= best:
            return
        try:
            self.store.save_highscore(score)
        except PersistenceUnavailable as error:
            _logger.warning('Cannot save highscore %d: %s', score, error)
            return
        _logger.info('New highscore: %d', score)

    def _save_board(self, board: Board) -> None:
        try:
            self.store.save_board(board)
        except PersistenceUnavailable as error:
            _logger.warning('Cannot save board: %s', error)
