"""
Presentation adapter of the game.

It maps user events (load, move, new game, highscore request) to tracker calls, and the results to the states
a renderer needs. Listeners receive every emitted state, in order.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Union

from twentyfortyeight.core.board import Board
from twentyfortyeight.core.gamemove import Direction
from twentyfortyeight.envs.tracker import GameStateTracker

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitialState:
    """No board was displayed yet."""


@dataclass(frozen=True)
class UpdateStartState:
    """A board update is in progress."""


@dataclass(frozen=True)
class UpdateEndState:
    board: Board


@dataclass(frozen=True)
class GameOverState:
    board: Board


@dataclass(frozen=True)
class ErrorState:
    message: str


@dataclass(frozen=True)
class HighscoreLoadedState:
    highscore: int


PresentationState = Union[
    InitialState, UpdateStartState, UpdateEndState, GameOverState, ErrorState, HighscoreLoadedState
]
Listener = Callable[[PresentationState], None]


class GamePresenter:
    """
    Adapter between a user interface and a game state tracker.

    Parameters
    ----------
    tracker : GameStateTracker
        The tracker owning the game session.
    """

    def __init__(self, tracker: GameStateTracker):
        self.tracker = tracker
        self.state: PresentationState = InitialState()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener of emitted states.

        Parameters
        ----------
        listener : Listener
            Called with every emitted state.

        Returns
        -------
        Callable[[], None]
            Function removing the listener.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _emit(self, state: PresentationState) -> PresentationState:
        self.state = state
        for listener in list(self._listeners):
            listener(state)
        return state

    def _board_state(self, board: Board) -> PresentationState:
        if self.tracker.is_finished:
            return self._emit(GameOverState(board))
        return self._emit(UpdateEndState(board))

    def load_board(self) -> PresentationState:
        """Display the current board, creating it if needed."""
        self._emit(UpdateStartState())
        try:
            board = self.tracker.get_current_board()
        except Exception as error:
            _logger.exception('Cannot load the board')
            return self._emit(ErrorState(str(error)))
        return self._board_state(board)

    def move(self, direction: Direction) -> PresentationState:
        """Move the current board in a direction and display the result."""
        self._emit(UpdateStartState())
        try:
            board = self.tracker.update_board(self.tracker.get_current_board(), direction)
        except Exception as error:
            _logger.exception('Cannot move the board %s', direction.name)
            return self._emit(ErrorState(str(error)))
        return self._board_state(board)

    def new_game(self) -> PresentationState:
        """Discard the current game and display a new board."""
        self.tracker.reset_board()
        self._emit(InitialState())
        return self.load_board()

    def load_highscore(self) -> PresentationState:
        return self._emit(HighscoreLoadedState(self.tracker.get_highscore()))
