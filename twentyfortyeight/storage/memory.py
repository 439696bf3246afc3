"""In-process board store, for tests and sessions that are not kept."""

from typing import Optional

from twentyfortyeight.core.board import Board


class MemoryStore:
    """
    Board store keeping everything in memory.

    Saved boards are cloned so that later moves never alter them.
    """

    def __init__(self, highscore: int = 0, board: Optional[Board] = None):
        self.highscore = highscore
        self.board = board.clone() if board is not None else None

    def load_highscore(self) -> int:
        return self.highscore

    def save_highscore(self, score: int) -> None:
        self.highscore = score

    def load_board(self) -> Optional[Board]:
        return self.board.clone() if self.board is not None else None

    def save_board(self, board: Board) -> None:
        self.board = board.clone()
