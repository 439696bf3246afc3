"""
Board store backed by a single JSON document on disk.

The document has the shape ``{"highscore": int, "board": {...}}``, the board being encoded with
``twentyfortyeight.utils.serialize.encode_board``.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

from twentyfortyeight.core.board import Board
from twentyfortyeight.core.errors import PersistenceUnavailable
from twentyfortyeight.utils.serialize import decode_board, encode_board

_logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    Board store persisting the highscore and the board in a JSON file.

    A missing file behaves as an empty store. Any I/O or decoding failure raises ``PersistenceUnavailable``.

    Parameters
    ----------
    path : str | Path
        Location of the JSON document. Parent directories are created on first save.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, ValueError) as error:
            raise PersistenceUnavailable(f'Cannot read {self.path}: {error}') from error
        if not isinstance(document, dict):
            raise PersistenceUnavailable(f'{self.path} does not hold a JSON object')
        return document

    def _write(self, document: dict[str, Any]) -> None:
        # ##>: Write to a sibling file first so a crash never leaves a truncated document.
        temporary = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            temporary.write_text(json.dumps(document), encoding='utf-8')
            temporary.replace(self.path)
        except OSError as error:
            raise PersistenceUnavailable(f'Cannot write {self.path}: {error}') from error

    def _update(self, key: str, value: Any) -> None:
        with self._lock:
            document = self._read()
            document[key] = value
            self._write(document)

    def load_highscore(self) -> int:
        with self._lock:
            document = self._read()
        try:
            return int(document.get('highscore', 0))
        except (TypeError, ValueError) as error:
            raise PersistenceUnavailable(f'Invalid highscore in {self.path}: {error}') from error

    def save_highscore(self, score: int) -> None:
        self._update('highscore', int(score))
        _logger.debug('Highscore %d saved to %s', score, self.path)

    def load_board(self) -> Optional[Board]:
        with self._lock:
            document = self._read()
        payload = document.get('board')
        if payload is None:
            return None
        try:
            return decode_board(payload)
        except ValueError as error:
            raise PersistenceUnavailable(f'Invalid board in {self.path}: {error}') from error

    def save_board(self, board: Board) -> None:
        self._update('board', encode_board(board))
