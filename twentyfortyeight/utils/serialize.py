"""
Structural encoding of boards, used by the persistence backends.

A board is encoded as ``{"width": int, "height": int, "cells": [...], "score": int}`` where ``cells`` lists
the tile value of every cell in row-major order, ``None`` for an empty cell.
"""

import json
from typing import Any

from twentyfortyeight.core.board import Board
from twentyfortyeight.core.grid import Grid
from twentyfortyeight.core.tile import Tile


def encode_board(board: Board) -> dict[str, Any]:
    """
    Encode a board into plain Python structures.

    Parameters
    ----------
    board : Board
        The board to encode.

    Returns
    -------
    dict
        JSON-compatible mapping.
    """
    grid = board.tiles
    return {
        'width': grid.width,
        'height': grid.height,
        'cells': [None if tile is None else tile.value for _, _, tile in grid.iterate()],
        'score': board.score,
    }


def decode_board(payload: dict[str, Any]) -> Board:
    """
    Decode a board encoded by ``encode_board``.

    Parameters
    ----------
    payload : dict
        The encoded board.

    Returns
    -------
    Board
        The decoded board.

    Raises
    ------
    ValueError
        If the payload is malformed.
    """
    try:
        width, height = int(payload['width']), int(payload['height'])
        cells = list(payload['cells'])
        score = int(payload['score'])
    except (KeyError, TypeError) as error:
        raise ValueError(f'Malformed board payload: {error}') from error
    if score != payload['score']:
        raise ValueError(f'Board score must be an integer, got {payload["score"]!r}')

    if len(cells) != width * height:
        raise ValueError(f'Expected {width * height} cells, got {len(cells)}')

    def initializer(x: int, y: int) -> Tile | None:
        value = cells[y * width + x]
        if value is None:
            return None
        if int(value) != value:
            raise ValueError(f'Cell ({x}, {y}) must hold an integer, got {value!r}')
        return Tile(int(value), x, y)

    try:
        return Board(Grid.generate(width, height, initializer), score)
    except TypeError as error:
        raise ValueError(f'Malformed board cell: {error}') from error


def dumps(board: Board) -> str:
    """Serialize a board to a JSON string."""
    return json.dumps(encode_board(board))


def loads(data: str) -> Board:
    """
    Deserialize a board from a JSON string.

    Raises
    ------
    ValueError
        If the string is not valid JSON or not a board.
    """
    payload = json.loads(data)
    if not isinstance(payload, dict):
        raise ValueError('Board payload must be a JSON object')
    return decode_board(payload)
