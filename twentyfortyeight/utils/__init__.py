# -*- coding: utf-8 -*-
"""
This module provides utilities for encoding and rendering game boards.

It includes the structural board codec used by the persistence backends and a plain text renderer.
"""

from .display import render_board
from .serialize import decode_board, dumps, encode_board, loads

__all__ = ["render_board", "encode_board", "decode_board", "dumps", "loads"]
