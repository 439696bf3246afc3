# -*- coding: utf-8 -*-
"""
Persistence boundary of the 2048 game and its backends.
"""

from .jsonfile import JsonFileStore
from .memory import MemoryStore
from .store import BoardStore

__all__ = ["BoardStore", "JsonFileStore", "MemoryStore"]
