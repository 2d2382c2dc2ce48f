"""
SlitherQuest - Core Package
Edge state, board logic, serialization, level slots and command system.
"""
from .types import (
    EdgeDirection, ValidationError, PuzzleError, OutOfBoundsError,
    DimensionMismatchError, CorruptRecordError, InvalidLevelError, LevelNotFoundError,
)
from .cell import Cell
from .board import Board
from .serialization import CellRecord, PuzzleRecord
from .commands import Command, CommandHistory
from .levels import LevelStore
from .session import PuzzleSession

__all__ = [
    'EdgeDirection', 'ValidationError', 'PuzzleError', 'OutOfBoundsError',
    'DimensionMismatchError', 'CorruptRecordError', 'InvalidLevelError', 'LevelNotFoundError',
    'Cell', 'Board', 'CellRecord', 'PuzzleRecord', 'Command', 'CommandHistory',
    'LevelStore', 'PuzzleSession',
]
