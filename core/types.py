"""
Shared types for the SlitherQuest puzzle engine.
Separated to avoid circular imports between modules.
"""
from enum import IntFlag
from typing import Optional, Tuple


class EdgeDirection(IntFlag):
    """Directional edge bits of a cell (bit0=Top, bit1=Bottom, bit2=Left, bit3=Right)."""
    NONE = 0
    TOP = 1
    BOTTOM = 2
    LEFT = 4
    RIGHT = 8


# Single directions in bit order
ALL_DIRECTIONS: Tuple[EdgeDirection, ...] = (
    EdgeDirection.TOP,
    EdgeDirection.BOTTOM,
    EdgeDirection.LEFT,
    EdgeDirection.RIGHT,
)

EDGE_MASK = 0x0F
MIN_SIZE = 1
MAX_SIZE = 100
MAX_REQUIRED_COUNT = 3


class PuzzleError(Exception):
    """Base class for all engine errors."""


class OutOfBoundsError(PuzzleError, IndexError):
    """Coordinate or index outside the current grid dimensions."""


class DimensionMismatchError(PuzzleError, ValueError):
    """A record's cell count disagrees with its declared width*height."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Record declares {expected} cells but holds {actual}")
        self.expected = expected
        self.actual = actual


class CorruptRecordError(PuzzleError, ValueError):
    """A persisted record could not be parsed into valid field ranges."""


class InvalidLevelError(PuzzleError, ValueError):
    """Level identifiers start at 1."""


class LevelNotFoundError(PuzzleError, FileNotFoundError):
    """No puzzle file exists for the requested level slot."""


class ValidationError:
    """Represents a validation error with severity and description."""
    def __init__(self, severity: str, message: str, location: Optional[Tuple[int, int]] = None):
        self.severity = severity  # "error", "warning", "info"
        self.message = message
        self.location = location

    def __str__(self):
        loc_str = f" at {self.location}" if self.location else ""
        return f"{self.severity.upper()}: {self.message}{loc_str}"
