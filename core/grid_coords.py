# core/grid_coords.py
"""
Row-major coordinate helpers for rectangular SlitherQuest grids.

Convention:
- Cells are stored in a flat sequence, index = y * width + x
- x grows to the RIGHT, y grows toward TOP (y=0 is the bottom row)

Neighbor relationships are computed here, never stored on cells:
- LEFT   neighbor of (x, y) is (x - 1, y), mirrored edge RIGHT
- RIGHT  neighbor of (x, y) is (x + 1, y), mirrored edge LEFT
- BOTTOM neighbor of (x, y) is (x, y - 1), mirrored edge TOP
- TOP    neighbor of (x, y) is (x, y + 1), mirrored edge BOTTOM
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from core.edges import mirror
from core.types import ALL_DIRECTIONS, EdgeDirection, OutOfBoundsError


_DELTAS: Dict[EdgeDirection, Tuple[int, int]] = {
    EdgeDirection.TOP:    ( 0,  1),
    EdgeDirection.BOTTOM: ( 0, -1),
    EdgeDirection.LEFT:   (-1,  0),
    EdgeDirection.RIGHT:  ( 1,  0),
}


def check_index(index: int, width: int, height: int) -> None:
    """Raise OutOfBoundsError unless 0 <= index < width*height."""
    if not (0 <= index < width * height):
        raise OutOfBoundsError(f"index {index} out of range [0, {width * height})")


def to_index(x: int, y: int, width: int, height: int) -> int:
    """
    Convert (x, y) to a linear cell index.

    Raises:
        OutOfBoundsError: If the coordinate lies outside the grid
    """
    if not (0 <= x < width):
        raise OutOfBoundsError(f"x {x} out of range [0, {width})")
    if not (0 <= y < height):
        raise OutOfBoundsError(f"y {y} out of range [0, {height})")
    return y * width + x


def to_coords(index: int, width: int, height: int) -> Tuple[int, int]:
    """Convert a linear cell index to (x, y)."""
    check_index(index, width, height)
    x = index % width
    return x, (index - x) // width


def neighbor(index: int, direction: EdgeDirection, width: int, height: int) -> Optional[Tuple[int, EdgeDirection]]:
    """
    Resolve the cell sharing ``direction``'s border with ``index``.

    Returns:
        (neighbor_index, mirrored_direction), or None at the grid boundary

    Raises:
        OutOfBoundsError: If index is outside the grid
        ValueError: If direction is not a single edge direction
    """
    if direction not in _DELTAS:
        raise ValueError(f"not a single edge direction: {direction!r}")
    x, y = to_coords(index, width, height)
    dx, dy = _DELTAS[direction]
    nx, ny = x + dx, y + dy
    if 0 <= nx < width and 0 <= ny < height:
        return ny * width + nx, mirror(direction)
    return None


def neighbors(index: int, width: int, height: int) -> List[Tuple[EdgeDirection, int, EdgeDirection]]:
    """All (direction, neighbor_index, mirrored_direction) triples of a cell."""
    found: List[Tuple[EdgeDirection, int, EdgeDirection]] = []
    for direction in ALL_DIRECTIONS:
        resolved = neighbor(index, direction, width, height)
        if resolved is not None:
            found.append((direction, resolved[0], resolved[1]))
    return found


def coordinate_to_string(x: int, y: int) -> str:
    """Convert coordinate tuple to the string form used in messages and logs."""
    return f"{x},{y}"

