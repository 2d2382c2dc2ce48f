"""
EdgeSet primitives.

An edge set is an EdgeDirection value holding any combination of the four
directional bits. All helpers are pure and return new values.
"""
from typing import List

from core.types import ALL_DIRECTIONS, EDGE_MASK, EdgeDirection

_MIRRORS = {
    EdgeDirection.TOP: EdgeDirection.BOTTOM,
    EdgeDirection.BOTTOM: EdgeDirection.TOP,
    EdgeDirection.LEFT: EdgeDirection.RIGHT,
    EdgeDirection.RIGHT: EdgeDirection.LEFT,
}


def edge_set(value: int = 0) -> EdgeDirection:
    """Coerce an int mask (0..15) into an edge set."""
    return EdgeDirection(int(value) & EDGE_MASK)


def count(edges: EdgeDirection) -> int:
    """Number of set directional bits (0..4)."""
    return bin(int(edges) & EDGE_MASK).count("1")


def has(edges: EdgeDirection, direction: EdgeDirection) -> bool:
    return bool(edges & direction)


def with_edge(edges: EdgeDirection, direction: EdgeDirection, on: bool) -> EdgeDirection:
    """Return ``edges`` with ``direction`` forced on or off."""
    if on:
        return edge_set(int(edges) | int(direction))
    return edge_set(int(edges) & ~int(direction))


def toggled(edges: EdgeDirection, direction: EdgeDirection) -> EdgeDirection:
    return edge_set(int(edges) ^ int(direction))


def mirror(direction: EdgeDirection) -> EdgeDirection:
    """Opposite direction on the adjacent cell (Top<->Bottom, Left<->Right)."""
    return _MIRRORS[direction]


def directions(edges: EdgeDirection) -> List[EdgeDirection]:
    """Single directions contained in ``edges``, in bit order."""
    return [d for d in ALL_DIRECTIONS if edges & d]
