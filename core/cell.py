"""
Cell - per-cell edge state for a SlitherQuest board.

A cell owns its active edges (what the player or author has drawn) and an
immutable solution edge set (the answer key). It has no reference to the
board or its neighbors; mirrored edges are resolved by the board.
"""
from core import edges as edgeset
from core.types import EdgeDirection, MAX_REQUIRED_COUNT


class Cell:
    """
    Edge state of a single grid cell.

    Attributes:
        show_required_count: Whether the required-count digit is displayed
            (authoring/display toggle, independent of solution correctness)
    """

    __slots__ = ("_active_edges", "_solution_edges", "_required_count",
                 "_current_count", "show_required_count")

    def __init__(self, solution_edges: EdgeDirection = EdgeDirection.NONE,
                 show_required_count: bool = True, seed_from_solution: bool = False):
        """
        Create a cell from its answer key.

        Args:
            solution_edges: Answer-key edge set
            show_required_count: Display flag for the required-count digit
            seed_from_solution: Pre-fill the active edges with the solution
                (author/edit mode)
        """
        self._solution_edges: EdgeDirection = edgeset.edge_set(solution_edges)
        # Count digits only go up to 3, so a 4-edge solution is clamped.
        self._required_count: int = min(max(edgeset.count(self._solution_edges), 0), MAX_REQUIRED_COUNT)
        self.show_required_count: bool = bool(show_required_count)
        self._active_edges: EdgeDirection = self._solution_edges if seed_from_solution else EdgeDirection.NONE
        self._current_count: int = edgeset.count(self._active_edges)

    @property
    def active_edges(self) -> EdgeDirection:
        return self._active_edges

    @property
    def solution_edges(self) -> EdgeDirection:
        return self._solution_edges

    @property
    def required_count(self) -> int:
        return self._required_count

    @property
    def current_count(self) -> int:
        return self._current_count

    def has_edge(self, direction: EdgeDirection) -> bool:
        return edgeset.has(self._active_edges, direction)

    def set_edge(self, direction: EdgeDirection, on: bool) -> None:
        """Force an edge on or off; idempotent if already in that state."""
        self._active_edges = edgeset.with_edge(self._active_edges, direction, on)
        self._current_count = edgeset.count(self._active_edges)

    def toggle_edge(self, direction: EdgeDirection) -> None:
        self.set_edge(direction, not self.has_edge(direction))

    def matches(self) -> bool:
        """True when the drawn edge count equals the required count."""
        return self._current_count == self._required_count

    def copy(self) -> "Cell":
        clone = Cell.__new__(Cell)
        clone._active_edges = self._active_edges
        clone._solution_edges = self._solution_edges
        clone._required_count = self._required_count
        clone._current_count = self._current_count
        clone.show_required_count = self.show_required_count
        return clone

    def __repr__(self):
        return (f"Cell(active={int(self._active_edges)}, solution={int(self._solution_edges)}, "
                f"count={self._current_count}/{self._required_count})")
