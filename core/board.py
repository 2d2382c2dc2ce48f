"""
Board - grid state manager for SlitherQuest puzzles.

The board owns a flat, row-major sequence of cells. Neighbor relationships
are computed by core.grid_coords rather than stored on the cells, so every
edge toggle resolves the mirrored neighbor edge and flips both in one step.

Integrates with the command pattern for undo/redo of authoring edits.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from core import edges as edgeset
from core.cell import Cell
from core.commands import (
    BatchCommand,
    CommandHistory,
    ImportRecordCommand,
    ResetBoardCommand,
    SetDisplayFlagCommand,
    ToggleEdgeCommand,
)
from core.serialization import CellRecord, PuzzleRecord
from core.types import (
    DimensionMismatchError,
    EdgeDirection,
    MAX_REQUIRED_COUNT,
    MAX_SIZE,
    MIN_SIZE,
    ValidationError,
)
from core.grid_coords import check_index, coordinate_to_string, neighbor, neighbors, to_coords, to_index

logger = logging.getLogger(__name__)


def clamp_dimension(value: int) -> int:
    """Clamp a grid dimension into [MIN_SIZE, MAX_SIZE]."""
    return min(max(int(value), MIN_SIZE), MAX_SIZE)


@dataclass(frozen=True)
class BoardSnapshot:
    """Complete board contents, used to undo whole-board replacements."""
    width: int
    height: int
    cells: Tuple[Cell, ...]


class Board:
    """
    Grid state manager for SlitherQuest puzzles.

    Responsibilities:
        - Own the cell sequence and the grid dimensions
        - Toggle edges symmetrically across shared borders
        - Answer solved/unsolved queries
        - Export to and import from PuzzleRecord
        - Integrate with command system for undo/redo

    Attributes:
        width: Number of columns (1..100)
        height: Number of rows (1..100)
        command_history: Undo/redo command stack
    """

    def __init__(self, width: int, height: int, max_history: int = 100):
        """
        Initialize an empty board.

        Args:
            width: Number of columns, clamped to [1, 100]
            height: Number of rows, clamped to [1, 100]
            max_history: Undo depth
        """
        self.width: int = clamp_dimension(width)
        self.height: int = clamp_dimension(height)
        self._cells: List[Cell] = [Cell() for _ in range(self.width * self.height)]
        self.command_history: CommandHistory = CommandHistory(max_history=max_history)

    @classmethod
    def from_record(cls, record: PuzzleRecord, seed_from_solution: bool = False) -> 'Board':
        """
        Create a board from a persisted record.

        Args:
            record: Puzzle record
            seed_from_solution: Pre-fill active edges with the solution (author mode)

        Raises:
            DimensionMismatchError: If the record's cell count disagrees with
                its (clamped) width*height
        """
        board = cls(record.width, record.height)
        board._cells = cls._cells_from_record(board.width, board.height, record, seed_from_solution)
        return board

    @staticmethod
    def _cells_from_record(width: int, height: int, record: PuzzleRecord,
                           seed_from_solution: bool) -> List[Cell]:
        expected = width * height
        if len(record.cells) != expected:
            raise DimensionMismatchError(expected, len(record.cells))
        return [Cell(c.solution_edges, c.show_required_count, seed_from_solution) for c in record.cells]

    # =============================================================================
    # CELL QUERIES
    # =============================================================================

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    @property
    def cells(self) -> Sequence[Cell]:
        """Read-only view of the cells in row-major order."""
        return tuple(self._cells)

    def cell(self, index: int) -> Cell:
        check_index(index, self.width, self.height)
        return self._cells[index]

    def cell_at(self, x: int, y: int) -> Cell:
        return self._cells[to_index(x, y, self.width, self.height)]

    def index_of(self, x: int, y: int) -> int:
        return to_index(x, y, self.width, self.height)

    def coords_of(self, index: int) -> Tuple[int, int]:
        return to_coords(index, self.width, self.height)

    def is_solved(self) -> bool:
        """True iff every cell's drawn edge count matches its required count."""
        return all(cell.matches() for cell in self._cells)

    def mismatched_indices(self) -> List[int]:
        """Indices of cells whose drawn count differs from the required count."""
        return [i for i, cell in enumerate(self._cells) if not cell.matches()]

    # =============================================================================
    # GRID VIEWS (numpy arrays indexed [y, x])
    # =============================================================================

    def _grid(self, values, dtype) -> np.ndarray:
        return np.fromiter(values, dtype=dtype, count=len(self._cells)).reshape(self.height, self.width)

    def edge_grid(self) -> np.ndarray:
        """Active edge masks (0..15) per cell."""
        return self._grid((int(c.active_edges) for c in self._cells), np.uint8)

    def count_grid(self) -> np.ndarray:
        """Current drawn edge count per cell."""
        return self._grid((c.current_count for c in self._cells), np.uint8)

    def required_grid(self) -> np.ndarray:
        """Required edge count per cell."""
        return self._grid((c.required_count for c in self._cells), np.uint8)

    def match_mask(self) -> np.ndarray:
        """Boolean mask of matched cells."""
        return self.count_grid() == self.required_grid()

    # =============================================================================
    # DIRECT MUTATIONS (used by commands)
    # =============================================================================

    def toggle_edge_at(self, index: int, direction: EdgeDirection) -> Optional[int]:
        """
        Toggle an edge of a cell and the mirrored edge of its neighbor
        (direct method, use cmd_* for undo/redo).

        Args:
            index: Cell index
            direction: Single edge direction

        Returns:
            Index of the neighbor that was also toggled, or None at a boundary

        Raises:
            OutOfBoundsError: If index is outside the grid
        """
        # Resolve first so a bad index fails before any cell changes.
        resolved = neighbor(index, direction, self.width, self.height)
        self._cells[index].toggle_edge(direction)
        if resolved is None:
            return None
        neighbor_index, mirrored = resolved
        self._cells[neighbor_index].toggle_edge(mirrored)
        return neighbor_index

    def set_cell_display_flag(self, index: int, visible: bool) -> None:
        """Show or hide a cell's required count; edges are not affected."""
        check_index(index, self.width, self.height)
        self._cells[index].show_required_count = bool(visible)

    def reset(self) -> None:
        """Replace every cell with a fresh empty one, keeping dimensions."""
        self._cells = [Cell() for _ in range(self.width * self.height)]

    def load_record(self, record: PuzzleRecord, seed_from_solution: bool = False) -> None:
        """
        Replace the board contents from a record in place.

        Raises:
            DimensionMismatchError: Board is left untouched
        """
        width = clamp_dimension(record.width)
        height = clamp_dimension(record.height)
        cells = self._cells_from_record(width, height, record, seed_from_solution)
        self.width, self.height, self._cells = width, height, cells
        logger.info("Loaded %dx%d board (seeded=%s)", width, height, seed_from_solution)

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(self.width, self.height, tuple(c.copy() for c in self._cells))

    def restore(self, snapshot: BoardSnapshot) -> None:
        self.width = snapshot.width
        self.height = snapshot.height
        self._cells = [c.copy() for c in snapshot.cells]

    # =============================================================================
    # EXPORT
    # =============================================================================

    def to_record(self) -> PuzzleRecord:
        """
        Export the board.

        The current active edges become the record's solution edges: saving
        freezes the author's drawn layout as the puzzle's answer key.
        """
        return PuzzleRecord(
            self.width,
            self.height,
            tuple(CellRecord(c.active_edges, c.show_required_count) for c in self._cells),
        )

    # =============================================================================
    # COMMAND-BASED MUTATIONS (use these for user operations with undo/redo)
    # =============================================================================

    def cmd_toggle_edge(self, index: int, direction: EdgeDirection) -> bool:
        """Toggle an edge pair using command system (for undo/redo)."""
        command = ToggleEdgeCommand(index, direction)
        return self.command_history.execute_command(command, self)

    def cmd_set_display_flag(self, index: int, visible: bool) -> bool:
        """Show/hide a count using command system (for undo/redo)."""
        command = SetDisplayFlagCommand(index, visible)
        return self.command_history.execute_command(command, self)

    def cmd_set_all_display_flags(self, visible: bool) -> bool:
        """Show/hide every count that differs, as a single undo step."""
        commands = [SetDisplayFlagCommand(i, visible)
                    for i, cell in enumerate(self._cells)
                    if cell.show_required_count != visible]
        if not commands:
            return True
        action = "Show" if visible else "Hide"
        return self.command_history.execute_command(BatchCommand(commands, f"{action} all counts"), self)

    def cmd_import_record(self, record: PuzzleRecord, seed_from_solution: bool = False,
                          label: str = "puzzle") -> bool:
        """
        Import a record using command system (for undo/redo).

        Raises:
            PuzzleError: The rejected record's error; the board is unchanged
        """
        command = ImportRecordCommand(record, seed_from_solution, label)
        if not self.command_history.execute_command(command, self):
            raise command.error
        return True

    def cmd_reset(self) -> bool:
        """Clear the board using command system (for undo/redo)."""
        return self.command_history.execute_command(ResetBoardCommand(), self)

    # =============================================================================
    # UNDO/REDO OPERATIONS
    # =============================================================================

    def undo(self) -> bool:
        return self.command_history.undo(self)

    def redo(self) -> bool:
        return self.command_history.redo(self)

    def can_undo(self) -> bool:
        return self.command_history.can_undo()

    def can_redo(self) -> bool:
        return self.command_history.can_redo()

    def clear_history(self) -> None:
        self.command_history.clear_history()

    def get_history_info(self) -> Dict:
        return self.command_history.get_history_info()

    # =============================================================================
    # VALIDATION
    # =============================================================================

    def validate_board(self) -> List[ValidationError]:
        """
        Return a list[ValidationError]. No "error" entries == VALID.
        Rules:
        - Shared edges must be mirrored by the neighbor (error)
        - Solutions using all four edges cannot match the clamped count (warning)
        - A board with no drawn edges saves as an all-zero puzzle (warning)
        """
        errors: List[ValidationError] = []

        for i, cell in enumerate(self._cells):
            x, y = self.coords_of(i)
            for direction, n_index, mirrored in neighbors(i, self.width, self.height):
                # Only look up/right so each shared border is checked once.
                if direction not in (EdgeDirection.TOP, EdgeDirection.RIGHT):
                    continue
                if cell.has_edge(direction) != self._cells[n_index].has_edge(mirrored):
                    nx, ny = self.coords_of(n_index)
                    errors.append(ValidationError(
                        "error",
                        f"Unmirrored edge between {coordinate_to_string(x, y)} "
                        f"and {coordinate_to_string(nx, ny)}",
                        location=(x, y)
                    ))

            if edgeset.count(cell.solution_edges) > MAX_REQUIRED_COUNT:
                errors.append(ValidationError(
                    "warning",
                    f"Solution uses all 4 edges; required count is clamped to {MAX_REQUIRED_COUNT}",
                    location=(x, y)
                ))

        if not any(cell.active_edges for cell in self._cells):
            errors.append(ValidationError("warning", "No edges drawn"))

        return errors

    def get_statistics(self) -> Dict:
        """Get grid statistics for status displays."""
        matched = sum(1 for c in self._cells if c.matches())
        edged = sum(1 for c in self._cells if c.active_edges)
        # Every shared segment is stored on both cells; count each physical segment once.
        segments = sum(c.current_count for c in self._cells)
        for i, cell in enumerate(self._cells):
            for direction, _, _ in neighbors(i, self.width, self.height):
                if direction in (EdgeDirection.BOTTOM, EdgeDirection.LEFT) and cell.has_edge(direction):
                    segments -= 1

        history_info = self.get_history_info()
        return {
            "width": self.width,
            "height": self.height,
            "total_cells": len(self._cells),
            "matched_cells": matched,
            "mismatched_cells": len(self._cells) - matched,
            "edged_cells": edged,
            "edge_segments": segments,
            "is_solved": matched == len(self._cells),
            "can_undo": history_info["can_undo"],
            "can_redo": history_info["can_redo"],
            "total_commands": history_info["total_commands"],
        }

    def __repr__(self):
        return f"Board({self.width}x{self.height}, solved={self.is_solved()})"
