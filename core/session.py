"""
PuzzleSession - edit/play mode orchestration around a Board.

The session receives already-resolved intents (cell index + edge direction)
from an input layer; it never polls input itself. In play mode every edge
toggle is followed by a solved check, and the transition to solved fires
the ``on_solved`` callback once (an external timer uses it to pause).
In edit mode levels load with their solution drawn, display flags can be
toggled, and no solved check runs.
"""
import logging
from typing import Callable, Optional

from core.board import Board
from core.config import settings
from core.levels import LevelStore, check_level_id
from core.types import EdgeDirection, InvalidLevelError, LevelNotFoundError

logger = logging.getLogger(__name__)


class PuzzleSession:
    """Owns the active board and level slot for one player/author."""

    def __init__(self, store: Optional[LevelStore] = None, width: int = 4, height: int = 3,
                 edit_mode: bool = False, on_solved: Optional[Callable[[Board], None]] = None):
        self.store = store or LevelStore()
        self.board = Board(width, height, max_history=settings.MAX_HISTORY)
        self.edit_mode = edit_mode
        self.on_solved = on_solved
        self.level_id: Optional[int] = None
        self.solved = self.board.is_solved()

    def toggle_edit_mode(self) -> bool:
        self.edit_mode = not self.edit_mode
        if not self.edit_mode:
            # Edits may have solved or unsolved the board while no check ran.
            self.solved = self.board.is_solved()
        logger.info("Edit mode %s", "on" if self.edit_mode else "off")
        return self.edit_mode

    def click_edge(self, index: int, direction: EdgeDirection) -> bool:
        """Toggle an edge pair; returns True when this click solved the puzzle."""
        self.board.cmd_toggle_edge(index, direction)
        if self.edit_mode:
            return False
        return self._check_solved()

    def click_display_flag(self, index: int) -> bool:
        """Flip a cell's count visibility; edit mode only."""
        if not self.edit_mode:
            return False
        visible = not self.board.cell(index).show_required_count
        return self.board.cmd_set_display_flag(index, visible)

    def undo(self) -> bool:
        done = self.board.undo()
        if done and not self.edit_mode:
            self.solved = self.board.is_solved()
        return done

    def redo(self) -> bool:
        done = self.board.redo()
        if done and not self.edit_mode:
            self._check_solved()
        return done

    def _check_solved(self) -> bool:
        now_solved = self.board.is_solved()
        newly_solved = now_solved and not self.solved
        self.solved = now_solved
        if newly_solved:
            logger.info("Puzzle is clear (level %s)", self.level_id)
            if self.on_solved is not None:
                self.on_solved(self.board)
        return newly_solved

    def select_level(self, level_id: int) -> None:
        """
        Load a level slot into the board (seeded with its solution in edit mode).

        In edit mode an empty slot is still selected and the board is kept,
        so the author can draw a new level and save it there.

        Raises:
            InvalidLevelError: level_id < 1, before any file access
            LevelNotFoundError: empty slot in play mode; nothing changes
            CorruptRecordError, DimensionMismatchError:
                load failed; board and selected level unchanged
        """
        check_level_id(level_id)
        try:
            self.store.load_into(self.board, level_id, seed_from_solution=self.edit_mode)
        except LevelNotFoundError:
            if not self.edit_mode:
                raise
            logger.warning("Level %02d is empty; selected for authoring", level_id)
        self.level_id = level_id
        self.solved = self.board.is_solved()
        logger.info("Selected level %02d (%dx%d)", level_id, self.board.width, self.board.height)

    def save(self):
        """Save the current edge layout as the selected level's answer key."""
        if self.level_id is None:
            raise InvalidLevelError("Cannot save without selecting a level slot")
        return self.store.save(self.level_id, self.board)

    def reset(self) -> bool:
        done = self.board.cmd_reset()
        self.solved = self.board.is_solved()
        return done
