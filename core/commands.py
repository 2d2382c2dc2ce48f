"""
Command pattern implementation for undo/redo of board edits.
Every user-visible mutation of a Board has a reversible command here.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional, List, Any, Dict

from core.types import EdgeDirection, PuzzleError

logger = logging.getLogger(__name__)


class Command(ABC):
    """Abstract base class for all reversible commands."""

    @abstractmethod
    def execute(self, board) -> bool:
        """Execute the command. Returns True if successful."""
        pass

    @abstractmethod
    def undo(self, board) -> bool:
        """Undo the command. Returns True if successful."""
        pass

    @abstractmethod
    def get_description(self) -> str:
        """Get human-readable description of the command."""
        pass


class ToggleEdgeCommand(Command):
    """Toggle one edge of a cell together with its mirrored neighbor edge."""

    def __init__(self, index: int, direction: EdgeDirection):
        self.index = index
        self.direction = EdgeDirection(direction)

    def execute(self, board) -> bool:
        board.toggle_edge_at(self.index, self.direction)
        return True

    def undo(self, board) -> bool:
        # Toggling is its own inverse, and toggle_edge_at keeps the mirror in step.
        board.toggle_edge_at(self.index, self.direction)
        return True

    def get_description(self) -> str:
        return f"Toggle {self.direction.name.lower()} edge of cell {self.index}"


class SetDisplayFlagCommand(Command):
    """Show or hide the required-count digit of a cell."""

    def __init__(self, index: int, visible: bool):
        self.index = index
        self.visible = visible
        self.old_visible: Optional[bool] = None

    def execute(self, board) -> bool:
        self.old_visible = board.cell(self.index).show_required_count
        board.set_cell_display_flag(self.index, self.visible)
        return True

    def undo(self, board) -> bool:
        if self.old_visible is None:
            return False
        board.set_cell_display_flag(self.index, self.old_visible)
        return True

    def get_description(self) -> str:
        action = "Show" if self.visible else "Hide"
        return f"{action} count of cell {self.index}"


class BatchCommand(Command):
    """Several board edits applied and undone as one step (e.g. hide all counts)."""

    def __init__(self, commands: List[Command], description: str):
        self.commands = commands
        self.description = description
        self.applied: List[Command] = []

    def execute(self, board) -> bool:
        """Apply each edit; on the first failure, roll back the ones already applied."""
        self.applied = []
        for command in self.commands:
            if not command.execute(board):
                self._rollback(board)
                return False
            self.applied.append(command)
        return True

    def _rollback(self, board) -> bool:
        ok = True
        while self.applied:
            ok = self.applied.pop().undo(board) and ok
        return ok

    def undo(self, board) -> bool:
        return self._rollback(board)

    def get_description(self) -> str:
        return self.description


class ImportRecordCommand(Command):
    """Command to replace the whole board with a puzzle record."""

    def __init__(self, record, seed_from_solution: bool, label: str = "puzzle"):
        self.record = record
        self.seed_from_solution = seed_from_solution
        self.label = label
        self.old_snapshot = None
        self.error: Optional[PuzzleError] = None

    def execute(self, board) -> bool:
        """Execute the import; the board is untouched if the record is rejected."""
        snapshot = board.snapshot()
        try:
            board.load_record(self.record, self.seed_from_solution)
        except PuzzleError as e:
            self.error = e
            logger.error("Import of %s rejected: %s", self.label, e)
            return False
        self.old_snapshot = snapshot
        self.error = None
        return True

    def undo(self, board) -> bool:
        if self.old_snapshot is None:
            return False
        board.restore(self.old_snapshot)
        return True

    def get_description(self) -> str:
        return f"Import {self.label} ({self.record.width}x{self.record.height})"


class ResetBoardCommand(Command):
    """Command to clear every cell of the board, keeping its dimensions."""

    def __init__(self):
        self.old_snapshot = None

    def execute(self, board) -> bool:
        self.old_snapshot = board.snapshot()
        board.reset()
        return True

    def undo(self, board) -> bool:
        if self.old_snapshot is None:
            return False
        board.restore(self.old_snapshot)
        return True

    def get_description(self) -> str:
        return "Clear board"


class CommandHistory:
    """
    Bounded undo/redo stack for one board.

    ``position`` is the number of applied commands; entries past it are the
    redo tail and are dropped as soon as a new edit is recorded.
    """

    def __init__(self, max_history: int = 100):
        self.max_history = max_history
        self.history: List[Command] = []
        self.position = 0

    def execute_command(self, command: Command, board) -> bool:
        """Apply an edit and record it; rejected edits leave the stack as it was."""
        if not command.execute(board):
            return False

        del self.history[self.position:]
        self.history.append(command)
        if len(self.history) > self.max_history:
            del self.history[0]
        self.position = len(self.history)
        return True

    def can_undo(self) -> bool:
        return self.position > 0

    def can_redo(self) -> bool:
        return self.position < len(self.history)

    def undo(self, board) -> bool:
        if not self.can_undo():
            return False
        command = self.history[self.position - 1]
        if not command.undo(board):
            return False
        self.position -= 1
        logger.debug("Undo: %s", command.get_description())
        return True

    def redo(self, board) -> bool:
        if not self.can_redo():
            return False
        command = self.history[self.position]
        if not command.execute(board):
            return False
        self.position += 1
        logger.debug("Redo: %s", command.get_description())
        return True

    def get_undo_description(self) -> Optional[str]:
        return self.history[self.position - 1].get_description() if self.can_undo() else None

    def get_redo_description(self) -> Optional[str]:
        return self.history[self.position].get_description() if self.can_redo() else None

    def clear_history(self):
        self.history.clear()
        self.position = 0

    def get_history_info(self) -> Dict[str, Any]:
        """Summary of the stack for status displays."""
        return {
            "total_commands": len(self.history),
            "current_index": self.position - 1,
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
            "undo_description": self.get_undo_description(),
            "redo_description": self.get_redo_description(),
        }
