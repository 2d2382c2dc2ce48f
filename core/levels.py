"""
Level slots - one puzzle record per file, addressed by level id.

Level ids start at 1 and map to ``level01.json`` (or ``level01.dat`` for the
binary format) inside the puzzle directory. Ids are validated before any
file access.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

from core import serialization
from core.config import settings
from core.serialization import PuzzleRecord
from core.types import CorruptRecordError, InvalidLevelError, LevelNotFoundError

logger = logging.getLogger(__name__)

_EXTENSIONS = {"json": ".json", "binary": ".dat"}


def check_level_id(level_id) -> int:
    """Raise InvalidLevelError unless level_id is an integer >= 1."""
    if isinstance(level_id, bool) or not isinstance(level_id, int):
        raise InvalidLevelError(f"level id must be an integer, got {level_id!r}")
    if level_id < 1:
        raise InvalidLevelError(f"level id must be >= 1, got {level_id}")
    return level_id


class LevelStore:
    """Reads and writes puzzle records in a directory of level slots."""

    def __init__(self, directory: Optional[Union[str, Path]] = None, fmt: Optional[str] = None):
        """
        Args:
            directory: Puzzle directory (defaults to settings.PUZZLE_DIR)
            fmt: "json" or "binary" (defaults to settings.PUZZLE_FORMAT)
        """
        self.directory = Path(directory) if directory is not None else Path(settings.PUZZLE_DIR)
        self.fmt = fmt or settings.PUZZLE_FORMAT
        if self.fmt not in _EXTENSIONS:
            raise ValueError(f"unknown puzzle format {self.fmt!r}")

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self.fmt]

    def path_for(self, level_id: int) -> Path:
        check_level_id(level_id)
        return self.directory / f"level{level_id:02d}{self.extension}"

    def exists(self, level_id: int) -> bool:
        return self.path_for(level_id).is_file()

    def available_levels(self) -> List[int]:
        """Level ids that currently have a puzzle file, ascending."""
        if not self.directory.is_dir():
            return []
        found = []
        for path in self.directory.glob(f"level*{self.extension}"):
            digits = path.stem[len("level"):]
            if digits.isdigit() and int(digits) >= 1:
                found.append(int(digits))
        return sorted(found)

    def encode(self, record: PuzzleRecord, level_id: int) -> bytes:
        if self.fmt == "binary":
            return serialization.record_to_bytes(record)
        return serialization.dumps(record, puzzle_id=f"level{level_id:02d}").encode("utf-8")

    def decode(self, data: bytes) -> PuzzleRecord:
        if self.fmt == "binary":
            return serialization.record_from_bytes(data)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptRecordError(f"puzzle file is not UTF-8: {e}") from e
        return serialization.loads(text)

    def save(self, level_id: int, source) -> Path:
        """
        Write a level slot.

        Args:
            level_id: Level id (>= 1)
            source: A PuzzleRecord, or anything with ``to_record()`` (a Board)
        """
        path = self.path_for(level_id)
        record = source if isinstance(source, PuzzleRecord) else source.to_record()
        data = self.encode(record, level_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Saved level %d to %s", level_id, path)
        return path

    def load(self, level_id: int) -> PuzzleRecord:
        """
        Read a level slot.

        Raises:
            InvalidLevelError: level_id < 1 (no file access attempted)
            LevelNotFoundError: No file for this slot
            CorruptRecordError: File could not be parsed
        """
        path = self.path_for(level_id)
        try:
            data = path.read_bytes()
        except FileNotFoundError as e:
            raise LevelNotFoundError(f"no puzzle for level {level_id} at {path}") from e
        try:
            return self.decode(data)
        except CorruptRecordError:
            logger.error("Could not load file '%s'", path)
            raise

    def load_into(self, board, level_id: int, seed_from_solution: bool = False) -> None:
        """Load a level into an existing board as one undoable import; board unchanged on failure."""
        record = self.load(level_id)
        board.cmd_import_record(record, seed_from_solution, label=f"level {level_id:02d}")
