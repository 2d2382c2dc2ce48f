"""
Persisted puzzle records and their encodings.

A PuzzleRecord holds the grid dimensions and one CellRecord per cell in
row-major order. Two encodings are provided:

- JSON (the default on-disk format, human readable)
- A fixed-layout binary form:
      magic  b"SLQP"
      version u8
      width   u16 (little endian)
      height  u16 (little endian)
      cells   one byte each: bits 0-3 solution edges, bit 4 show-count flag

Decoders check field ranges and raise CorruptRecordError. They do NOT check
that the cell count equals width*height; Board.from_record reports that as
a DimensionMismatchError.
"""
import json
import struct
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from core.types import CorruptRecordError, EDGE_MASK, EdgeDirection, MAX_SIZE, MIN_SIZE

FORMAT_NAME = "slitherquest-puzzle"
FORMAT_VERSION = 1

BINARY_MAGIC = b"SLQP"
_HEADER = struct.Struct("<4sBHH")
_SHOW_COUNT_BIT = 0x10
_RESERVED_BITS = 0xE0


@dataclass(frozen=True)
class CellRecord:
    """Persisted form of one cell: its answer key and display flag."""
    solution_edges: EdgeDirection = EdgeDirection.NONE
    show_required_count: bool = True


@dataclass(frozen=True)
class PuzzleRecord:
    """Persisted form of a whole board."""
    width: int
    height: int
    cells: Tuple[CellRecord, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Lists are accepted for convenience; stored as a tuple so records stay hashable.
        if not isinstance(self.cells, tuple):
            object.__setattr__(self, "cells", tuple(self.cells))


# =============================================================================
# FIELD CHECKS
# =============================================================================

def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CorruptRecordError(f"{name} must be an integer, got {value!r}")
    if not (MIN_SIZE <= value <= MAX_SIZE):
        raise CorruptRecordError(f"{name} {value} out of range [{MIN_SIZE}, {MAX_SIZE}]")
    return value


def _check_edges(value: Any, index: int) -> EdgeDirection:
    if isinstance(value, bool) or not isinstance(value, int):
        raise CorruptRecordError(f"cell {index}: solution_edges must be an integer, got {value!r}")
    if not (0 <= value <= EDGE_MASK):
        raise CorruptRecordError(f"cell {index}: solution_edges {value} does not fit in 4 bits")
    return EdgeDirection(value)


# =============================================================================
# JSON
# =============================================================================

def record_to_json(record: PuzzleRecord, puzzle_id: str = "created_puzzle") -> Dict:
    """Export a record to a JSON-compatible dict."""
    return {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "id": puzzle_id,
        "width": record.width,
        "height": record.height,
        "cells": [
            {"solution_edges": int(cell.solution_edges), "show_required_count": cell.show_required_count}
            for cell in record.cells
        ],
    }


def record_from_json(json_data: Any) -> PuzzleRecord:
    """
    Build a PuzzleRecord from JSON puzzle data.

    Raises:
        CorruptRecordError: Missing keys, wrong types or out-of-range fields
    """
    if not isinstance(json_data, dict):
        raise CorruptRecordError("puzzle data must be a JSON object")

    fmt = json_data.get("format", FORMAT_NAME)
    if fmt != FORMAT_NAME:
        raise CorruptRecordError(f"unknown puzzle format {fmt!r}")
    version = json_data.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise CorruptRecordError(f"unsupported puzzle version {version!r}")

    try:
        width = _check_dimension("width", json_data["width"])
        height = _check_dimension("height", json_data["height"])
        raw_cells = json_data["cells"]
    except KeyError as e:
        raise CorruptRecordError(f"missing field {e.args[0]!r}") from e

    if not isinstance(raw_cells, list):
        raise CorruptRecordError("cells must be a list")

    cells: List[CellRecord] = []
    for i, raw in enumerate(raw_cells):
        if not isinstance(raw, dict) or "solution_edges" not in raw:
            raise CorruptRecordError(f"cell {i}: malformed cell entry {raw!r}")
        show = raw.get("show_required_count", True)
        if not isinstance(show, bool):
            raise CorruptRecordError(f"cell {i}: show_required_count must be a boolean")
        cells.append(CellRecord(_check_edges(raw["solution_edges"], i), show))

    return PuzzleRecord(width, height, tuple(cells))


def dumps(record: PuzzleRecord, puzzle_id: str = "created_puzzle") -> str:
    return json.dumps(record_to_json(record, puzzle_id), indent=2)


def loads(text: str) -> PuzzleRecord:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptRecordError(f"invalid JSON: {e}") from e
    return record_from_json(data)


# =============================================================================
# FIXED-LAYOUT BINARY
# =============================================================================

def record_to_bytes(record: PuzzleRecord) -> bytes:
    """Encode a record in the fixed binary layout."""
    _check_dimension("width", record.width)
    _check_dimension("height", record.height)
    body = bytearray()
    for cell in record.cells:
        byte = int(cell.solution_edges) & EDGE_MASK
        if cell.show_required_count:
            byte |= _SHOW_COUNT_BIT
        body.append(byte)
    return _HEADER.pack(BINARY_MAGIC, FORMAT_VERSION, record.width, record.height) + bytes(body)


def record_from_bytes(data: bytes) -> PuzzleRecord:
    """
    Decode the fixed binary layout.

    Raises:
        CorruptRecordError: Short header, bad magic, unknown version,
            out-of-range dimensions or reserved bits set
    """
    if len(data) < _HEADER.size:
        raise CorruptRecordError(f"truncated header ({len(data)} bytes)")
    magic, version, width, height = _HEADER.unpack_from(data)
    if magic != BINARY_MAGIC:
        raise CorruptRecordError(f"bad magic {magic!r}")
    if version != FORMAT_VERSION:
        raise CorruptRecordError(f"unsupported puzzle version {version}")
    _check_dimension("width", width)
    _check_dimension("height", height)

    cells: List[CellRecord] = []
    for i, byte in enumerate(data[_HEADER.size:]):
        if byte & _RESERVED_BITS:
            raise CorruptRecordError(f"cell {i}: reserved bits set in 0x{byte:02x}")
        cells.append(CellRecord(EdgeDirection(byte & EDGE_MASK), bool(byte & _SHOW_COUNT_BIT)))

    return PuzzleRecord(width, height, tuple(cells))
