"""
Cursor hit-testing for square SlitherQuest grids.

World units: every cell is 1x1, cell (0, 0) spans [0, 1] x [0, 1] and y
grows toward the TOP edge. Only the geometry needed to turn a cursor
position into a (cell, edge) intent lives here; drawing is left to the
caller.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from core.types import EdgeDirection
from core.grid_coords import to_index


class CursorValidity(Enum):
    """Where the cursor sits relative to the board."""
    OUTSIDE = "outside"
    INSIDE_CELL = "inside_cell"
    CLOSE_TO_CELL = "close_to_cell"   # within edge tolerance of the border


@dataclass(frozen=True)
class HitResult:
    validity: CursorValidity
    cell_x: int
    cell_y: int
    edge: EdgeDirection

    def index(self, width: int) -> int:
        """Linear cell index of the hovered cell."""
        return self.cell_y * width + self.cell_x


class SquareHitTester:
    """Maps cursor positions to hovered cells and their nearest edge."""

    def __init__(self, width: int, height: int, edge_tolerance: float = 0.5,
                 cell_size: float = 40.0, offset_x: float = 0.0, offset_y: float = 0.0):
        """
        Args:
            width, height: Grid dimensions in cells
            edge_tolerance: How far outside the board (in cells) a click still counts
            cell_size: Pixel size of one cell, for pixel_to_world
            offset_x, offset_y: Pixel position of the board's top-left corner
        """
        self.width = width
        self.height = height
        self.edge_tolerance = edge_tolerance
        self.cell_size = cell_size
        self.offset_x = offset_x
        self.offset_y = offset_y

    def pixel_to_world(self, pixel_x: float, pixel_y: float) -> Tuple[float, float]:
        """Convert canvas pixels (y down) to world units (y up)."""
        x = (pixel_x - self.offset_x) / self.cell_size
        y = self.height - (pixel_y - self.offset_y) / self.cell_size
        return x, y

    def validity(self, x: float, y: float) -> CursorValidity:
        if 0.0 < x < self.width and 0.0 < y < self.height:
            return CursorValidity.INSIDE_CELL
        tol = self.edge_tolerance
        if -tol < x < self.width + tol and -tol < y < self.height + tol:
            return CursorValidity.CLOSE_TO_CELL
        return CursorValidity.OUTSIDE

    def locate(self, x: float, y: float) -> HitResult:
        """
        Find the hovered cell and its nearest edge.

        The hovered cell is the cell under the position clamped into the
        grid; the nearest edge is picked by the cursor's offset from that
        cell's center. ``edge`` is NONE when the cursor is outside.
        """
        validity = self.validity(x, y)
        cell_x = int(math.floor(min(max(x, 0.0), float(self.width - 1))))
        cell_y = int(math.floor(min(max(y, 0.0), float(self.height - 1))))

        edge = EdgeDirection.NONE
        if validity != CursorValidity.OUTSIDE:
            dx = x - (cell_x + 0.5)
            dy = y - (cell_y + 0.5)
            if dy >= abs(dx):
                edge = EdgeDirection.TOP
            elif dy < -abs(dx):
                edge = EdgeDirection.BOTTOM
            elif dx < 0.0:
                edge = EdgeDirection.LEFT
            else:
                edge = EdgeDirection.RIGHT

        return HitResult(validity, cell_x, cell_y, edge)

    def locate_pixel(self, pixel_x: float, pixel_y: float) -> HitResult:
        return self.locate(*self.pixel_to_world(pixel_x, pixel_y))

    def resolve(self, x: float, y: float):
        """(index, edge) intent for a world position, or None when outside."""
        hit = self.locate(x, y)
        if hit.edge == EdgeDirection.NONE:
            return None
        return to_index(hit.cell_x, hit.cell_y, self.width, self.height), hit.edge
