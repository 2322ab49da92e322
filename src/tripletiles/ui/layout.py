from dataclasses import dataclass
from typing import Optional

from tripletiles.components.board import Position
from tripletiles.constants import BOTTOM_MARGIN


@dataclass(frozen=True, slots=True)
class BoardGeometry:
    tile_size: int
    grid_size: int
    start_x: float
    start_y: float

    @property
    def extent(self) -> int:
        return self.tile_size * self.grid_size

    @property
    def top(self) -> float:
        return self.start_y + self.extent


def compute_board_geometry(window_width: int, grid_size: int, tile_size: int) -> BoardGeometry:
    """Center the board horizontally, resting on the bottom margin.

    Row 0 is drawn at the top, so screen y decreases as the row index grows.
    """
    total_width = grid_size * tile_size
    start_x = (window_width - total_width) / 2
    return BoardGeometry(tile_size=tile_size, grid_size=grid_size, start_x=start_x, start_y=BOTTOM_MARGIN)


def cell_at_point(geometry: BoardGeometry, x: float, y: float) -> Optional[Position]:
    if geometry.tile_size <= 0:
        return None
    if not (geometry.start_x <= x < geometry.start_x + geometry.extent):
        return None
    if not (geometry.start_y <= y < geometry.top):
        return None
    col = int((x - geometry.start_x) // geometry.tile_size)
    row = geometry.grid_size - 1 - int((y - geometry.start_y) // geometry.tile_size)
    if not (0 <= row < geometry.grid_size and 0 <= col < geometry.grid_size):
        return None
    return row, col


def cell_bounds(geometry: BoardGeometry, row: int, col: int) -> tuple[float, float, float, float]:
    """Return (left, right, bottom, top) of a cell in screen space."""
    left = geometry.start_x + col * geometry.tile_size
    top = geometry.top - row * geometry.tile_size
    return left, left + geometry.tile_size, top - geometry.tile_size, top
