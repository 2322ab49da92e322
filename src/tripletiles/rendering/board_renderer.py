from __future__ import annotations

from typing import TYPE_CHECKING

from tripletiles.constants import TILE_PADDING
from tripletiles.ui.layout import BoardGeometry, cell_bounds

if TYPE_CHECKING:
    from tripletiles.utils.snapshot import SessionSnapshot

TILE_COLORS = {
    'red': (239, 68, 68),
    'yellow': (234, 179, 8),
    'green': (34, 197, 94),
    'blue': (59, 130, 246),
    'purple': (168, 85, 247),
}
SELECTION_COLOR = (37, 99, 235)


class BoardRenderer:
    def __init__(self, padding: int = TILE_PADDING):
        self._padding = padding

    def render(self, arcade, snapshot: SessionSnapshot, geometry: BoardGeometry) -> None:
        selected = set(snapshot.selection)
        pad = self._padding
        for row_index, row in enumerate(snapshot.grid):
            for col_index, tile in enumerate(row):
                left, right, bottom, top = cell_bounds(geometry, row_index, col_index)
                rgb = TILE_COLORS.get(tile.color, (128, 128, 128))
                alpha = 255
                if tile.is_removing:
                    alpha = 60
                elif tile.is_new:
                    alpha = 170
                inset = pad * 2 if (row_index, col_index) in selected else pad
                arcade.draw_lrbt_rectangle_filled(
                    left + inset, right - inset, bottom + inset, top - inset, (*rgb, alpha)
                )
                if (row_index, col_index) in selected:
                    arcade.draw_lrbt_rectangle_outline(
                        left + 1, right - 1, bottom + 1, top - 1, SELECTION_COLOR, border_width=3
                    )
