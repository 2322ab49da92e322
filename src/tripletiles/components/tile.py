from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class TileColor(Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"
    PURPLE = "purple"


PALETTE: Tuple[TileColor, ...] = tuple(TileColor)


@dataclass(slots=True)
class Tile:
    """Single grid cell.

    ``is_removing`` and ``is_new`` only drive renderer transitions; they carry
    no gameplay meaning and are cleared once the board settles.
    """
    color: TileColor
    is_removing: bool = False
    is_new: bool = False
