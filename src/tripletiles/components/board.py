from dataclasses import dataclass, field
from typing import List, Tuple

from tripletiles.components.tile import Tile

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Square tile matrix indexed as ``tiles[row][col]``; row 0 is the top."""
    size: int
    tiles: List[List[Tile]] = field(default_factory=list)
    level: int = 1
