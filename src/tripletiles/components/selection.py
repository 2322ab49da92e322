from dataclasses import dataclass, field
from typing import List

from tripletiles.components.board import Position


@dataclass(slots=True)
class Selection:
    """Insertion-ordered, duplicate-free tapped positions (at most three)."""
    positions: List[Position] = field(default_factory=list)
