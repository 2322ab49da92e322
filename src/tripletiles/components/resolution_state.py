from dataclasses import dataclass, field
from typing import List, Optional

from tripletiles.components.board import Position


@dataclass(slots=True)
class ResolutionState:
    """Single-flight lock and progress of the match being resolved."""

    is_processing: bool = False
    stage: Optional[str] = None
    positions: List[Position] = field(default_factory=list)
