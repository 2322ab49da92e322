"""Session state resource shared by every system."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from tripletiles.constants import GAME_TIME


class GamePhase(Enum):
    """High-level session phases."""
    PLAYING = auto()
    LEVEL_UP = auto()
    GAME_OVER = auto()
    COMPLETED = auto()


@dataclass
class GameState:
    """Singleton component storing level, score, clock and phase."""
    level: int = 1
    score: int = 0
    combo: int = 0
    time_left: int = GAME_TIME
    phase: GamePhase = GamePhase.PLAYING
    # Set while a level-up or completion sequence is scheduled.
    transition_pending: bool = False
    cleared_level: Optional[int] = None
