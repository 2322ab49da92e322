"""Gameplay configuration shared by every engine system."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tripletiles.constants import (
    BASE_SCORE,
    COMPLETION_DELAY,
    CONTAINER_SIZE,
    FLAT_TARGET_SCORE,
    GAME_TIME,
    LEVEL_UP_DELAY,
    MAX_LEVEL,
    PALETTE_SIZE,
    POINTS_PER_TILE,
    POP_INTERVAL,
    REMOVAL_DELAY,
    SCORE_INCREMENT,
    SETTLE_DELAY,
    TILES_PER_MATCH,
)


class ScoringMode(Enum):
    """How the per-level score target is derived."""
    FLAT = "flat"
    SCALED = "scaled"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable tuning values.

    Two variants exist in the wild: a scaled target (500 + 100 per level)
    capped at level 100, and a flat 1000-point target with no level cap.
    ``GameConfig.scaled()`` and ``GameConfig.flat()`` build each of them.
    """

    scoring: ScoringMode = ScoringMode.SCALED
    base_score: int = BASE_SCORE
    score_increment: int = SCORE_INCREMENT
    flat_target: int = FLAT_TARGET_SCORE
    max_level: Optional[int] = MAX_LEVEL
    game_time: int = GAME_TIME
    timer_reset_on_level_up: bool = True
    points_per_tile: int = POINTS_PER_TILE
    palette_size: int = PALETTE_SIZE
    removal_delay: float = REMOVAL_DELAY
    settle_delay: float = SETTLE_DELAY
    level_up_delay: float = LEVEL_UP_DELAY
    completion_delay: float = COMPLETION_DELAY
    pop_interval: float = POP_INTERVAL
    container_size: int = CONTAINER_SIZE

    def __post_init__(self) -> None:
        if not isinstance(self.scoring, ScoringMode):
            raise ValueError(f"Unknown scoring mode: {self.scoring!r}")
        if self.max_level is not None and self.max_level < 1:
            raise ValueError("max_level must be >= 1 or None")
        if self.game_time < 1:
            raise ValueError("game_time must be at least one second")
        if not 1 <= self.palette_size <= PALETTE_SIZE:
            raise ValueError(f"palette_size must be between 1 and {PALETTE_SIZE}")
        if self.points_per_tile < 0:
            raise ValueError("points_per_tile must not be negative")
        for name in ("removal_delay", "settle_delay", "level_up_delay", "completion_delay", "pop_interval"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.container_size < 1:
            raise ValueError("container_size must be positive")

    @property
    def match_points(self) -> int:
        return self.points_per_tile * TILES_PER_MATCH

    @classmethod
    def scaled(cls, **overrides) -> "GameConfig":
        params = {"scoring": ScoringMode.SCALED}
        params.update(overrides)
        return cls(**params)

    @classmethod
    def flat(cls, **overrides) -> "GameConfig":
        params = {"scoring": ScoringMode.FLAT, "max_level": None}
        params.update(overrides)
        return cls(**params)
