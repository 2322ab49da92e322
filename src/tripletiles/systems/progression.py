"""Pure level rules: score targets and the final-level check."""
from __future__ import annotations

from typing import Optional

from tripletiles.config import GameConfig, ScoringMode


def target_score(level: int, config: GameConfig) -> int:
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    if config.scoring is ScoringMode.FLAT:
        return config.flat_target
    return config.base_score + (level - 1) * config.score_increment


def points_remaining(score: int, level: int, config: GameConfig) -> Optional[int]:
    """Points still needed to clear ``level``; only reported for the scaled variant."""
    if config.scoring is not ScoringMode.SCALED:
        return None
    return max(0, target_score(level, config) - score)


def is_final_level(level: int, config: GameConfig) -> bool:
    return config.max_level is not None and level >= config.max_level


def level_cleared(score: int, level: int, config: GameConfig) -> bool:
    return score >= target_score(level, config)
