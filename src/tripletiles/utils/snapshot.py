"""Read-only view of the session handed to the rendering collaborator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from tripletiles.components.board import Position
from tripletiles.components.game_state import GamePhase
from tripletiles.config import GameConfig
from tripletiles.systems.board_ops import get_board, tile_size
from tripletiles.systems.progression import points_remaining, target_score
from tripletiles.systems.resolution_state_utils import get_or_create_resolution_state
from tripletiles.systems.sound_system import get_sound_settings
from tripletiles.utils.game_state import get_game_state
from tripletiles.utils.selection import get_selection


@dataclass(frozen=True, slots=True)
class TileView:
    color: str
    is_removing: bool
    is_new: bool


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    grid: Tuple[Tuple[TileView, ...], ...]
    selection: Tuple[Position, ...]
    score: int
    combo: int
    time_left: int
    level: int
    phase: GamePhase
    target_score: int
    points_remaining: Optional[int]
    max_level: Optional[int]
    grid_size: int
    tile_size: int
    cleared_level: Optional[int]
    muted: bool
    is_processing: bool

    def color_at(self, row: int, col: int) -> str:
        return self.grid[row][col].color


def build_snapshot(world: World, config: GameConfig | None = None) -> SessionSnapshot:
    config = config or getattr(world, "config", None) or GameConfig()
    state = get_game_state(world)
    board = get_board(world)
    grid = tuple(
        tuple(TileView(color=tile.color.value, is_removing=tile.is_removing, is_new=tile.is_new) for tile in row)
        for row in board.tiles
    )
    return SessionSnapshot(
        grid=grid,
        selection=tuple(get_selection(world).positions),
        score=state.score,
        combo=state.combo,
        time_left=state.time_left,
        level=state.level,
        phase=state.phase,
        target_score=target_score(state.level, config),
        points_remaining=points_remaining(state.score, state.level, config),
        max_level=config.max_level,
        grid_size=board.size,
        tile_size=tile_size(board.level, config.container_size),
        cleared_level=state.cleared_level,
        muted=get_sound_settings(world).muted,
        is_processing=get_or_create_resolution_state(world).is_processing,
    )
