from __future__ import annotations

import logging

from esper import World

from tripletiles.components.game_state import GamePhase, GameState
from tripletiles.events.bus import EVENT_PHASE_CHANGED, EVENT_SCORE_CHANGED, EventBus
from tripletiles.systems.resolution_state_utils import get_or_create_resolution_state

logger = logging.getLogger(__name__)


def get_game_state(world: World) -> GameState:
    """Return the shared GameState component, creating it if absent."""
    for _, state in world.get_component(GameState):
        return state
    world.create_entity(GameState())
    return list(world.get_component(GameState))[0][1]


# Playing -> LevelUp -> Playing, Playing -> Completed, Playing -> GameOver.
# GameOver and Completed are left only through a forced restart.
ALLOWED_TRANSITIONS: dict[GamePhase, frozenset[GamePhase]] = {
    GamePhase.PLAYING: frozenset({GamePhase.LEVEL_UP, GamePhase.COMPLETED, GamePhase.GAME_OVER}),
    GamePhase.LEVEL_UP: frozenset({GamePhase.PLAYING}),
    GamePhase.GAME_OVER: frozenset(),
    GamePhase.COMPLETED: frozenset(),
}


def set_phase(world: World, event_bus: EventBus, phase: GamePhase, *, force: bool = False) -> bool:
    """Update the session phase and emit a change event when it differs.

    Transitions outside ALLOWED_TRANSITIONS are refused unless ``force`` is set.
    """
    state = get_game_state(world)
    previous = state.phase
    if previous == phase:
        return False
    if not force and phase not in ALLOWED_TRANSITIONS[previous]:
        logger.warning("Refused phase change %s -> %s", previous.name, phase.name)
        return False
    state.phase = phase
    logger.info("Phase %s -> %s (level %d, score %d)", previous.name, phase.name, state.level, state.score)
    event_bus.emit(EVENT_PHASE_CHANGED, previous_phase=previous, new_phase=phase)
    return True


def add_score(world: World, event_bus: EventBus, points: int, *, reason: str) -> int:
    """Award points for a resolved match; combo always drops back to zero."""
    state = get_game_state(world)
    state.score += points
    state.combo = 0
    event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=points, level=state.level, reason=reason)
    return state.score


def accepts_taps(world: World) -> bool:
    state = get_game_state(world)
    if state.phase != GamePhase.PLAYING or state.transition_pending:
        return False
    return not get_or_create_resolution_state(world).is_processing
