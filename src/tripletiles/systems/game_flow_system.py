"""Session state machine: restart handling and phase bookkeeping."""
from __future__ import annotations

import logging

from esper import World

from tripletiles.components.game_state import GamePhase
from tripletiles.config import GameConfig
from tripletiles.events.bus import (
    EVENT_GAME_RESET,
    EVENT_RESTART_REQUEST,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from tripletiles.timer_factory import cancel_timers
from tripletiles.utils.game_state import get_game_state, set_phase

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Central coordinator for the restart intent.

    A restart wins over anything in flight: every pending timer (resolve
    phases, level-up display, sound cues) is discarded before the reset.
    """

    def __init__(self, world: World, event_bus: EventBus, *, config: GameConfig | None = None) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config or getattr(world, "config", None) or GameConfig()
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self._on_restart_request)

    def _on_restart_request(self, sender, **payload) -> None:
        self.restart()

    def restart(self) -> None:
        state = get_game_state(self.world)
        previous_phase = state.phase
        previous_score = state.score
        discarded = cancel_timers(self.world)
        state.level = 1
        state.score = 0
        state.combo = 0
        state.time_left = self.config.game_time
        state.cleared_level = None
        state.transition_pending = False
        logger.info("Restart from %s (discarded %d pending timers)", previous_phase.name, discarded)
        self.event_bus.emit(EVENT_GAME_RESET, previous_phase=previous_phase, level=1)
        set_phase(self.world, self.event_bus, GamePhase.PLAYING, force=True)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=-previous_score, level=1, reason='restart')
