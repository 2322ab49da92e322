import logging
from typing import Optional

from esper import World

from tripletiles.components.game_state import GamePhase
from tripletiles.config import GameConfig
from tripletiles.constants import TIMER_COMPLETION, TIMER_GROUP_PROGRESSION, TIMER_LEVEL_UP
from tripletiles.events.bus import (
    EVENT_GAME_COMPLETED,
    EVENT_LEVEL_STARTED,
    EVENT_LEVEL_UP_STARTED,
    EVENT_SCORE_CHANGED,
    EVENT_TIMER_EXPIRED,
    EventBus,
)
from tripletiles.systems.board_ops import grid_size
from tripletiles.systems.progression import is_final_level, level_cleared
from tripletiles.timer_factory import schedule_timer
from tripletiles.utils.game_state import get_game_state, set_phase

logger = logging.getLogger(__name__)


class ProgressionSystem:
    """Watches the score and drives the level-up and completion sequences.

    ``GameState.transition_pending`` guards against a second sequence starting
    while one is scheduled; score checks run on every score change.
    """

    def __init__(self, world: World, event_bus: EventBus, *, config: Optional[GameConfig] = None):
        self.world = world
        self.event_bus = event_bus
        self.config = config or getattr(world, "config", None) or GameConfig()
        self.event_bus.subscribe(EVENT_SCORE_CHANGED, self.on_score_changed)
        self.event_bus.subscribe(EVENT_TIMER_EXPIRED, self.on_timer_expired)

    def on_score_changed(self, sender, **kwargs):
        self.check_progress()

    def on_timer_expired(self, sender, **kwargs):
        kind = kwargs.get('kind')
        if kind == TIMER_LEVEL_UP:
            self._finish_level_up()
        elif kind == TIMER_COMPLETION:
            self._finish_completion()

    def check_progress(self) -> bool:
        """Start a transition if the current level's target is met. Returns True when one starts."""
        state = get_game_state(self.world)
        if state.phase != GamePhase.PLAYING or state.transition_pending:
            return False
        if not level_cleared(state.score, state.level, self.config):
            return False
        state.transition_pending = True
        if is_final_level(state.level, self.config):
            logger.info("Final level %d cleared with %d points", state.level, state.score)
            schedule_timer(self.world, TIMER_COMPLETION, self.config.completion_delay, group=TIMER_GROUP_PROGRESSION)
            return True
        state.cleared_level = state.level
        set_phase(self.world, self.event_bus, GamePhase.LEVEL_UP)
        self.event_bus.emit(EVENT_LEVEL_UP_STARTED, cleared_level=state.level, score=state.score)
        schedule_timer(self.world, TIMER_LEVEL_UP, self.config.level_up_delay, group=TIMER_GROUP_PROGRESSION)
        return True

    def _finish_level_up(self):
        state = get_game_state(self.world)
        if not state.transition_pending or state.phase != GamePhase.LEVEL_UP:
            return
        previous_score = state.score
        state.level += 1
        state.score = 0
        state.cleared_level = None
        state.transition_pending = False
        if self.config.timer_reset_on_level_up:
            state.time_left = self.config.game_time
        logger.info("Level %d started", state.level)
        self.event_bus.emit(EVENT_LEVEL_STARTED, level=state.level, grid_size=grid_size(state.level))
        set_phase(self.world, self.event_bus, GamePhase.PLAYING)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=-previous_score, level=state.level, reason='level_up')

    def _finish_completion(self):
        state = get_game_state(self.world)
        if not state.transition_pending or state.phase != GamePhase.PLAYING:
            return
        state.transition_pending = False
        set_phase(self.world, self.event_bus, GamePhase.COMPLETED)
        self.event_bus.emit(EVENT_GAME_COMPLETED, level=state.level, score=state.score)
