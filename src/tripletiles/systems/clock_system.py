import logging
from typing import Optional

from esper import World

from tripletiles.components.game_state import GamePhase
from tripletiles.config import GameConfig
from tripletiles.events.bus import (
    EVENT_CLOCK_TICK,
    EVENT_GAME_RESET,
    EVENT_LEVEL_STARTED,
    EVENT_POST_TICK,
    EVENT_TIME_UP,
    EventBus,
)
from tripletiles.utils.game_state import get_game_state, set_phase

logger = logging.getLogger(__name__)


class ClockSystem:
    """One-second countdown fed by frame ticks.

    Runs only while the phase is Playing, including the completion delay that
    follows the final target. The tick that reaches zero switches the phase to
    GameOver itself.
    """

    def __init__(self, world: World, event_bus: EventBus, *, config: Optional[GameConfig] = None):
        self.world = world
        self.event_bus = event_bus
        self.config = config or getattr(world, "config", None) or GameConfig()
        self._accumulated = 0.0
        self.event_bus.subscribe(EVENT_POST_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_reset)
        self.event_bus.subscribe(EVENT_LEVEL_STARTED, self.on_level_started)

    @property
    def running(self) -> bool:
        return get_game_state(self.world).phase == GamePhase.PLAYING

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        if not self.running:
            return
        self._accumulated += dt
        # Tolerate float drift from summing fractional frame deltas.
        while self._accumulated >= 1.0 - 1e-9 and self.running:
            self._accumulated = max(0.0, self._accumulated - 1.0)
            self.tick_second()

    def on_reset(self, sender, **kwargs):
        self._accumulated = 0.0

    def on_level_started(self, sender, **kwargs):
        # A carried-over clock keeps its partial second too.
        if self.config.timer_reset_on_level_up:
            self._accumulated = 0.0

    def tick_second(self) -> int:
        state = get_game_state(self.world)
        if not self.running:
            return state.time_left
        state.time_left = max(0, state.time_left - 1)
        self.event_bus.emit(EVENT_CLOCK_TICK, time_left=state.time_left)
        if state.time_left == 0:
            self._accumulated = 0.0
            logger.info("Time up at level %d with %d points", state.level, state.score)
            set_phase(self.world, self.event_bus, GamePhase.GAME_OVER)
            self.event_bus.emit(EVENT_TIME_UP, level=state.level, score=state.score)
        return state.time_left
