"""Headless session facade.

Sets up the ECS world, event bus and engine systems, and exposes the three
external intents (tap, mute, restart) plus time and snapshot access. Hosts
such as the arcade window drive it; tests use it directly.
"""
from __future__ import annotations

import random

from esper import World

from tripletiles.components.board import Board
from tripletiles.components.game_state import GameState
from tripletiles.components.selection import Selection
from tripletiles.config import GameConfig
from tripletiles.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_BOARD_SETTLED,
    EVENT_CLOCK_TICK,
    EVENT_GRAVITY_APPLIED,
    EVENT_MUTE_CHANGED,
    EVENT_MUTE_TOGGLE_REQUEST,
    EVENT_PHASE_CHANGED,
    EVENT_POST_TICK,
    EVENT_RESOLVE_ABORTED,
    EVENT_RESTART_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_CLEARED,
    EVENT_STATE_CHANGED,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILES_REMOVING,
    EventBus,
)
from tripletiles.systems.board import BoardSystem
from tripletiles.systems.clock_system import ClockSystem
from tripletiles.systems.game_flow_system import GameFlowSystem
from tripletiles.systems.match import MatchSystem
from tripletiles.systems.match_resolution import MatchResolutionSystem
from tripletiles.systems.progression_system import ProgressionSystem
from tripletiles.systems.sound_system import SoundSystem
from tripletiles.systems.timer_system import TimerSystem
from tripletiles.utils.game_state import get_game_state
from tripletiles.utils.snapshot import SessionSnapshot, build_snapshot
from tripletiles.world import create_world

# Events after which the renderer-visible state differs.
STATE_EVENTS = (
    EVENT_TILE_SELECTED,
    EVENT_TILE_DESELECTED,
    EVENT_SELECTION_CLEARED,
    EVENT_TILES_REMOVING,
    EVENT_GRAVITY_APPLIED,
    EVENT_BOARD_SETTLED,
    EVENT_RESOLVE_ABORTED,
    EVENT_BOARD_RESET,
    EVENT_SCORE_CHANGED,
    EVENT_PHASE_CHANGED,
    EVENT_CLOCK_TICK,
    EVENT_MUTE_CHANGED,
)


class GameSession:
    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.event_bus = event_bus or EventBus()
        self.world: World = create_world(config=self.config, rng=rng)

        # Timing systems
        self.timer_system = TimerSystem(self.world, self.event_bus)
        self.clock_system = ClockSystem(self.world, self.event_bus, config=self.config)

        # Board and match systems
        self.board_system = BoardSystem(self.world, self.event_bus, config=self.config)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus, config=self.config)

        # Flow systems
        self.progression_system = ProgressionSystem(self.world, self.event_bus, config=self.config)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus, config=self.config)
        self.sound_system = SoundSystem(self.world, self.event_bus, config=self.config)

        for name in STATE_EVENTS:
            self.event_bus.subscribe(name, lambda sender, _cause=name, **payload: self._publish_state(_cause))

    # ------------------------------------------------------------------
    # External intents
    # ------------------------------------------------------------------

    def tap_tile(self, row: int, col: int) -> None:
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)

    def toggle_mute(self) -> None:
        self.event_bus.emit(EVENT_MUTE_TOGGLE_REQUEST)

    def restart(self) -> None:
        self.event_bus.emit(EVENT_RESTART_REQUEST)

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)
        # Clock second: timers expiring this frame resolve before time can run out.
        self.event_bus.emit(EVENT_POST_TICK, dt=dt)

    def advance(self, seconds: float, step: float = 0.05) -> None:
        """Feed ``seconds`` of time in ``step``-sized ticks."""
        remaining = seconds
        while remaining > 1e-9:
            dt = min(step, remaining)
            self.tick(dt)
            remaining -= dt

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return get_game_state(self.world)

    @property
    def board(self) -> Board:
        return self.board_system.board

    @property
    def selection(self) -> Selection:
        return self.board_system.selection

    def snapshot(self) -> SessionSnapshot:
        return build_snapshot(self.world, self.config)

    def _publish_state(self, cause: str) -> None:
        if not self.event_bus.has_subscribers(EVENT_STATE_CHANGED):
            return
        self.event_bus.emit(EVENT_STATE_CHANGED, snapshot=self.snapshot(), cause=cause)

