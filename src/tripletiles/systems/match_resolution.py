import logging
import random
from typing import Optional

from esper import World

from tripletiles.components.game_state import GamePhase
from tripletiles.config import GameConfig
from tripletiles.constants import (
    SOUND_POP,
    TILES_PER_MATCH,
    TIMER_GROUP_RESOLVE,
    TIMER_RESOLVE_GRAVITY,
    TIMER_RESOLVE_SETTLE,
)
from tripletiles.events.bus import (
    EVENT_BOARD_SETTLED,
    EVENT_GAME_RESET,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_FOUND,
    EVENT_MATCH_RESOLVED,
    EVENT_PHASE_CHANGED,
    EVENT_REFILL_COMPLETED,
    EVENT_RESOLVE_ABORTED,
    EVENT_SOUND_REQUEST,
    EVENT_TILES_REMOVING,
    EVENT_TIMER_EXPIRED,
    EventBus,
)
from tripletiles.systems.board_ops import (
    collapse_columns,
    get_board,
    mark_removing,
    palette_for,
    repair_board,
    settle_board,
)
from tripletiles.systems.resolution_state_utils import get_or_create_resolution_state
from tripletiles.timer_factory import cancel_timers, schedule_timer
from tripletiles.utils.game_state import add_score

logger = logging.getLogger(__name__)

STAGE_REMOVING = "removing"
STAGE_SETTLING = "settling"


class MatchResolutionSystem:
    """Runs a match through removal, gravity+refill and settle phases.

    Each phase boundary is a PendingTimer so the host decides how fast time
    passes. Only one resolve may be in flight; ResolutionState.is_processing
    is the lock that BoardSystem checks before accepting taps.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.config = config or getattr(world, "config", None) or GameConfig()
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self._palette = palette_for(self.config)
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_TIMER_EXPIRED, self.on_timer_expired)
        self.event_bus.subscribe(EVENT_PHASE_CHANGED, self.on_phase_changed)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    def on_match_found(self, sender, **kwargs):
        positions = [tuple(pos) for pos in kwargs.get('positions') or []]
        if len(positions) != TILES_PER_MATCH:
            return
        state = get_or_create_resolution_state(self.world)
        if state.is_processing:
            logger.warning("Match %r ignored: resolve already in flight", positions)
            return
        state.is_processing = True
        state.stage = STAGE_REMOVING
        state.positions = positions
        mark_removing(get_board(self.world), positions)
        self.event_bus.emit(EVENT_TILES_REMOVING, positions=positions)
        self.event_bus.emit(EVENT_SOUND_REQUEST, cue=SOUND_POP, repeat=TILES_PER_MATCH)
        schedule_timer(self.world, TIMER_RESOLVE_GRAVITY, self.config.removal_delay, group=TIMER_GROUP_RESOLVE)

    def on_timer_expired(self, sender, **kwargs):
        kind = kwargs.get('kind')
        if kind == TIMER_RESOLVE_GRAVITY:
            self._after_removal()
        elif kind == TIMER_RESOLVE_SETTLE:
            self._after_refill()

    def on_phase_changed(self, sender, **kwargs):
        if kwargs.get('new_phase') != GamePhase.GAME_OVER:
            return
        state = get_or_create_resolution_state(self.world)
        if not state.is_processing:
            return
        # Time ran out mid-resolve: snap the grid to a settled state, award nothing.
        cancel_timers(self.world, group=TIMER_GROUP_RESOLVE)
        if state.stage == STAGE_REMOVING:
            collapse_columns(get_board(self.world), self._rng, self._palette)
        settle_board(get_board(self.world))
        positions = list(state.positions)
        self._release()
        logger.info("Resolve of %r aborted by game over", positions)
        self.event_bus.emit(EVENT_BOARD_SETTLED, reason='aborted')
        self.event_bus.emit(EVENT_RESOLVE_ABORTED, positions=positions, reason='game_over')

    def on_game_reset(self, sender, **kwargs):
        cancel_timers(self.world, group=TIMER_GROUP_RESOLVE)
        self._release()

    def _after_removal(self):
        state = get_or_create_resolution_state(self.world)
        if not state.is_processing or state.stage != STAGE_REMOVING:
            return
        board = get_board(self.world)
        moves, spawned = collapse_columns(board, self._rng, self._palette)
        repair_board(board, self._rng, self._palette)
        state.stage = STAGE_SETTLING
        fall_payload = [{'from': move.source, 'to': move.target, 'color': move.color} for move in moves]
        columns = sorted({col for _, col in state.positions})
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=fall_payload, columns=columns)
        self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=spawned)
        schedule_timer(self.world, TIMER_RESOLVE_SETTLE, self.config.settle_delay, group=TIMER_GROUP_RESOLVE)

    def _after_refill(self):
        state = get_or_create_resolution_state(self.world)
        if not state.is_processing or state.stage != STAGE_SETTLING:
            return
        settle_board(get_board(self.world))
        positions = list(state.positions)
        self._release()
        self.event_bus.emit(EVENT_BOARD_SETTLED, reason='resolved')
        points = self.config.match_points
        self.event_bus.emit(EVENT_MATCH_RESOLVED, positions=positions, points=points)
        add_score(self.world, self.event_bus, points, reason='match')

    def _release(self):
        state = get_or_create_resolution_state(self.world)
        state.is_processing = False
        state.stage = None
        state.positions = []

