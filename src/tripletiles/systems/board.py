import logging
import random
from typing import Optional

from esper import World

from tripletiles.components.board import Board, Position
from tripletiles.components.selection import Selection
from tripletiles.config import GameConfig
from tripletiles.constants import SOUND_POP, TILES_PER_MATCH
from tripletiles.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_GAME_RESET,
    EVENT_LEVEL_STARTED,
    EVENT_SELECTION_COMPLETE,
    EVENT_SOUND_REQUEST,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EventBus,
)
from tripletiles.systems.board_ops import create_board, is_valid_position, palette_for
from tripletiles.utils.game_state import accepts_taps, get_game_state
from tripletiles.utils.selection import clear_selection

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and turns tile taps into a toggled selection."""

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
        level = get_game_state(world).level
        self.board_entity = self.world.create_entity(create_board(level, self._rng, self._palette))
        self.selection_entity = self.world.create_entity(Selection())
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_LEVEL_STARTED, self.on_level_started)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def selection(self) -> Selection:
        return self.world.component_for_entity(self.selection_entity, Selection)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not accepts_taps(self.world):
            logger.debug("Tap (%s, %s) dropped: input not accepted", row, col)
            return
        pos: Position = (row, col)
        if not is_valid_position(self.board, pos):
            logger.debug("Tap %r dropped: outside %dx%d board", pos, self.board.size, self.board.size)
            return
        selection = self.selection
        if pos in selection.positions:
            selection.positions.remove(pos)
            self.event_bus.emit(EVENT_TILE_DESELECTED, row=row, col=col, reason='toggle')
            return
        if len(selection.positions) >= TILES_PER_MATCH:
            # Should be unreachable: a full selection is evaluated and cleared immediately.
            logger.warning("Selection overflow %r, clearing", selection.positions)
            clear_selection(self.world, self.event_bus, reason='overflow')
        selection.positions.append(pos)
        self.event_bus.emit(EVENT_SOUND_REQUEST, cue=SOUND_POP, repeat=1)
        self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col, count=len(selection.positions))
        if len(selection.positions) == TILES_PER_MATCH:
            self.event_bus.emit(EVENT_SELECTION_COMPLETE, positions=list(selection.positions))

    def on_level_started(self, sender, **kwargs):
        self.reset_board(kwargs.get('level', get_game_state(self.world).level), reason='level_started')

    def on_game_reset(self, sender, **kwargs):
        self.reset_board(kwargs.get('level', 1), reason='restart')

    def reset_board(self, level: int, *, reason: str) -> Board:
        """Replace the whole grid with a fresh one sized for ``level``."""
        clear_selection(self.world, self.event_bus, reason=reason)
        fresh = create_board(level, self._rng, self._palette)
        board = self.board
        board.size = fresh.size
        board.tiles = fresh.tiles
        board.level = level
        logger.info("Board reset for level %d (%dx%d, %s)", level, board.size, board.size, reason)
        self.event_bus.emit(EVENT_BOARD_RESET, level=level, size=board.size)
        return board

