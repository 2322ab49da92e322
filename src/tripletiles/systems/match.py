from enum import Enum
from typing import Sequence

from esper import World

from tripletiles.components.board import Board, Position
from tripletiles.constants import TILES_PER_MATCH
from tripletiles.events.bus import EVENT_MATCH_FOUND, EVENT_MATCH_REJECTED, EVENT_SELECTION_COMPLETE, EventBus
from tripletiles.systems.board_ops import colors_match, get_board, is_valid_position, tile_at
from tripletiles.utils.selection import clear_selection


class MatchOutcome(Enum):
    MATCH = "match"
    NO_MATCH = "no_match"


def evaluate_selection(board: Board, positions: Sequence[Position]) -> MatchOutcome:
    """Verdict for exactly three distinct, valid positions: same color or not."""
    if len(positions) != TILES_PER_MATCH:
        raise ValueError(f"Expected {TILES_PER_MATCH} positions, got {len(positions)}")
    if len(set(positions)) != len(positions):
        raise ValueError(f"Positions must be distinct: {list(positions)!r}")
    for pos in positions:
        if not is_valid_position(board, pos):
            raise ValueError(f"Position {pos!r} outside {board.size}x{board.size} board")
    if colors_match(board, positions):
        return MatchOutcome.MATCH
    return MatchOutcome.NO_MATCH


class MatchSystem:
    """Evaluates a completed selection, clears it, and hands matches to resolution."""
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_SELECTION_COMPLETE, self.on_selection_complete)

    def on_selection_complete(self, sender, **kwargs):
        positions = [tuple(pos) for pos in kwargs.get('positions') or []]
        if len(positions) != TILES_PER_MATCH:
            return
        board = get_board(self.world)
        outcome = evaluate_selection(board, positions)
        # Selection is cleared for both verdicts before anything else observes the board.
        clear_selection(self.world, self.event_bus, reason=outcome.value)
        if outcome is MatchOutcome.MATCH:
            color = tile_at(board, positions[0]).color
            self.event_bus.emit(EVENT_MATCH_FOUND, positions=positions, color=color)
        else:
            self.event_bus.emit(EVENT_MATCH_REJECTED, positions=positions)
